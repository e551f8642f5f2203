from sqlalchemy.orm import Session

from .models import Character
from .schemas import CharacterCreate, CharacterUpdate, CurrencyUpdate, Wealth
from ..config import settings
from ..core.enums import CharacterType
from ..core.exceptions import NotFoundError
from ..currency.converter import PRECISION, balance_from_raw, to_reference_unit
from ..currency.schemas import DenominationRates, PriceModifier


def get_character(db: Session, character_id: int) -> Character:
    character = db.query(Character).filter(Character.id == character_id).first()
    if not character:
        raise NotFoundError("Character", character_id)
    return character


def get_characters(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    character_type: CharacterType | None = None,
    zone_id: int | None = None,
) -> list[Character]:
    query = db.query(Character)
    if character_type:
        query = query.filter(Character.character_type == character_type)
    if zone_id is not None:
        query = query.filter(Character.zone_id == zone_id)
    return query.offset(skip).limit(limit).all()


def create_character(db: Session, character_data: CharacterCreate) -> Character:
    character = Character(
        name=character_data.name,
        character_type=character_data.character_type,
        zone_id=character_data.zone_id,
    )
    character.set_currency(balance_from_raw(character_data.currency.model_dump()))
    if character_data.price_modifier:
        character.buy_modifier = character_data.price_modifier.buy
        character.sell_modifier = character_data.price_modifier.sell

    db.add(character)
    db.commit()
    db.refresh(character)
    return character


def update_character(db: Session, character_id: int, character_data: CharacterUpdate) -> Character:
    character = get_character(db, character_id)
    update_data = character_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(character, field, value)
    db.commit()
    db.refresh(character)
    return character


def delete_character(db: Session, character_id: int) -> None:
    character = get_character(db, character_id)
    db.delete(character)
    db.commit()


def update_currency(db: Session, character_id: int, currency_data: CurrencyUpdate) -> Character:
    """Overwrite a character's purse."""
    character = get_character(db, character_id)
    character.set_currency(balance_from_raw(currency_data.model_dump()))
    db.commit()
    db.refresh(character)
    return character


def set_price_modifier(db: Session, character_id: int, modifier: PriceModifier) -> Character:
    character = get_character(db, character_id)
    character.buy_modifier = modifier.buy
    character.sell_modifier = modifier.sell
    db.commit()
    db.refresh(character)
    return character


def get_wealth(db: Session, character_id: int, rates: DenominationRates | None = None) -> Wealth:
    character = get_character(db, character_id)
    rates = rates or settings.ledger().rates
    platinum = to_reference_unit(character.currency, rates)
    return Wealth(
        character_id=character.id,
        currency=character.currency,
        platinum=round(platinum, PRECISION),
        gold=round(platinum / rates.pp, PRECISION),
    )
