from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..core.enums import CharacterType
from ..currency.schemas import PriceModifier
from . import service
from .schemas import CharacterCreate, CharacterUpdate, CharacterResponse, CurrencyUpdate, Wealth

router = APIRouter(prefix="/character", tags=["character"])


@router.post("/", response_model=CharacterResponse, status_code=201)
def create_character(character: CharacterCreate, db: Session = Depends(get_db)):
    """
    Create a player character or a merchant NPC.

    - **currency**: starting purse in whole coins
    - **price_modifier**: merchant markup in percent, `buy` when players sell to it, `sell` when they buy
    - **zone_id**: characters in the same zone share distributed coins
    """
    return service.create_character(db, character)


@router.get("/", response_model=list[CharacterResponse])
def list_characters(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    character_type: CharacterType | None = None,
    zone_id: int | None = None,
    db: Session = Depends(get_db),
):
    return service.get_characters(db, skip, limit, character_type, zone_id)


@router.get("/{character_id}", response_model=CharacterResponse)
def get_character(character_id: int, db: Session = Depends(get_db)):
    return service.get_character(db, character_id)


@router.put("/{character_id}", response_model=CharacterResponse)
def update_character(character_id: int, character: CharacterUpdate, db: Session = Depends(get_db)):
    """Rename, move to another zone, or change status (only living players share loot)."""
    return service.update_character(db, character_id, character)


@router.delete("/{character_id}", status_code=204)
def delete_character(character_id: int, db: Session = Depends(get_db)):
    service.delete_character(db, character_id)


@router.put("/{character_id}/currency", response_model=CharacterResponse)
def update_currency(character_id: int, currency: CurrencyUpdate, db: Session = Depends(get_db)):
    """Overwrite the purse. Coins are whole and never negative."""
    return service.update_currency(db, character_id, currency)


@router.get("/{character_id}/wealth", response_model=Wealth)
def get_wealth(character_id: int, db: Session = Depends(get_db)):
    """The purse summed up in platinum and in gold at the configured rates."""
    return service.get_wealth(db, character_id)


@router.put("/{character_id}/price-modifier", response_model=CharacterResponse)
def set_price_modifier(character_id: int, modifier: PriceModifier, db: Session = Depends(get_db)):
    return service.set_price_modifier(db, character_id, modifier)
