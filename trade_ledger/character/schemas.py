from pydantic import BaseModel, Field

from ..core.enums import CharacterType, CharacterStatus
from ..currency.schemas import Currency, PriceModifier


class CurrencyUpdate(BaseModel):
    pp: int = Field(default=0, ge=0)
    gp: int = Field(default=0, ge=0)
    ep: int = Field(default=0, ge=0)
    sp: int = Field(default=0, ge=0)
    cp: int = Field(default=0, ge=0)


class CharacterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    character_type: CharacterType = CharacterType.PLAYER
    zone_id: int | None = None
    # Starting purse
    currency: CurrencyUpdate = Field(default_factory=CurrencyUpdate)
    price_modifier: PriceModifier | None = None


class CharacterUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    character_type: CharacterType | None = None
    status: CharacterStatus | None = None
    zone_id: int | None = None


class CharacterResponse(BaseModel):
    id: int
    name: str
    character_type: CharacterType
    status: CharacterStatus
    zone_id: int | None
    currency: Currency
    price_modifier: PriceModifier | None

    class Config:
        from_attributes = True


class Wealth(BaseModel):
    """A purse and what it adds up to."""

    character_id: int
    currency: Currency
    platinum: float = Field(..., description="Total value in platinum pieces")
    gold: float = Field(..., description="Total value in gold pieces")
