from sqlalchemy import Column, Integer, String, Enum, CheckConstraint
from sqlalchemy.orm import relationship

from ..database import Base
from ..core.enums import CharacterType, CharacterStatus, Denomination
from ..currency.schemas import Currency, PriceModifier


class Character(Base):
    __tablename__ = "characters"
    __table_args__ = tuple(
        CheckConstraint(f"{d.value} >= 0", name=f"ck_characters_{d.value}") for d in Denomination
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    character_type = Column(Enum(CharacterType), default=CharacterType.PLAYER)
    status = Column(Enum(CharacterStatus), default=CharacterStatus.ALIVE)

    # Characters in the same zone share loot
    zone_id = Column(Integer, nullable=True, index=True)

    # Coin purse, always whole coins
    pp = Column(Integer, default=0, nullable=False)
    gp = Column(Integer, default=0, nullable=False)
    ep = Column(Integer, default=0, nullable=False)
    sp = Column(Integer, default=0, nullable=False)
    cp = Column(Integer, default=0, nullable=False)

    # Merchant markup in percent (NULL = use the configured default)
    buy_modifier = Column(Integer, nullable=True)
    sell_modifier = Column(Integer, nullable=True)

    inventory_items = relationship(
        "InventoryItem",
        back_populates="character",
        cascade="all, delete-orphan",
        order_by="InventoryItem.id",
    )

    @property
    def currency(self) -> Currency:
        return Currency(**{d.value: getattr(self, d.value) or 0 for d in Denomination})

    def set_currency(self, currency: Currency) -> None:
        for denomination in Denomination:
            setattr(self, denomination.value, int(currency.amount(denomination)))

    @property
    def price_modifier(self) -> PriceModifier | None:
        if self.buy_modifier is None and self.sell_modifier is None:
            return None
        return PriceModifier(
            buy=self.buy_modifier if self.buy_modifier is not None else 100,
            sell=self.sell_modifier if self.sell_modifier is not None else 100,
        )
