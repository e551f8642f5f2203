from sqlalchemy import Column, Integer, String, Float, Boolean, Enum, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from ..database import Base
from ..core.enums import ItemType


class Item(Base):
    __tablename__ = "items"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_items_price"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    item_type = Column(Enum(ItemType), nullable=False, default=ItemType.MISC)
    weight = Column(Float, default=0.0)
    price = Column(Float, default=0.0)  # List price in gold, may be fractional (0.1 = 1sp)
    lootable = Column(Boolean, default=True)  # Quest items and the like stay put on "loot all"

    inventory_items = relationship("InventoryItem", back_populates="item")


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity"),)

    id = Column(Integer, primary_key=True, index=True)
    character_id = Column(Integer, ForeignKey("characters.id"), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    quantity = Column(Integer, default=1)

    character = relationship("Character", back_populates="inventory_items")
    item = relationship("Item", back_populates="inventory_items")
