from pydantic import BaseModel, Field

from ..core.enums import ItemType


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    item_type: ItemType = ItemType.MISC
    weight: float = Field(default=0.0, ge=0)
    price: float = Field(default=0.0, ge=0)
    lootable: bool = True


class ItemUpdate(BaseModel):
    """Re-price an item or change whether it can be looted."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float | None = Field(default=None, ge=0)
    lootable: bool | None = None


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str | None
    item_type: ItemType
    weight: float
    price: float
    lootable: bool

    class Config:
        from_attributes = True


class InventoryItemResponse(BaseModel):
    id: int
    item_id: int
    quantity: int
    item: ItemResponse

    class Config:
        from_attributes = True


class AddToInventoryRequest(BaseModel):
    item_id: int
    quantity: int = Field(default=1, ge=1)


class ItemMove(BaseModel):
    """One stack to hand over: an inventory entry of the source and how many."""

    inventory_item_id: int
    quantity: int = Field(..., ge=1)


class MovedItem(BaseModel):
    source_inventory_item_id: int
    destination_inventory_item_id: int
    item_id: int
    name: str
    quantity: int


class StackValue(BaseModel):
    inventory_item_id: int
    name: str
    quantity: int
    unit_price: float
    total_gp: float


class InventoryValue(BaseModel):
    """What a character's stacks are worth at list price."""

    character_id: int
    stacks: list[StackValue]
    total_gp: float
