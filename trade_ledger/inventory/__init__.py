from .router import router, inventory_router
from .models import Item, InventoryItem
from .schemas import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    InventoryItemResponse,
    InventoryValue,
    AddToInventoryRequest,
    ItemMove,
    MovedItem,
)

__all__ = [
    "router",
    "inventory_router",
    "Item",
    "InventoryItem",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "InventoryItemResponse",
    "InventoryValue",
    "AddToInventoryRequest",
    "ItemMove",
    "MovedItem",
]
