"""Item definitions and the stacks characters hold."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..core.enums import ItemType
from . import service
from .schemas import (
    AddToInventoryRequest,
    InventoryItemResponse,
    InventoryValue,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)

# Priced goods: /items
router = APIRouter(prefix="/items", tags=["items"])

# Stacks held by a character: /character/{character_id}/inventory
inventory_router = APIRouter(prefix="/character/{character_id}/inventory", tags=["inventory"])


@router.post("/", response_model=ItemResponse, status_code=201)
def create_item(item: ItemCreate, db: Session = Depends(get_db)):
    """Create an item with its list price in gold (0.1 = one silver piece)."""
    return service.create_item(db, item)


@router.get("/", response_model=list[ItemResponse])
def list_items(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    item_type: ItemType | None = None,
    lootable: bool | None = None,
    db: Session = Depends(get_db),
):
    return service.get_items(db, skip, limit, item_type, lootable)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return service.get_item(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(item_id: int, item: ItemUpdate, db: Session = Depends(get_db)):
    """Re-price an item or mark it as (not) lootable."""
    return service.update_item(db, item_id, item)


@inventory_router.get("", response_model=list[InventoryItemResponse])
def get_inventory(character_id: int, db: Session = Depends(get_db)):
    return service.get_inventory(db, character_id)


@inventory_router.post("", response_model=InventoryItemResponse, status_code=201)
def add_to_inventory(character_id: int, request: AddToInventoryRequest, db: Session = Depends(get_db)):
    """Put items into a character's inventory, stacking with what is already there."""
    return service.add_to_inventory(db, character_id, request)


@inventory_router.get("/value", response_model=InventoryValue)
def inventory_value(
    character_id: int,
    modifier: int = Query(100, ge=0, description="Markup in percent"),
    db: Session = Depends(get_db),
):
    """What the character's stacks are worth, e.g. to a merchant's buy markup."""
    return service.inventory_value(db, character_id, modifier)


@inventory_router.delete("/{inventory_item_id}", status_code=204)
def remove_from_inventory(
    character_id: int,
    inventory_item_id: int,
    quantity: int = Query(1, ge=1),
    db: Session = Depends(get_db),
):
    """Drop some or all of a stack."""
    service.remove_from_inventory(db, character_id, inventory_item_id, quantity)
