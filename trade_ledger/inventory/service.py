import logging

from sqlalchemy.orm import Session

from .models import Item, InventoryItem
from .schemas import (
    ItemCreate,
    ItemUpdate,
    AddToInventoryRequest,
    ItemMove,
    MovedItem,
    InventoryValue,
    StackValue,
)
from ..core.enums import ItemType
from ..core.exceptions import NotFoundError, InventoryError
from ..character.service import get_character
from ..currency.pricing import PRICE_PRECISION, price_in_gold

logger = logging.getLogger(__name__)


def get_item(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise NotFoundError("Item", item_id)
    return item


def get_items(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    item_type: ItemType | None = None,
    lootable: bool | None = None,
) -> list[Item]:
    query = db.query(Item)
    if item_type:
        query = query.filter(Item.item_type == item_type)
    if lootable is not None:
        query = query.filter(Item.lootable == lootable)
    return query.order_by(Item.id).offset(skip).limit(limit).all()


def create_item(db: Session, item_data: ItemCreate) -> Item:
    item = Item(**item_data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_item(db: Session, item_id: int, item_data: ItemUpdate) -> Item:
    """Change an item definition. A new price applies to every stack of it."""
    item = get_item(db, item_id)
    for field, value in item_data.model_dump(exclude_unset=True).items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    logger.info(f"Updated item '{item.name}' (id: {item.id}): price {item.price}gp, lootable {item.lootable}")
    return item


# Inventory Management
def get_inventory(db: Session, character_id: int) -> list[InventoryItem]:
    character = get_character(db, character_id)
    return character.inventory_items


def get_inventory_item(db: Session, character_id: int, inventory_item_id: int) -> InventoryItem | None:
    return db.query(InventoryItem).filter(
        InventoryItem.id == inventory_item_id,
        InventoryItem.character_id == character_id,
    ).first()


def _stack_for(db: Session, character_id: int, item_id: int) -> InventoryItem | None:
    return db.query(InventoryItem).filter(
        InventoryItem.character_id == character_id,
        InventoryItem.item_id == item_id,
    ).first()


def add_to_inventory(db: Session, character_id: int, request: AddToInventoryRequest) -> InventoryItem:
    get_character(db, character_id)  # Ensure character exists
    get_item(db, request.item_id)

    existing = _stack_for(db, character_id, request.item_id)
    if existing:
        existing.quantity += request.quantity
        db.commit()
        db.refresh(existing)
        return existing

    inventory_item = InventoryItem(
        character_id=character_id,
        item_id=request.item_id,
        quantity=request.quantity,
    )
    db.add(inventory_item)
    db.commit()
    db.refresh(inventory_item)
    return inventory_item


def remove_from_inventory(db: Session, character_id: int, inventory_item_id: int, quantity: int = 1) -> None:
    get_character(db, character_id)  # Ensure character exists

    inventory_item = get_inventory_item(db, character_id, inventory_item_id)
    if not inventory_item:
        raise NotFoundError("InventoryItem", inventory_item_id)

    if quantity >= inventory_item.quantity:
        db.delete(inventory_item)
    else:
        inventory_item.quantity -= quantity

    db.commit()


def move_items(db: Session, source_id: int, destination_id: int, moves: list[ItemMove]) -> list[MovedItem]:
    """
    Hand stacks from one character to another in a single commit.

    Every move is checked against the source's inventory before anything
    changes. If one stack is gone or short, nothing is moved.
    """
    get_character(db, source_id)
    get_character(db, destination_id)
    if source_id == destination_id:
        raise InventoryError("Cannot move items to the same character")

    requested: dict[int, int] = {}
    for move in moves:
        requested[move.inventory_item_id] = requested.get(move.inventory_item_id, 0) + move.quantity

    stacks: dict[int, InventoryItem] = {}
    for inventory_item_id, quantity in requested.items():
        stack = get_inventory_item(db, source_id, inventory_item_id)
        if not stack or stack.quantity < quantity:
            db.rollback()
            raise InventoryError(
                f"Character {source_id} no longer holds {quantity} of inventory item {inventory_item_id}"
            )
        stacks[inventory_item_id] = stack

    moved: list[MovedItem] = []
    try:
        for move in moves:
            stack = stacks[move.inventory_item_id]
            target = _stack_for(db, destination_id, stack.item_id)
            if target is None:
                target = InventoryItem(character_id=destination_id, item_id=stack.item_id, quantity=0)
                db.add(target)

            target.quantity += move.quantity
            stack.quantity -= move.quantity
            name = stack.item.name
            item_id = stack.item_id
            if stack.quantity == 0:
                db.delete(stack)

            db.flush()
            moved.append(MovedItem(
                source_inventory_item_id=move.inventory_item_id,
                destination_inventory_item_id=target.id,
                item_id=item_id,
                name=name,
                quantity=move.quantity,
            ))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Moved {len(moved)} stacks from {source_id} to {destination_id}")
    return moved


def inventory_value(db: Session, character_id: int, modifier_percent: int = 100) -> InventoryValue:
    """Worth of every stack a character holds, at list price or with a markup."""
    stacks = [
        StackValue(
            inventory_item_id=entry.id,
            name=entry.item.name,
            quantity=entry.quantity,
            unit_price=entry.item.price or 0.0,
            total_gp=price_in_gold(entry.item.price or 0.0, modifier_percent, entry.quantity),
        )
        for entry in get_inventory(db, character_id)
    ]
    return InventoryValue(
        character_id=character_id,
        stacks=stacks,
        total_gp=round(sum(stack.total_gp for stack in stacks), PRICE_PRECISION),
    )
