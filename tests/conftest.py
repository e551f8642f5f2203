import asyncio
import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from trade_ledger.database import Base, get_db
from trade_ledger.main import app
from trade_ledger.core.exceptions import InventoryError
from trade_ledger.currency.schemas import Currency, Distribution
from trade_ledger.trade.schemas import TradeItem, TradeOutcome, TradeParty

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# In-memory collaborators for the trade orchestrator

class InMemoryActorStore:
    def __init__(self, *parties: TradeParty):
        self.parties = {party.id: party for party in parties}
        self.saves: list[tuple] = []

    async def load(self, actor_id):
        await asyncio.sleep(0)
        return self.parties[actor_id].model_copy(deep=True)

    async def save_currencies(self, balances) -> None:
        await asyncio.sleep(0)
        for actor_id, currency in balances.items():
            self.saves.append((actor_id, currency))
            self.parties[actor_id] = self.parties[actor_id].model_copy(update={"currency": currency})

    def currency(self, actor_id) -> Currency:
        return self.parties[actor_id].currency

    def quantity(self, actor_id, item_id) -> int:
        held = self.parties[actor_id].held(item_id)
        return held.quantity if held else 0


class InMemoryItemMover:
    def __init__(self, store: InMemoryActorStore):
        self.store = store
        self.calls: list[tuple] = []

    async def move_items(self, source, destination, items):
        self.calls.append((source.id, destination.id, items))
        source_party = self.store.parties[source.id]
        destination_party = self.store.parties[destination.id]

        source_items = []
        for held in source_party.items:
            moved = sum(item.quantity for item in items if item.id == held.id)
            if held.quantity - moved > 0:
                source_items.append(held.model_copy(update={"quantity": held.quantity - moved}))

        destination_items = [held.model_copy() for held in destination_party.items]
        for item in items:
            existing = next((held for held in destination_items if held.id == item.id), None)
            if existing:
                existing.quantity += item.quantity
            else:
                destination_items.append(item.model_copy())

        self.store.parties[source.id] = source_party.model_copy(update={"items": source_items})
        self.store.parties[destination.id] = destination_party.model_copy(update={"items": destination_items})
        return list(items)


class BrokenItemMover:
    """Fails every hand-over, as if the stock was taken after the snapshot."""

    def __init__(self):
        self.calls = 0

    async def move_items(self, source, destination, items):
        self.calls += 1
        raise InventoryError(f"Character {source.id} no longer holds the items")


class RecordingReporter:
    def __init__(self):
        self.trades: list[TradeOutcome] = []
        self.insufficient_funds: list[tuple] = []
        self.distributions: list[Distribution] = []
        self.looted: list[Currency] = []

    async def report_trade(self, outcome):
        self.trades.append(outcome)

    async def report_insufficient_funds(self, actor, message):
        self.insufficient_funds.append((actor.id, message))

    async def report_distribution(self, source, distribution):
        self.distributions.append(distribution)

    async def report_currency_looted(self, source, destination, moved):
        self.looted.append(moved)


class StaticRecipients:
    def __init__(self, *recipient_ids):
        self.recipient_ids = list(recipient_ids)

    async def get_eligible_recipients(self, source):
        return list(self.recipient_ids)


@pytest.fixture
def merchant():
    return TradeParty(
        id=1,
        name="Merchant",
        currency=Currency(gp=10),
        items=[
            TradeItem(id="sword", name="Sword", price=3, quantity=2),
            TradeItem(id="arrows", name="Arrows", price=0.05, quantity=20),
            TradeItem(id="letter", name="Sealed Letter", price=0, quantity=1, lootable=False),
        ],
    )


@pytest.fixture
def player():
    return TradeParty(
        id=2,
        name="Hero",
        currency=Currency(gp=5),
        items=[TradeItem(id="gem", name="Gem", price=4, quantity=2)],
    )
