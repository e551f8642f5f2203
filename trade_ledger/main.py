import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .database import engine, Base

# Tables must be registered on Base before create_all
from .character.models import Character
from .inventory.models import Item, InventoryItem
from .event.models import GameEvent

from .character.router import router as character_router
from .inventory.router import router as item_router, inventory_router
from .event.router import router as event_router
from .trade.router import router as trade_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    description="""
## Tabletop Trade Ledger API

Buying, selling, looting and splitting coins between characters:

- **Characters**: Player characters and merchant NPCs with a five-coin purse (pp, gp, ep, sp, cp)
- **Items**: Goods with a list price in gold, held by characters in stacks
- **Trade**: Staged buy/sell/loot/give batches and single purchases with merchant markups
- **Loot**: Take a container's coins or everything lootable in it
- **Distribution**: Split a purse evenly between the players standing in the same zone
- **Events**: A log of every trade, refused payment and split

### Settlement
Payments are made in gold when the buyer has enough gold coins, otherwise in
platinum, and both purses are then broken down into whole coins. Set
`CONVERT_CURRENCY=true` to collapse purses into platinum instead.

### Trading with a merchant
1. Look at the merchant's stock with `GET /character/{id}/inventory`
2. Stage a batch with `POST /trade/batch` (`buy`, `sell`, `loot`, `give`)
3. Each trade type comes back with its own outcome; refused payments show up in `GET /events`
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(character_router)
app.include_router(inventory_router)
app.include_router(item_router)
app.include_router(event_router)
app.include_router(trade_router)

logger.info(f"{settings.app_name} ready, settlement mode {settings.ledger().settlement_mode.value}")


@app.get("/", tags=["root"])
def root():
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health", tags=["root"])
def health_check():
    """Liveness plus the settlement mode in effect."""
    return {"status": "healthy", "settlement_mode": settings.ledger().settlement_mode.value}
