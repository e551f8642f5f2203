from enum import Enum


class CharacterType(str, Enum):
    PLAYER = "player"
    NPC = "npc"


class CharacterStatus(str, Enum):
    ALIVE = "alive"
    UNCONSCIOUS = "unconscious"
    DEAD = "dead"


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    CONSUMABLE = "consumable"
    QUEST = "quest"
    MISC = "misc"


class Denomination(str, Enum):
    """Coin tiers, highest value first."""

    PLATINUM = "pp"
    GOLD = "gp"
    ELECTRUM = "ep"
    SILVER = "sp"
    COPPER = "cp"


class TradeType(str, Enum):
    BUY = "buy"  # Player buys from the NPC
    SELL = "sell"  # Player sells to the NPC
    LOOT = "loot"  # Player takes from the NPC for free
    GIVE = "give"  # Player hands over to the NPC for free

    @property
    def is_free(self) -> bool:
        return self in (TradeType.LOOT, TradeType.GIVE)

    @property
    def player_to_npc(self) -> bool:
        return self in (TradeType.SELL, TradeType.GIVE)


class SettlementMode(str, Enum):
    CONVERT_TO_REFERENCE = "convert_to_reference"  # Collapse everything into platinum
    DIRECT_DENOMINATION = "direct_denomination"  # Pay in gold or platinum, then smoothen


class EventType(str, Enum):
    TRADE = "trade"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    CURRENCY_DISTRIBUTED = "currency_distributed"
    CURRENCY_LOOTED = "currency_looted"
