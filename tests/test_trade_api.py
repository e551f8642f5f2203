import threading

import pytest

from trade_ledger.character.models import Character
from trade_ledger.character.service import get_character
from trade_ledger.core.exceptions import NotFoundError
from trade_ledger.currency import Currency
from trade_ledger.trade import adapters
from trade_ledger.trade.adapters import SqlActorStore


def create_character(client, name, **fields):
    response = client.post("/character/", json={"name": name, **fields})
    assert response.status_code == 201
    return response.json()["id"]


def give_item(client, character_id, name, price, quantity=1, lootable=True):
    item_id = client.post("/items/", json={"name": name, "price": price, "lootable": lootable}).json()["id"]
    response = client.post(f"/character/{character_id}/inventory", json={"item_id": item_id, "quantity": quantity})
    return response.json()["id"]


def currency_of(client, character_id):
    return client.get(f"/character/{character_id}").json()["currency"]


def inventory_of(client, character_id):
    return {entry["item"]["name"]: entry["quantity"] for entry in client.get(f"/character/{character_id}/inventory").json()}


def purse(**coins):
    return {"pp": 0, "gp": 0, "ep": 0, "sp": 0, "cp": 0, **coins}


class TestTradeBatch:
    def test_buy_from_merchant(self, client):
        merchant = create_character(client, "Merchant", character_type="npc", currency={"gp": 10})
        player = create_character(client, "Hero", currency={"gp": 5})
        sword = give_item(client, merchant, "Sword", price=3, quantity=2)

        response = client.post("/trade/batch", json={
            "npc_id": merchant,
            "player_id": player,
            "trades": {"buy": [{"id": sword, "quantity": 1}]},
        })

        assert response.status_code == 200
        outcomes = response.json()
        assert len(outcomes) == 1
        assert outcomes[0]["success"] is True
        assert outcomes[0]["cost_gp"] == 3
        assert currency_of(client, player) == purse(gp=2)
        assert currency_of(client, merchant) == purse(gp=13)
        assert inventory_of(client, player) == {"Sword": 1}
        assert inventory_of(client, merchant) == {"Sword": 1}

        events = client.get("/events/?event_type=trade").json()
        assert len(events) == 1
        assert events[0]["character_id"] == player
        assert events[0]["counterparty_id"] == merchant
        assert events[0]["cost_gp"] == 3

    def test_sell_at_merchant_buy_price(self, client):
        merchant = create_character(
            client, "Fence", character_type="npc", currency={"gp": 10},
            price_modifier={"buy": 50, "sell": 100},
        )
        player = create_character(client, "Hero")
        gem = give_item(client, player, "Gem", price=4, quantity=2)

        outcomes = client.post("/trade/batch", json={
            "npc_id": merchant,
            "player_id": player,
            "trades": {"buy": [], "sell": [{"id": gem, "quantity": 2}]},
        }).json()

        assert [outcome["trade_type"] for outcome in outcomes] == ["sell"]
        assert outcomes[0]["cost_gp"] == 4
        assert currency_of(client, player) == purse(gp=4)
        assert currency_of(client, merchant) == purse(gp=6)
        assert inventory_of(client, merchant) == {"Gem": 2}

    def test_broke_player_is_refused(self, client):
        merchant = create_character(client, "Merchant", character_type="npc")
        player = create_character(client, "Pauper")
        sword = give_item(client, merchant, "Sword", price=3)

        outcomes = client.post("/trade/batch", json={
            "npc_id": merchant,
            "player_id": player,
            "trades": {"buy": [{"id": sword, "quantity": 1}]},
        }).json()

        assert outcomes[0]["success"] is False
        assert inventory_of(client, player) == {}
        assert inventory_of(client, merchant) == {"Sword": 1}

        events = client.get("/events/?event_type=insufficient_funds").json()
        assert len(events) == 1
        assert events[0]["character_id"] == player
        assert "Pauper" in events[0]["description"]
        assert client.get("/events/?event_type=trade").json() == []


class TestTransaction:
    def test_buy_a_single_stack(self, client):
        merchant = create_character(client, "Fletcher", character_type="npc")
        player = create_character(client, "Archer", currency={"gp": 2})
        arrows = give_item(client, merchant, "Arrows", price=0.05, quantity=20)

        response = client.post("/trade/transaction", json={
            "seller_id": merchant,
            "buyer_id": player,
            "item_id": arrows,
            "quantity": 30,
        })

        assert response.status_code == 200
        outcome = response.json()
        assert outcome["success"] is True
        assert outcome["cost_gp"] == 1
        assert currency_of(client, player) == purse(gp=1)
        assert currency_of(client, merchant) == purse(gp=1)
        assert inventory_of(client, player) == {"Arrows": 20}

    def test_fractional_price_is_paid_in_small_coins(self, client):
        merchant = create_character(client, "Baker", character_type="npc")
        player = create_character(client, "Hungry", currency={"gp": 3})
        bread = give_item(client, merchant, "Bread", price=1.25)

        client.post("/trade/transaction", json={"seller_id": merchant, "buyer_id": player, "item_id": bread})

        assert currency_of(client, player) == purse(gp=1, ep=1, sp=2, cp=5)
        assert currency_of(client, merchant) == purse(gp=1, sp=2, cp=5)


    def test_seller_markup_always_applies(self, client):
        merchant = create_character(
            client, "Greedy Gus", character_type="npc",
            price_modifier={"buy": 50, "sell": 200},
        )
        player = create_character(client, "Hero", currency={"gp": 10})
        sword = give_item(client, merchant, "Sword", price=4)

        outcome = client.post("/trade/transaction", json={
            "seller_id": merchant,
            "buyer_id": player,
            "item_id": sword,
            "trade_type": "sell",
        }).json()

        assert outcome["trade_type"] == "buy"
        assert outcome["cost_gp"] == 8
        assert currency_of(client, player) == purse(gp=2)
        assert currency_of(client, merchant) == purse(gp=8)
        assert inventory_of(client, player) == {"Sword": 1}

class TestDistribution:
    def test_split_between_players_in_the_zone(self, client):
        chest = create_character(client, "Chest", character_type="npc", zone_id=1, currency={"gp": 10, "sp": 3})
        players = [create_character(client, name, zone_id=1) for name in ("A", "B", "C")]
        fallen = create_character(client, "Fallen", zone_id=1)
        client.put(f"/character/{fallen}", json={"status": "dead"})
        elsewhere = create_character(client, "Elsewhere", zone_id=2)

        response = client.post(f"/trade/distribute/{chest}")

        assert response.status_code == 200
        distribution = response.json()["distribution"]
        assert distribution["distributed"] is True
        assert distribution["recipient_ids"] == players
        assert distribution["share"] == purse(gp=3, sp=1)
        assert distribution["remainder"] == purse(gp=1)
        for player in players:
            assert currency_of(client, player) == purse(gp=3, sp=1)
        assert currency_of(client, fallen) == purse()
        assert currency_of(client, elsewhere) == purse()
        assert currency_of(client, chest) == purse()
        assert len(client.get("/events/?event_type=currency_distributed").json()) == 1

    def test_nobody_around(self, client):
        chest = create_character(client, "Chest", character_type="npc", zone_id=7, currency={"gp": 10})

        distribution = client.post(f"/trade/distribute/{chest}").json()["distribution"]

        assert distribution["distributed"] is False
        assert currency_of(client, chest) == purse(gp=10)

    def test_unknown_source(self, client):
        assert client.post("/trade/distribute/9999").status_code == 404


class TestLoot:
    def test_loot_coins(self, client):
        corpse = create_character(client, "Goblin", character_type="npc", currency={"sp": 12, "cp": 3})
        player = create_character(client, "Hero", currency={"gp": 1})

        response = client.post("/trade/loot", json={"source_id": corpse, "destination_id": player})

        assert response.status_code == 200
        assert response.json()["moved"] == purse(sp=12, cp=3)
        assert currency_of(client, player) == purse(gp=1, sp=12, cp=3)
        assert currency_of(client, corpse) == purse()

    def test_loot_everything(self, client):
        chest = create_character(client, "Chest", character_type="npc", currency={"gp": 7})
        player = create_character(client, "Hero")
        give_item(client, chest, "Sword", price=3)
        give_item(client, chest, "Rope", price=0.1, quantity=2)
        give_item(client, chest, "Sealed Letter", price=0, lootable=False)

        response = client.post("/trade/loot-all", json={"source_id": chest, "destination_id": player})

        assert response.status_code == 200
        result = response.json()
        assert result["items"]["success"] is True
        assert result["items"]["cost_gp"] == 0
        assert inventory_of(client, player) == {"Sword": 1, "Rope": 2}
        assert inventory_of(client, chest) == {"Sealed Letter": 1}
        assert currency_of(client, player) == purse(gp=7)
        assert currency_of(client, chest) == purse()


class TestSelfTrade:
    def test_batch_with_itself_is_rejected(self, client):
        hero = create_character(client, "Hero", currency={"gp": 5})
        gem = give_item(client, hero, "Gem", price=4)

        response = client.post("/trade/batch", json={
            "npc_id": hero,
            "player_id": hero,
            "trades": {"sell": [{"id": gem, "quantity": 1}]},
        })

        assert response.status_code == 422
        assert currency_of(client, hero) == purse(gp=5)
        assert inventory_of(client, hero) == {"Gem": 1}
        assert client.get("/events/").json() == []

    def test_buying_from_itself_is_rejected(self, client):
        hero = create_character(client, "Hero", currency={"gp": 5})
        gem = give_item(client, hero, "Gem", price=4)

        response = client.post("/trade/transaction", json={"seller_id": hero, "buyer_id": hero, "item_id": gem})

        assert response.status_code == 422
        assert currency_of(client, hero) == purse(gp=5)

    @pytest.mark.parametrize("route", ["/trade/loot", "/trade/loot-all"])
    def test_looting_itself_is_rejected(self, client, route):
        hero = create_character(client, "Hero", currency={"gp": 5, "cp": 3})

        response = client.post(route, json={"source_id": hero, "destination_id": hero})

        assert response.status_code == 422
        assert currency_of(client, hero) == purse(gp=5, cp=3)


class TestSqlCollaborators:
    @pytest.mark.asyncio
    async def test_purses_saved_in_one_commit(self, db):
        hero = Character(name="Hero", gp=5)
        db.add(hero)
        db.commit()
        store = SqlActorStore(db)

        with pytest.raises(NotFoundError):
            await store.save_currencies({hero.id: Currency(gp=50), 9999: Currency(gp=1)})

        assert (await store.load(hero.id)).currency == Currency(gp=5)

    @pytest.mark.asyncio
    async def test_session_work_runs_off_the_event_loop(self, db, monkeypatch):
        hero = Character(name="Hero", gp=5)
        db.add(hero)
        db.commit()
        threads = []

        def recording_get_character(session, character_id):
            threads.append(threading.get_ident())
            return get_character(session, character_id)

        monkeypatch.setattr(adapters, "get_character", recording_get_character)
        store = SqlActorStore(db)

        await store.load(hero.id)
        await store.save_currencies({hero.id: Currency(gp=7)})

        assert len(threads) == 2
        assert threading.get_ident() not in threads
        assert (await store.load(hero.id)).currency == Currency(gp=7)
