"""GameSession / Hero 테스트"""

import pytest

from src.core.loot.equipment import Equipment
from src.core.loot.items import ItemKey, Potion, Ring, RingKind
from src.core.loot.ring_pool import RingPool
from src.core.session import GameSession, Hero


class TestHero:
    @pytest.mark.parametrize("level,expected", [(1, 1), (4, 1), (5, 5), (14, 10)])
    def test_rounded_level(self, level, expected):
        assert Hero(level=level).rounded_level() == expected

    def test_modifier_flags(self):
        hero = Hero()
        assert not hero.enemies_evaded()
        assert not hero.double_chests()
        hero.right_ring = RingKind.EVADE
        hero.left_ring = RingKind.CHEST
        assert hero.enemies_evaded()
        assert hero.double_chests()

    def test_restore(self):
        hero = Hero(max_hp=40, current_hp=1, status_effect="burn")
        hero.restore()
        assert hero.current_hp == 40
        assert hero.status_effect is None


class TestInventory:
    def test_add_and_count(self):
        game = GameSession(session_id="s")
        game.add_item(Potion(1))
        game.add_item(Potion(5))
        game.add_item(Ring(RingKind.VOID))
        assert game.inventory_counts() == {ItemKey.POTION: 2, RingKind.VOID: 1}

    def test_use_item_by_string(self):
        game = GameSession(session_id="s", hero=Hero(max_hp=100, current_hp=50))
        game.add_item(Potion(1))
        assert game.use_item("potion") == "+25hp"
        assert ItemKey.POTION not in game.inventory

    def test_use_missing_item(self):
        game = GameSession(session_id="s")
        with pytest.raises(KeyError):
            game.use_item(ItemKey.ETHER)

    def test_drain(self):
        game = GameSession(session_id="s")
        game.add_item(Potion(1))
        assert game.drain_inventory() == [Potion(1)]
        assert game.inventory == {}


class TestSessionCodec:
    def test_round_trip(self):
        game = GameSession(
            session_id="s",
            hero=Hero(level=7, sword=Equipment.sword(5), left_ring=RingKind.REGEN),
            gold=300,
            distance=9,
            ring_pool=RingPool([RingKind.SPEED, RingKind.RULING]),
        )
        game.add_item(Potion(5))
        game.add_item(Ring(RingKind.VOID))

        restored = GameSession.from_dict(game.to_dict())

        assert restored.hero == game.hero
        assert restored.gold == 300
        assert restored.distance == 9
        assert restored.ring_pool.kinds() == {RingKind.SPEED, RingKind.RULING}
        assert restored.inventory_counts() == game.inventory_counts()
