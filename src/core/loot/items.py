"""상자에 들어가는 아이템 변형 (닫힌 합 타입)

모든 아이템은 key(인벤토리 집계용 식별자)와 apply(recipient)를 가진다.
변형 집합은 고정이므로 상속 계층 대신 frozen dataclass 나열 + 코덱 dispatch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from src.core.session import GameSession

logger = logging.getLogger(__name__)

# === 회복량 ===
POTION_HP_PER_LEVEL = 25
ETHER_MP_PER_LEVEL = 10

# === 스톤 상승률 ===
STONE_RAISE_RATIO = 0.1  # 10%, 최소 +1


class ItemKey(str, Enum):
    POTION = "potion"
    REMEDY = "remedy"
    ESCAPE = "escape"
    ETHER = "ether"
    HEALTH_STONE = "health_stone"
    MAGIC_STONE = "magic_stone"
    POWER_STONE = "power_stone"
    SPEED_STONE = "speed_stone"
    LEVEL_STONE = "level_stone"
    SWORD = "sword"
    SHIELD = "shield"


class RingKind(str, Enum):
    """반지 종류. 종류별 1개만 존재 (RingPool 참조). 멤버 자체가 인벤토리 key."""

    VOID = "void_ring"
    ATTACK = "attack_ring"
    DEFENSE = "defense_ring"
    SPEED = "speed_ring"
    MAGIC = "magic_ring"
    HEALTH = "health_ring"
    EVADE = "evade_ring"  # 장착 중 적/상자 회피
    REGEN = "regen_ring"
    PROTECT = "protect_ring"
    CHEST = "chest_ring"  # 장착 중 상자 판정 2회
    REVIVE = "revive_ring"
    COUNTER = "counter_ring"
    RULING = "ruling_ring"


class StoneKind(str, Enum):
    HEALTH = "health"
    MAGIC = "magic"
    POWER = "power"
    SPEED = "speed"
    LEVEL = "level"


Key = Union[ItemKey, RingKind]

_STONE_KEYS: dict[StoneKind, ItemKey] = {
    StoneKind.HEALTH: ItemKey.HEALTH_STONE,
    StoneKind.MAGIC: ItemKey.MAGIC_STONE,
    StoneKind.POWER: ItemKey.POWER_STONE,
    StoneKind.SPEED: ItemKey.SPEED_STONE,
    StoneKind.LEVEL: ItemKey.LEVEL_STONE,
}


def _raise_amount(value: int) -> int:
    return max(1, int(value * STONE_RAISE_RATIO))


@dataclass(frozen=True)
class Potion:
    level: int

    @property
    def key(self) -> ItemKey:
        return ItemKey.POTION

    def apply(self, recipient: GameSession) -> str:
        hero = recipient.hero
        before = hero.current_hp
        hero.current_hp = min(hero.max_hp, hero.current_hp + POTION_HP_PER_LEVEL * self.level)
        return f"+{hero.current_hp - before}hp"


@dataclass(frozen=True)
class Ether:
    level: int

    @property
    def key(self) -> ItemKey:
        return ItemKey.ETHER

    def apply(self, recipient: GameSession) -> str:
        hero = recipient.hero
        before = hero.current_mp
        hero.current_mp = min(hero.max_mp, hero.current_mp + ETHER_MP_PER_LEVEL * self.level)
        return f"+{hero.current_mp - before}mp"


@dataclass(frozen=True)
class Remedy:
    @property
    def key(self) -> ItemKey:
        return ItemKey.REMEDY

    def apply(self, recipient: GameSession) -> str:
        healed = recipient.hero.status_effect
        recipient.hero.status_effect = None
        return f"cured {healed}" if healed else "nothing to cure"


@dataclass(frozen=True)
class Escape:
    @property
    def key(self) -> ItemKey:
        return ItemKey.ESCAPE

    def apply(self, recipient: GameSession) -> str:
        recipient.return_home()
        return "returned home"


@dataclass(frozen=True)
class Stone:
    kind: StoneKind

    @property
    def key(self) -> ItemKey:
        return _STONE_KEYS[self.kind]

    def apply(self, recipient: GameSession) -> str:
        hero = recipient.hero
        if self.kind == StoneKind.HEALTH:
            amount = _raise_amount(hero.max_hp)
            hero.max_hp += amount
            hero.current_hp += amount
            return f"+{amount} max hp"
        if self.kind == StoneKind.MAGIC:
            amount = _raise_amount(hero.max_mp)
            hero.max_mp += amount
            hero.current_mp += amount
            return f"+{amount} max mp"
        if self.kind == StoneKind.POWER:
            amount = _raise_amount(hero.strength)
            hero.strength += amount
            return f"+{amount} strength"
        if self.kind == StoneKind.SPEED:
            amount = _raise_amount(hero.speed)
            hero.speed += amount
            return f"+{amount} speed"
        hero.level += 1
        return "+1 level"


@dataclass(frozen=True)
class Ring:
    """드롭/발견된 반지. 사용 = 장착."""

    kind: RingKind

    @property
    def key(self) -> RingKind:
        return self.kind

    def apply(self, recipient: GameSession) -> str:
        """새 반지는 왼손, 왼손 반지는 오른손으로, 오른손 반지는 인벤토리로."""
        hero = recipient.hero
        removed = hero.right_ring
        hero.right_ring = hero.left_ring
        hero.left_ring = self.kind
        if removed is not None:
            recipient.add_item(Ring(removed))
        return f"equipped {self.kind.value}"


Item = Union[Potion, Ether, Remedy, Escape, Stone, Ring]


# === 코덱 (세이브 계층용) ===


def item_to_dict(item: Item) -> dict[str, Any]:
    """Item → JSON 호환 dict"""
    if isinstance(item, Potion):
        return {"type": "potion", "level": item.level}
    if isinstance(item, Ether):
        return {"type": "ether", "level": item.level}
    if isinstance(item, Remedy):
        return {"type": "remedy"}
    if isinstance(item, Escape):
        return {"type": "escape"}
    if isinstance(item, Stone):
        return {"type": "stone", "kind": item.kind.value}
    if isinstance(item, Ring):
        return {"type": "ring", "kind": item.kind.value}
    raise ValueError(f"Unknown item: {item!r}")


def item_from_dict(raw: dict[str, Any]) -> Item:
    """dict → Item. 알 수 없는 type은 ValueError."""
    item_type = raw.get("type")
    if item_type == "potion":
        return Potion(int(raw["level"]))
    if item_type == "ether":
        return Ether(int(raw["level"]))
    if item_type == "remedy":
        return Remedy()
    if item_type == "escape":
        return Escape()
    if item_type == "stone":
        return Stone(StoneKind(raw["kind"]))
    if item_type == "ring":
        return Ring(RingKind(raw["kind"]))
    raise ValueError(f"Unknown item type: {item_type}")


def parse_key(value: str) -> Key:
    """문자열 → ItemKey 또는 RingKind. 둘 다 아니면 ValueError."""
    try:
        return ItemKey(value)
    except ValueError:
        return RingKind(value)
