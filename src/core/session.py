"""게임 세션 상태 — 루트 엔진이 읽고 쓰는 호스트 측 상태

레벨/거리/장비/반지/인벤토리/골드/반지 풀.
전투, 이동, 스탯 성장 규칙은 이 모듈의 범위 밖이다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from src.core.loot.equipment import Equipment
from src.core.loot.items import (
    Item,
    ItemKey,
    Key,
    RingKind,
    item_from_dict,
    item_to_dict,
    parse_key,
)
from src.core.loot.ring_pool import RingPool


@dataclass
class Hero:
    """플레이어 캐릭터"""

    level: int = 1
    max_hp: int = 50
    current_hp: int = 50
    max_mp: int = 20
    current_mp: int = 20
    strength: int = 10
    speed: int = 5
    status_effect: Optional[str] = None  # "poison", "burn", ...

    sword: Optional[Equipment] = None
    shield: Optional[Equipment] = None
    left_ring: Optional[RingKind] = None
    right_ring: Optional[RingKind] = None

    def rounded_level(self) -> int:
        """5 단위 내림 레벨 (최소 1). 생성 아이템 레벨에 사용."""
        return max(1, (self.level // 5) * 5)

    def is_ring_equipped(self, kind: RingKind) -> bool:
        return kind in (self.left_ring, self.right_ring)

    def enemies_evaded(self) -> bool:
        """회피 반지 장착 중 → 보상 생성 차단"""
        return self.is_ring_equipped(RingKind.EVADE)

    def double_chests(self) -> bool:
        """상자 반지 장착 중 → 보상 판정 2회"""
        return self.is_ring_equipped(RingKind.CHEST)

    def restore(self) -> None:
        self.current_hp = self.max_hp
        self.current_mp = self.max_mp
        self.status_effect = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "max_hp": self.max_hp,
            "current_hp": self.current_hp,
            "max_mp": self.max_mp,
            "current_mp": self.current_mp,
            "strength": self.strength,
            "speed": self.speed,
            "status_effect": self.status_effect,
            "sword": self.sword.to_dict() if self.sword else None,
            "shield": self.shield.to_dict() if self.shield else None,
            "left_ring": self.left_ring.value if self.left_ring else None,
            "right_ring": self.right_ring.value if self.right_ring else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Hero:
        left = raw.get("left_ring")
        right = raw.get("right_ring")
        return cls(
            level=int(raw["level"]),
            max_hp=int(raw["max_hp"]),
            current_hp=int(raw["current_hp"]),
            max_mp=int(raw["max_mp"]),
            current_mp=int(raw["current_mp"]),
            strength=int(raw["strength"]),
            speed=int(raw["speed"]),
            status_effect=raw.get("status_effect"),
            sword=Equipment.from_dict(raw.get("sword")),
            shield=Equipment.from_dict(raw.get("shield")),
            left_ring=RingKind(left) if left else None,
            right_ring=RingKind(right) if right else None,
        )


@dataclass
class GameSession:
    """세션 1개 = 플레이 1회. 인벤토리는 key별 스택."""

    session_id: str
    hero: Hero = field(default_factory=Hero)
    inventory: dict[Key, list[Item]] = field(default_factory=dict)
    gold: int = 0
    distance: int = 0  # 집으로부터의 거리
    ring_pool: RingPool = field(default_factory=RingPool.full)

    def add_item(self, item: Item) -> None:
        self.inventory.setdefault(item.key, []).append(item)

    def inventory_counts(self) -> dict[Key, int]:
        return {key: len(stack) for key, stack in self.inventory.items() if stack}

    def drain_inventory(self) -> list[Item]:
        """인벤토리 전체를 비우고 아이템 목록 반환."""
        items = [item for stack in self.inventory.values() for item in stack]
        self.inventory.clear()
        return items

    def use_item(self, key: Key | str) -> str:
        """해당 key 아이템 1개 소비 후 적용. 미보유 시 KeyError."""
        if not isinstance(key, (ItemKey, RingKind)):
            key = parse_key(key)
        stack = self.inventory.get(key)
        if not stack:
            raise KeyError(key)
        item = stack.pop()
        if not stack:
            del self.inventory[key]
        return item.apply(self)

    def return_home(self) -> None:
        self.distance = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "hero": self.hero.to_dict(),
            "inventory": [
                item_to_dict(item) for stack in self.inventory.values() for item in stack
            ],
            "gold": self.gold,
            "distance": self.distance,
            "ring_pool": self.ring_pool.to_list(),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> GameSession:
        session = cls(
            session_id=raw["session_id"],
            hero=Hero.from_dict(raw["hero"]),
            gold=int(raw.get("gold", 0)),
            distance=int(raw.get("distance", 0)),
            ring_pool=RingPool.from_list(raw.get("ring_pool", [])),
        )
        for item_raw in raw.get("inventory", []):
            session.add_item(item_from_dict(item_raw))
        return session
