"""상자 — 골드 + 검/방패(각 최대 1) + 아이템 묶음

탐색 중 랜덤 생성되거나, 영웅이 쓰러질 때 소지품을 담아 남겨진다 (묘비).
생성 직후 merge 또는 pick_up으로 소비된다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from .equipment import Equipment, EquipmentKind, maybe_upgrade
from .items import Item, ItemKey, Key, item_from_dict, item_to_dict

if TYPE_CHECKING:
    from src.core.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class Chest:
    items: list[Item] = field(default_factory=list)
    sword: Optional[Equipment] = None
    shield: Optional[Equipment] = None
    gold: int = 0

    def is_empty(self) -> bool:
        return (
            not self.items
            and self.gold == 0
            and self.sword is None
            and self.shield is None
        )

    def item_keys(self) -> list[Key]:
        return [item.key for item in self.items]

    def pick_up(self, recipient: GameSession) -> tuple[dict[Key, int], int]:
        """상자 내용물을 세션으로 옮긴다.

        장비는 현재 장비보다 좋을 때만 교체 (아니면 버려짐).
        아이템/골드는 무조건 획득.
        반환: (key별 획득 수량, 획득 골드)
        """
        item_counts: dict[Key, int] = {}

        if maybe_upgrade(recipient.hero, self, EquipmentKind.SWORD):
            item_counts[ItemKey.SWORD] = 1
        if maybe_upgrade(recipient.hero, self, EquipmentKind.SHIELD):
            item_counts[ItemKey.SHIELD] = 1

        for item in self.items:
            item_counts[item.key] = item_counts.get(item.key, 0) + 1
            recipient.add_item(item)
        self.items = []

        gold = self.gold
        recipient.gold += gold
        self.gold = 0

        logger.debug("Picked up %s, %d gold", item_counts, gold)
        return item_counts, gold

    def merge(self, other: Chest) -> None:
        """other의 내용을 이 상자로 합친다. 장비는 좋은 쪽만 남기고 other는 비워진다."""
        maybe_upgrade(self, other, EquipmentKind.SWORD)
        maybe_upgrade(self, other, EquipmentKind.SHIELD)
        self.items.extend(other.items)
        other.items = []
        self.gold += other.gold
        other.gold = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item_to_dict(i) for i in self.items],
            "sword": self.sword.to_dict() if self.sword else None,
            "shield": self.shield.to_dict() if self.shield else None,
            "gold": self.gold,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Chest:
        return cls(
            items=[item_from_dict(i) for i in raw.get("items", [])],
            sword=_slot_equipment(raw.get("sword"), EquipmentKind.SWORD),
            shield=_slot_equipment(raw.get("shield"), EquipmentKind.SHIELD),
            gold=int(raw.get("gold", 0)),
        )


def _slot_equipment(raw: Optional[dict[str, Any]], kind: EquipmentKind) -> Optional[Equipment]:
    equipment = Equipment.from_dict(raw)
    if equipment is not None and equipment.kind != kind:
        raise ValueError(f"{equipment.kind.value} stored in {kind.value} slot")
    return equipment
