"""장비 (검/방패) + 업그레이드 정책"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class EquipmentKind(str, Enum):
    SWORD = "sword"
    SHIELD = "shield"


@dataclass(frozen=True)
class Equipment:
    """장착 가능한 장비. 소유자는 한 곳 (플레이어 슬롯 또는 상자)."""

    kind: EquipmentKind
    level: int

    @classmethod
    def sword(cls, level: int) -> Equipment:
        return cls(EquipmentKind.SWORD, level)

    @classmethod
    def shield(cls, level: int) -> Equipment:
        return cls(EquipmentKind.SHIELD, level)

    def is_upgrade_from(self, current: Optional[Equipment]) -> bool:
        """현재 장비가 없거나, 레벨이 엄격히 높을 때만 True. 동레벨은 교체 안 함."""
        if current is None:
            return True
        return self.level > current.level

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "level": self.level}

    @classmethod
    def from_dict(cls, raw: Optional[dict[str, Any]]) -> Optional[Equipment]:
        if raw is None:
            return None
        return cls(EquipmentKind(raw["kind"]), int(raw["level"]))


def maybe_upgrade(holder: Any, source: Any, kind: EquipmentKind) -> bool:
    """source의 kind 슬롯 장비를 꺼내서 holder의 장비보다 좋으면 교체.

    슬롯 이름은 kind.value (sword / shield). 후보는 결과와 무관하게
    source에서 제거된다 (진 쪽은 버려진다). 종류가 다른 장비가 슬롯에
    들어 있으면 아무것도 옮기지 않고 ValueError.
    반환: 교체 여부.
    """
    slot = kind.value
    candidate: Optional[Equipment] = getattr(source, slot)
    if candidate is not None and candidate.kind != kind:
        raise ValueError(f"{candidate.kind.value} found in {slot} slot")
    setattr(source, slot, None)

    if candidate is None:
        return False

    if candidate.is_upgrade_from(getattr(holder, slot)):
        setattr(holder, slot, candidate)
        return True
    return False
