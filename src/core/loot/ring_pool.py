"""반지 풀 — 종류별 1개, 비복원 추출"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from .items import Ring, RingKind

logger = logging.getLogger(__name__)


class RingPool:
    """
    아직 발견되지 않은 반지 종류 집합.
    게임 시작 시 모든 종류로 채워지고, 추출로만 줄어든다. 재충전 없음.
    """

    def __init__(self, kinds: Iterable[RingKind] = ()) -> None:
        self._kinds: set[RingKind] = set(kinds)

    @classmethod
    def full(cls) -> RingPool:
        return cls(RingKind)

    def try_take_random(self, rng: random.Random | None = None) -> Optional[Ring]:
        """남은 종류 중 균등 랜덤으로 하나 꺼낸다. 비었으면 None."""
        if not self._kinds:
            return None

        rng = rng or random
        # set 순회 순서는 실행마다 다를 수 있으므로 정렬 후 선택 (시드 재현성)
        kind = rng.choice(sorted(self._kinds, key=lambda k: k.value))
        self._kinds.remove(kind)

        if not self._kinds:
            logger.info("Ring pool depleted (last ring: %s)", kind.value)
        else:
            logger.debug("Took %s from ring pool (%d left)", kind.value, len(self._kinds))
        return Ring(kind)

    def is_empty(self) -> bool:
        return not self._kinds

    def kinds(self) -> frozenset[RingKind]:
        return frozenset(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    def __contains__(self, kind: object) -> bool:
        return kind in self._kinds

    def to_list(self) -> list[str]:
        return sorted(k.value for k in self._kinds)

    @classmethod
    def from_list(cls, values: Iterable[str]) -> RingPool:
        return cls(RingKind(v) for v in values)
