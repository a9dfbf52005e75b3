"""가중치 랜덤 선택 + 거리 기반 확률 판정 — 순수 Python, 외부 의존 없음"""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# === 확률 상한 ===
CHANCE_CAP = 0.9  # 아무리 멀리 가도 매번 보상이 나오지는 않는다

# === 거리 보정 ===
DISTANCE_SCALE = 10.0  # sqrt(distance) / 10 만큼 기본 확률에 가산 비율


class InvalidWeightsError(ValueError):
    """가중치 테이블 설정 오류 (빈 테이블, 0 이하 가중치)."""


def weighted_choice(
    choices: Sequence[tuple[float, T]],
    rng: random.Random | None = None,
) -> T:
    """(weight, outcome) 목록에서 가중치 비례로 하나 선택.

    가중치는 양수여야 한다. 빈 목록 / 0 이하 가중치는 호출자 버그이므로
    InvalidWeightsError.
    """
    if not choices:
        raise InvalidWeightsError("weighted_choice: empty choice table")

    total = 0.0
    for weight, _ in choices:
        if weight <= 0:
            raise InvalidWeightsError(f"weighted_choice: non-positive weight {weight}")
        total += weight

    rng = rng or random
    pivot = rng.random() * total
    upto = 0.0
    for weight, outcome in choices:
        upto += weight
        if pivot < upto:
            return outcome
    # 부동소수 오차로 끝까지 온 경우
    return choices[-1][1]


def chance(base: float, distance: int, cap: float = CHANCE_CAP) -> float:
    """거리 보정 확률.

    base * (1 + sqrt(distance) / DISTANCE_SCALE), cap으로 제한.
    거리에 대해 sub-linear 증가, 1.0에 도달하지 않는다.
    """
    scaled = base * (1 + math.sqrt(max(0, distance)) / DISTANCE_SCALE)
    return min(cap, scaled)


def chance_roll(
    base: float,
    distance: int,
    rng: random.Random | None = None,
    cap: float = CHANCE_CAP,
) -> bool:
    """거리 보정 확률로 성공 여부 판정. 호출 간 상태 없음."""
    rng = rng or random
    return rng.random() < chance(base, distance, cap)
