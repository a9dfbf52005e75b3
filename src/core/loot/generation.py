"""보상 생성 — 탐색 상자, 전투 보상, 사망 시 소지품 추출"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .chest import Chest
from .equipment import Equipment, EquipmentKind
from .items import Escape, Ether, Item, Potion, Remedy, Ring, Stone, StoneKind
from .selector import CHANCE_CAP, chance_roll, weighted_choice

if TYPE_CHECKING:
    from src.core.session import GameSession

logger = logging.getLogger(__name__)

# === 카테고리별 기본 확률 (거리 보정 전) ===
GOLD_CHANCE = 0.10
EQUIPMENT_CHANCE = 0.05
RING_CHANCE = 0.03
ITEM_CHANCE = 0.12

# === 고정 정책 ===
LEVEL_SLACK = 10  # level > distance + 10 → 보상 없음
ITEM_ATTEMPTS = 3
GOLD_PER_LEVEL = 50
MAX_SWORD_LEVEL = 100


@dataclass(frozen=True)
class LootConfig:
    """생성 정책 노브. Settings에서 생성 (Settings.loot_config)."""

    level_slack: int = LEVEL_SLACK
    item_attempts: int = ITEM_ATTEMPTS
    gold_per_level: int = GOLD_PER_LEVEL
    chance_cap: float = CHANCE_CAP
    gold_chance: float = GOLD_CHANCE
    equipment_chance: float = EQUIPMENT_CHANCE
    ring_chance: float = RING_CHANCE
    item_chance: float = ITEM_CHANCE

    def __post_init__(self) -> None:
        # cap < 1: 어떤 거리에서도 확정 보상 없음
        if not 0 < self.chance_cap < 1:
            raise ValueError(f"chance_cap must be in (0, 1), got {self.chance_cap}")
        if self.level_slack < 0:
            raise ValueError(f"level_slack must be >= 0, got {self.level_slack}")
        if self.item_attempts < 1:
            raise ValueError(f"item_attempts must be >= 1, got {self.item_attempts}")
        if self.gold_per_level < 1:
            raise ValueError(f"gold_per_level must be >= 1, got {self.gold_per_level}")
        for name in ("gold_chance", "equipment_chance", "ring_chance", "item_chance"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be in [0, 1], got {value}")


DEFAULT_CONFIG = LootConfig()


def gold_reward(level: int, distance: int, gold_per_level: int = GOLD_PER_LEVEL) -> int:
    """골드 보상량. 레벨/거리 모두에 대해 순증가."""
    return gold_per_level * (level + distance)


def equipment_base_level(distance: int) -> int:
    """5 단위 내림 거리 (최소 1)."""
    return max(1, (distance // 5) * 5)


def random_equipment(distance: int, rng: random.Random | None = None) -> Equipment:
    """장비 1개. 검과 방패가 같이 나오지 않는다."""
    level = equipment_base_level(distance)
    return weighted_choice(
        [
            (100, Equipment.sword(level)),
            (80, Equipment.shield(level)),
            (30, Equipment.sword(level + 5)),
            (20, Equipment.shield(level + 5)),
            (1, Equipment.sword(MAX_SWORD_LEVEL)),
        ],
        rng,
    )


def random_item(level: int, rng: random.Random | None = None) -> Item:
    """가중치 랜덤 아이템 1개."""
    return weighted_choice(
        [
            (150, Potion(level)),
            (10, Remedy()),
            (10, Escape()),
            (50, Ether(level)),
            (5, Stone(StoneKind.HEALTH)),
            (5, Stone(StoneKind.MAGIC)),
            (5, Stone(StoneKind.POWER)),
            (5, Stone(StoneKind.SPEED)),
            (1, Stone(StoneKind.LEVEL)),
        ],
        rng,
    )


def generate_loot(
    session: GameSession,
    rng: random.Random | None = None,
    config: LootConfig = DEFAULT_CONFIG,
) -> Optional[Chest]:
    """현재 위치의 랜덤 상자. 아무것도 없으면 None."""
    hero = session.hero

    # 회피 반지 장착 중에는 상자 없음 (깊이 내려가 보상을 싹쓸이하는 것 방지)
    if hero.enemies_evaded():
        return None

    distance = session.distance

    # 쉬운 승리에는 보상 없음
    if hero.level > distance + config.level_slack:
        return None

    def roll(base: float) -> bool:
        return chance_roll(base, distance, rng, config.chance_cap)

    # 카테고리별로 따로 판정해 하나의 상자로 합친다
    gold_found = roll(config.gold_chance)
    equipment_found = roll(config.equipment_chance)
    ring_found = roll(config.ring_chance)
    item_attempts = config.item_attempts

    # 상자 반지: 확률 2배가 아니라 두 번 굴린다
    if hero.double_chests():
        gold_found = gold_found or roll(config.gold_chance)
        equipment_found = equipment_found or roll(config.equipment_chance)
        ring_found = ring_found or roll(config.ring_chance)
        item_attempts *= 2

    chest = Chest()

    if gold_found:
        chest.gold = gold_reward(hero.level, distance, config.gold_per_level)

    if equipment_found:
        equipment = random_equipment(distance, rng)
        if equipment.kind == EquipmentKind.SWORD:
            chest.sword = equipment
        else:
            chest.shield = equipment

    if ring_found:
        # 반지 풀에서 확실히 넣을 때만 꺼낸다
        ring: Optional[Ring] = session.ring_pool.try_take_random(rng)
        if ring is not None:
            chest.items.append(ring)
        else:
            # 남은 반지가 없으면 발견하지 않은 것으로 처리
            ring_found = False

    item_found = False
    for _ in range(item_attempts):
        if roll(config.item_chance):
            item_found = True
            chest.items.append(random_item(hero.rounded_level(), rng))

    logger.debug(
        "Loot rolls at distance %d: gold=%s equipment=%s ring=%s items=%s",
        distance,
        gold_found,
        equipment_found,
        ring_found,
        item_found,
    )

    if gold_found or equipment_found or ring_found or item_found:
        return chest
    return None


def battle_loot(
    session: GameSession,
    rng: random.Random | None = None,
    config: LootConfig = DEFAULT_CONFIG,
) -> Optional[Chest]:
    """전투 보상. 상자 확률을 재사용하되 골드는 제외."""
    chest = generate_loot(session, rng, config)
    if chest is not None:
        chest.gold = 0
    return chest


def extract_from_player(session: GameSession) -> Chest:
    """영웅의 골드/아이템/장비/반지를 모두 꺼내 상자로 반환. 항상 상자를 반환."""
    hero = session.hero
    items = session.drain_inventory()

    sword, hero.sword = hero.sword, None
    shield, hero.shield = hero.shield, None

    # 장착 반지는 일반 아이템으로 떨어진다
    if hero.left_ring is not None:
        items.append(Ring(hero.left_ring))
        hero.left_ring = None
    if hero.right_ring is not None:
        items.append(Ring(hero.right_ring))
        hero.right_ring = None

    gold, session.gold = session.gold, 0

    return Chest(items=items, sword=sword, shield=shield, gold=gold)
