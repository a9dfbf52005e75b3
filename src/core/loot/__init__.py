"""보상 시스템 Core — 순수 Python, DB 무관"""

from .chest import Chest
from .equipment import Equipment, EquipmentKind, maybe_upgrade
from .generation import LootConfig, battle_loot, extract_from_player, generate_loot
from .items import (
    Escape,
    Ether,
    Item,
    ItemKey,
    Potion,
    Remedy,
    Ring,
    RingKind,
    Stone,
    StoneKind,
)
from .ring_pool import RingPool
from .selector import InvalidWeightsError, chance_roll, weighted_choice

__all__ = [
    "Chest",
    "Equipment",
    "EquipmentKind",
    "maybe_upgrade",
    "LootConfig",
    "generate_loot",
    "battle_loot",
    "extract_from_player",
    "Escape",
    "Ether",
    "Item",
    "ItemKey",
    "Potion",
    "Remedy",
    "Ring",
    "RingKind",
    "Stone",
    "StoneKind",
    "RingPool",
    "InvalidWeightsError",
    "chance_roll",
    "weighted_choice",
]
