"""Loot Engine Core"""
__version__ = "0.1.0-alpha"

from src.core.event_bus import EventBus, GameEvent
from src.core.session import GameSession, Hero

__all__ = [
    "EventBus",
    "GameEvent",
    "GameSession",
    "Hero",
]
