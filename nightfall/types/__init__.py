"""Data types for Nightfall"""

from .game import (
    ChatMessage,
    GameConfig,
    GamePhase,
    Player,
    Role,
    RoleHistoryEntry,
    Room,
    Winner,
)
from .events import EventPayload, OutboundEvent

__all__ = [
    # Game types
    "ChatMessage",
    "GameConfig",
    "GamePhase",
    "Player",
    "Role",
    "RoleHistoryEntry",
    "Room",
    "Winner",
    # Event types
    "EventPayload",
    "OutboundEvent",
]
