"""Error types and handling for Nightfall"""

from .exceptions import (
    GameAlreadyStarted,
    InsufficientPlayers,
    NightfallError,
    RoomNotFound,
)
from .handler import ErrorHandler, ErrorType

__all__ = [
    "ErrorHandler",
    "ErrorType",
    "GameAlreadyStarted",
    "InsufficientPlayers",
    "NightfallError",
    "RoomNotFound",
]
