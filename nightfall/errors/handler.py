"""
Error handling for Nightfall rooms.

Converts user-surfaced exceptions into ``error`` events for the player that
caused them, and formats both those and silently dropped actions for logs.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from nightfall.errors.exceptions import (
    GameAlreadyStarted,
    InsufficientPlayers,
    NightfallError,
    RoomNotFound,
)
from nightfall.types.events import ErrorMessage, OutboundEvent

logger = logging.getLogger(__name__)


class ErrorType(str, Enum):
    """Categories of failures seen by the game manager."""

    # Reported to the player
    ROOM_NOT_FOUND = "room_not_found"
    GAME_ALREADY_STARTED = "game_already_started"
    INSUFFICIENT_PLAYERS = "insufficient_players"

    # Dropped silently
    WRONG_PHASE_ACTION = "wrong_phase_action"
    DEAD_PLAYER_ACTION = "dead_player_action"
    WRONG_ROLE_ACTION = "wrong_role_action"
    INVALID_PLAYER = "invalid_player"
    INVALID_TARGET = "invalid_target"
    NOT_HOST = "not_host"

    UNKNOWN_ERROR = "unknown_error"


class ErrorHandler:
    """Maps game failures to player-facing events and log records."""

    EXCEPTION_TYPES = {
        RoomNotFound: ErrorType.ROOM_NOT_FOUND,
        GameAlreadyStarted: ErrorType.GAME_ALREADY_STARTED,
        InsufficientPlayers: ErrorType.INSUFFICIENT_PLAYERS,
    }

    @staticmethod
    def classify_error(error: Exception) -> ErrorType:
        for exc_type, error_type in ErrorHandler.EXCEPTION_TYPES.items():
            if isinstance(error, exc_type):
                return error_type
        return ErrorType.UNKNOWN_ERROR

    @staticmethod
    def to_event(error: NightfallError, player_id: str) -> OutboundEvent:
        """Build the single generic error event sent to the originating player."""
        logger.warning(
            f"Reporting {ErrorHandler.classify_error(error).value} to {player_id}: {error}"
        )
        return OutboundEvent(ErrorMessage(message=str(error)), [player_id])

    @staticmethod
    def format_error_log(
        error_type: ErrorType,
        player_id: str,
        room_code: Optional[str],
        phase: Optional[str],
        details: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format a failure for structured logging.

        Args:
            error_type: Type of failure
            player_id: Player that caused it
            room_code: Room the action targeted, if known
            phase: Room phase at the time, if known
            details: Additional details

        Returns:
            Formatted log dictionary
        """
        return {
            "error_type": error_type.value,
            "player_id": player_id,
            "room_code": room_code,
            "phase": phase,
            "details": details,
            "reported": error_type in ErrorHandler.EXCEPTION_TYPES.values(),
        }
