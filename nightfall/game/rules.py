"""Rules validation for player actions"""

from typing import NamedTuple, Optional

from nightfall.errors.handler import ErrorType
from nightfall.types.game import GamePhase, Role, Room


class RuleResult(NamedTuple):
    """Outcome of a rules check; rejected checks name their category"""
    is_valid: bool
    reason: Optional[str] = None
    error_type: Optional[ErrorType] = None


ALLOWED = RuleResult(True)


def _reject(error_type: ErrorType, reason: str) -> RuleResult:
    return RuleResult(False, reason, error_type)


class RulesValidator:
    """Validates that player actions follow the Werewolf rules"""

    @staticmethod
    def _check_actor(
        room: Room,
        player_id: str,
        phase: GamePhase,
        role: Optional[Role] = None
    ) -> RuleResult:
        """Common checks: phase, membership, liveness and role"""
        if room.phase != phase:
            return _reject(
                ErrorType.WRONG_PHASE_ACTION,
                f"Action not allowed in {room.phase.value} phase",
            )

        player = room.players.get(player_id)
        if player is None:
            return _reject(ErrorType.INVALID_PLAYER, "Player is not in this room")

        if not player.is_alive:
            return _reject(ErrorType.DEAD_PLAYER_ACTION, "Dead players cannot take actions")

        if role is not None and player.role != role:
            return _reject(
                ErrorType.WRONG_ROLE_ACTION,
                f"Only a {role.value.lower()} can take this action",
            )

        return ALLOWED

    @staticmethod
    def _check_target(room: Room, target_id: Optional[str], living: bool = True) -> RuleResult:
        target = room.players.get(target_id) if target_id else None
        if target is None:
            return _reject(ErrorType.INVALID_TARGET, "Target player does not exist")
        if living and not target.is_alive:
            return _reject(ErrorType.INVALID_TARGET, "Can only target living players")
        return ALLOWED

    @staticmethod
    def can_start_game(room: Room, player_id: str) -> RuleResult:
        if room.phase != GamePhase.LOBBY:
            return _reject(ErrorType.WRONG_PHASE_ACTION, "Game can only start from the lobby")
        if room.host != player_id:
            return _reject(ErrorType.NOT_HOST, "Only the host can start the game")
        return ALLOWED

    @staticmethod
    def validate_day_vote(
        room: Room,
        player_id: str,
        target_id: Optional[str]
    ) -> RuleResult:
        """Validate a day execution vote. Self-votes are allowed."""
        result = RulesValidator._check_actor(room, player_id, GamePhase.DAY)
        if not result.is_valid:
            return result
        return RulesValidator._check_target(room, target_id)

    @staticmethod
    def validate_werewolf_vote(
        room: Room,
        player_id: str,
        target_id: Optional[str]
    ) -> RuleResult:
        result = RulesValidator._check_actor(
            room, player_id, GamePhase.NIGHT, Role.WEREWOLF
        )
        if not result.is_valid:
            return result
        return RulesValidator._check_target(room, target_id)

    @staticmethod
    def validate_seer_check(
        room: Room,
        player_id: str,
        target_id: Optional[str]
    ) -> RuleResult:
        result = RulesValidator._check_actor(
            room, player_id, GamePhase.NIGHT, Role.SEER
        )
        if not result.is_valid:
            return result
        return RulesValidator._check_target(room, target_id, living=False)

    @staticmethod
    def validate_doctor_save(
        room: Room,
        player_id: str,
        target_id: Optional[str]
    ) -> RuleResult:
        """Validate a doctor save. The doctor may protect themselves."""
        result = RulesValidator._check_actor(
            room, player_id, GamePhase.NIGHT, Role.DOCTOR
        )
        if not result.is_valid:
            return result
        return RulesValidator._check_target(room, target_id, living=False)

    @staticmethod
    def validate_chat(
        room: Room,
        player_id: str,
        is_werewolf_chat: bool
    ) -> RuleResult:
        """Werewolf chat is for living werewolves at night, public chat for the day"""
        if is_werewolf_chat:
            return RulesValidator._check_actor(room, player_id, GamePhase.NIGHT, Role.WEREWOLF)
        return RulesValidator._check_actor(room, player_id, GamePhase.DAY)
