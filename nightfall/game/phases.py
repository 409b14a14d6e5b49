"""Phase state machine: LOBBY -> NIGHT -> DAY -> (NIGHT | GAME_OVER)"""

import logging
from typing import Callable

from nightfall.errors.exceptions import InsufficientPlayers
from nightfall.game import views
from nightfall.game.registry import RoomRegistry
from nightfall.game.roles import RoleAssigner
from nightfall.game.scheduler import Scheduler
from nightfall.game.votes import VoteResolver
from nightfall.game.win import WinEvaluator
from nightfall.types.events import DayResult, EliminatedPlayer, OutboundEvent
from nightfall.types.game import GameConfig, GamePhase, Room

logger = logging.getLogger(__name__)


class PhaseController:
    """Drives rooms through their phases, including the timed auto-advance.

    Each room holds at most one pending timer. Scheduling a new one cancels
    the previous handle, and every timer callback re-checks that its room is
    still registered and still in the phase and day it was scheduled for.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        scheduler: Scheduler,
        emit: Callable[[OutboundEvent], None],
        win_evaluator: WinEvaluator,
        role_assigner: RoleAssigner,
        config: GameConfig,
    ):
        self.registry = registry
        self.scheduler = scheduler
        self.emit = emit
        self.win_evaluator = win_evaluator
        self.role_assigner = role_assigner
        self.config = config

    def start_game(self, room: Room) -> None:
        """
        Leave the lobby: assign roles, tell each player theirs, begin night 1.

        Raises:
            InsufficientPlayers: Fewer than ``config.min_players`` in the room
        """
        player_count = len(room.players)
        if player_count < self.config.min_players:
            raise InsufficientPlayers(player_count, self.config.min_players)

        self.role_assigner.assign_roles(room)
        room.phase = GamePhase.NIGHT
        room.day_count = 1
        logger.info(f"Started game in room {room.room_code} with {player_count} players")

        for player_id in room.players:
            self.emit(OutboundEvent(views.role_assigned(room, player_id), [player_id]))

        self.start_night(room)

    def start_night(self, room: Room) -> None:
        room.votes = {}
        room.werewolf_votes = {}
        room.doctor_save = None
        room.eliminated_tonight = None
        room.phase = GamePhase.NIGHT

        logger.info(f"Room {room.room_code}: night {room.day_count} begins")
        self.emit(OutboundEvent(
            views.phase_change(room, self.config.night_duration),
            list(room.players),
        ))
        self._schedule(room, self.config.night_duration, self.resolve_night)

    def resolve_night(self, room: Room) -> None:
        """Apply the werewolf kill unless the doctor saved its target, then start the day."""
        if room.phase != GamePhase.NIGHT:
            return

        room.eliminated_tonight = VoteResolver.resolve(room.werewolf_votes)

        if room.eliminated_tonight and room.doctor_save == room.eliminated_tonight:
            logger.info(f"Room {room.room_code}: doctor saved {room.eliminated_tonight}")
            room.eliminated_tonight = None

        if room.eliminated_tonight:
            if room.eliminate(room.eliminated_tonight) is not None:
                logger.info(f"Room {room.room_code}: {room.eliminated_tonight} killed in the night")
            else:
                # Target left the room before the night resolved
                room.eliminated_tonight = None

        self.start_day(room)

        if self.win_evaluator.evaluate(room):
            return
        self._schedule(room, self.config.day_duration, self.resolve_day)

    def start_day(self, room: Room) -> None:
        room.phase = GamePhase.DAY
        room.votes = {}

        logger.info(f"Room {room.room_code}: day {room.day_count} begins")
        self.emit(OutboundEvent(
            views.phase_change(room, self.config.day_duration),
            list(room.players),
        ))

    def resolve_day(self, room: Room) -> None:
        """Execute the plurality target, then either end the game or queue the next night."""
        if room.phase != GamePhase.DAY:
            return

        target_id = VoteResolver.resolve(room.votes)
        if target_id:
            entry = room.eliminate(target_id)
            if entry is not None:
                logger.info(f"Room {room.room_code}: {entry.username} executed by vote")
                self.emit(OutboundEvent(
                    DayResult(eliminated_player=EliminatedPlayer(
                        id=entry.id, username=entry.username, role=entry.role,
                    )),
                    list(room.players),
                ))

        if self.win_evaluator.evaluate(room):
            return

        room.day_count += 1
        self._schedule(room, self.config.transition_delay, self.start_night)

    def _schedule(
        self,
        room: Room,
        delay: float,
        action: Callable[[Room], None],
    ) -> None:
        """Replace the room's pending timer with ``action`` after ``delay`` seconds."""
        expected_phase = room.phase
        expected_day = room.day_count
        room_code = room.room_code

        def fire() -> None:
            current = self.registry.get_room(room_code)
            if current is not room:
                logger.debug(f"Timer for destroyed room {room_code} ignored")
                return
            if room.phase != expected_phase or room.day_count != expected_day:
                logger.debug(
                    f"Stale timer for room {room_code} ignored "
                    f"({room.phase.value} day {room.day_count})"
                )
                return
            room.replace_timer(None)
            action(room)

        room.replace_timer(self.scheduler.call_later(delay, fire))
