"""Main game manager for Nightfall rooms"""

import logging
import random
from typing import Callable, Optional

from nightfall.errors.exceptions import GameAlreadyStarted, NightfallError
from nightfall.errors.handler import ErrorHandler
from nightfall.game import views
from nightfall.game.actions import ActionHandler
from nightfall.game.phases import PhaseController
from nightfall.game.registry import RoomRegistry
from nightfall.game.roles import RoleAssigner
from nightfall.game.rules import RulesValidator
from nightfall.game.scheduler import AsyncioScheduler, Scheduler
from nightfall.game.win import WinEvaluator
from nightfall.types.events import OutboundEvent, PlayerLeft, RoomCreated, RoomJoined
from nightfall.types.game import GameConfig, GamePhase, Room

logger = logging.getLogger(__name__)

EventSink = Callable[[OutboundEvent], None]


class GameManager:
    """Entry point for every inbound player event.

    Looks up the room through the registry and hands the event to the
    component that owns the concern. Only ``RoomNotFound``,
    ``GameAlreadyStarted`` and ``InsufficientPlayers`` produce a reply,
    as an ``error`` event to the player who caused them.
    """

    def __init__(
        self,
        emit: EventSink,
        scheduler: Optional[Scheduler] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig()
        self.emit = emit
        self.rules_validator = RulesValidator()
        self.registry = RoomRegistry(code_length=self.config.room_code_length, rng=rng)
        self.win_evaluator = WinEvaluator(emit)
        self.actions = ActionHandler(emit)
        self.phases = PhaseController(
            registry=self.registry,
            scheduler=scheduler or AsyncioScheduler(),
            emit=emit,
            win_evaluator=self.win_evaluator,
            role_assigner=RoleAssigner(rng),
            config=self.config,
        )

    def create_room(self, player_id: str, username: str) -> str:
        """Open a new lobby hosted by ``player_id`` and return its code."""
        self.disconnect(player_id)

        room = self.registry.create_room(player_id, username)
        self.emit(OutboundEvent(RoomCreated(room_code=room.room_code), [player_id]))
        self.emit(OutboundEvent(views.lobby_update(room), [player_id]))
        return room.room_code

    def join_lobby(self, player_id: str, username: str, room_code: str) -> Optional[Room]:
        try:
            room = self.registry.require_room(room_code)
            if room.phase != GamePhase.LOBBY:
                raise GameAlreadyStarted(room_code)

            current = self.registry.room_of(player_id)
            if current is not None and current is not room:
                self.disconnect(player_id)

            room = self.registry.join_room(player_id, username, room_code)
        except NightfallError as e:
            self.emit(ErrorHandler.to_event(e, player_id))
            return None

        self.emit(OutboundEvent(
            RoomJoined(room_code=room.room_code, is_host=room.host == player_id),
            [player_id],
        ))
        self.emit(OutboundEvent(views.lobby_update(room), list(room.players)))
        return room

    def start_game(self, player_id: str, room_code: str) -> bool:
        room = self.registry.get_room(room_code)
        if room is None:
            logger.debug(f"start_game for unknown room {room_code} from {player_id}")
            return False

        result = self.rules_validator.can_start_game(room, player_id)
        if not result.is_valid:
            log_entry = ErrorHandler.format_error_log(
                result.error_type, player_id, room_code, room.phase.value, result.reason
            )
            logger.debug(f"Ignored start_game: {log_entry}")
            return False

        try:
            self.phases.start_game(room)
        except NightfallError as e:
            self.emit(ErrorHandler.to_event(e, player_id))
            return False
        return True

    def day_vote(self, player_id: str, room_code: str, target_id: Optional[str]) -> bool:
        room = self._room_for_action("day_vote", player_id, room_code)
        return room is not None and self.actions.day_vote(player_id, room, target_id)

    def werewolf_vote(self, player_id: str, room_code: str, target_id: Optional[str]) -> bool:
        room = self._room_for_action("werewolf_vote", player_id, room_code)
        return room is not None and self.actions.werewolf_vote(player_id, room, target_id)

    def seer_check(self, player_id: str, room_code: str, target_id: Optional[str]) -> bool:
        room = self._room_for_action("seer_check", player_id, room_code)
        return room is not None and self.actions.seer_check(player_id, room, target_id)

    def doctor_save(self, player_id: str, room_code: str, target_id: Optional[str]) -> bool:
        room = self._room_for_action("doctor_save", player_id, room_code)
        return room is not None and self.actions.doctor_save(player_id, room, target_id)

    def send_message(
        self,
        player_id: str,
        room_code: str,
        content: str,
        is_werewolf_chat: bool = False
    ) -> bool:
        room = self._room_for_action("send_message", player_id, room_code)
        return room is not None and self.actions.chat_message(
            player_id, room, content, is_werewolf_chat
        )

    def disconnect(self, player_id: str) -> None:
        """
        Remove a player from their room.

        During a game a living player who leaves counts as eliminated: their
        pending votes are withdrawn, they are added to the role history and the
        win condition is re-checked.
        """
        removed = self.registry.remove_player(player_id)
        if removed is None:
            return
        room, player = removed

        if room.room_code not in self.registry:
            return

        room.votes.pop(player_id, None)
        room.werewolf_votes.pop(player_id, None)

        if room.is_in_progress() and player.is_alive:
            room.record_elimination(player)
            self.win_evaluator.evaluate(room)

        self.emit(OutboundEvent(
            PlayerLeft(player_id=player_id, username=player.username, new_host=room.host),
            list(room.players),
        ))
        if room.phase == GamePhase.LOBBY:
            self.emit(OutboundEvent(views.lobby_update(room), list(room.players)))

    def _room_for_action(self, action: str, player_id: str, room_code: str) -> Optional[Room]:
        room = self.registry.get_room(room_code)
        if room is None:
            logger.debug(f"Dropped {action} from {player_id}: unknown room {room_code}")
        return room
