"""Votes, night actions and chat routing"""

import logging
from typing import Callable, Optional

from nightfall.errors.handler import ErrorHandler
from nightfall.game.rules import RuleResult, RulesValidator
from nightfall.types.events import (
    DoctorResult,
    OutboundEvent,
    ReceiveMessage,
    SeerResult,
    VoteUpdate,
    WerewolfVoteUpdate,
)
from nightfall.types.game import ChatMessage, Role, Room

logger = logging.getLogger(__name__)


class ActionHandler:
    """Records validated player actions and notifies exactly who may know about them.

    Illegal actions are dropped without any reply to the sender.
    """

    def __init__(self, emit: Callable[[OutboundEvent], None]):
        self.emit = emit
        self.rules_validator = RulesValidator()

    def _rejected(
        self,
        action: str,
        room: Room,
        player_id: str,
        result: RuleResult
    ) -> bool:
        if result.is_valid:
            return False
        log_entry = ErrorHandler.format_error_log(
            result.error_type,
            player_id,
            room.room_code,
            room.phase.value,
            result.reason,
        )
        logger.debug(f"Dropped {action}: {log_entry}")
        return True

    def day_vote(self, player_id: str, room: Room, target_id: Optional[str]) -> bool:
        """Record or replace a day vote; the room only learns the counts."""
        result = self.rules_validator.validate_day_vote(room, player_id, target_id)
        if self._rejected("day_vote", room, player_id, result):
            return False

        room.votes[player_id] = target_id
        self.emit(OutboundEvent(
            VoteUpdate(
                vote_count=len(room.votes),
                total_alive=len(room.alive_players()),
            ),
            list(room.players),
        ))
        return True

    def werewolf_vote(self, player_id: str, room: Room, target_id: Optional[str]) -> bool:
        """Record or replace a kill vote; only living werewolves hear about it."""
        result = self.rules_validator.validate_werewolf_vote(room, player_id, target_id)
        if self._rejected("werewolf_vote", room, player_id, result):
            return False

        room.werewolf_votes[player_id] = target_id
        werewolves = room.alive_werewolves()
        self.emit(OutboundEvent(
            WerewolfVoteUpdate(
                voter=room.players[player_id].username,
                target=room.players[target_id].username,
                vote_count=len(room.werewolf_votes),
                total_werewolves=len(werewolves),
            ),
            [w.id for w in werewolves],
        ))
        return True

    def seer_check(self, player_id: str, room: Room, target_id: Optional[str]) -> bool:
        result = self.rules_validator.validate_seer_check(room, player_id, target_id)
        if self._rejected("seer_check", room, player_id, result):
            return False

        target = room.players[target_id]
        room.seer_checks[target_id] = target.role
        self.emit(OutboundEvent(
            SeerResult(
                target_username=target.username,
                is_werewolf=target.role == Role.WEREWOLF,
            ),
            [player_id],
        ))
        return True

    def doctor_save(self, player_id: str, room: Room, target_id: Optional[str]) -> bool:
        result = self.rules_validator.validate_doctor_save(room, player_id, target_id)
        if self._rejected("doctor_save", room, player_id, result):
            return False

        room.doctor_save = target_id
        self.emit(OutboundEvent(
            DoctorResult(target_username=room.players[target_id].username),
            [player_id],
        ))
        return True

    def chat_message(
        self,
        player_id: str,
        room: Room,
        content: str,
        is_werewolf_chat: bool
    ) -> bool:
        """Log a chat line and deliver it on its channel."""
        result = self.rules_validator.validate_chat(room, player_id, is_werewolf_chat)
        if self._rejected("chat_message", room, player_id, result):
            return False

        sender = room.players[player_id].username
        room.messages.append(ChatMessage(
            sender=sender,
            content=content,
            is_werewolf_chat=is_werewolf_chat,
        ))

        if is_werewolf_chat:
            recipients = [w.id for w in room.alive_werewolves()]
        else:
            recipients = list(room.players)

        self.emit(OutboundEvent(
            ReceiveMessage(sender=sender, content=content, is_werewolf_chat=is_werewolf_chat),
            recipients,
        ))
        return True
