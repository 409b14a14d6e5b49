"""Outbound event payloads.

Every model dumps with camelCase keys so the transport can forward the result
unchanged. ``OutboundEvent`` pairs a payload with the player ids that must
receive it.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nightfall.types.game import GamePhase, Role, Winner


class EventPayload(BaseModel):
    """Base class for payloads sent to players"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event: ClassVar[str] = ""

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class PlayerSummary(EventPayload):
    """Player entry in lobby and role lists; role only where the viewer may see it"""
    id: str
    username: str
    is_alive: bool = True
    role: Optional[Role] = None


class Casualty(EventPayload):
    """Player killed overnight, announced at dawn without their role"""
    id: str
    username: Optional[str] = None


class EliminatedPlayer(Casualty):
    role: Optional[Role] = None


class RoleRevealEntry(EventPayload):
    id: str
    username: str
    role: Optional[Role] = None


class RoleHistoryItem(EventPayload):
    id: str
    username: str
    role: Role
    day_eliminated: int


class RoomCreated(EventPayload):
    event: ClassVar[str] = "room_created"
    room_code: str


class RoomJoined(EventPayload):
    event: ClassVar[str] = "room_joined"
    room_code: str
    is_host: bool


class LobbyUpdate(EventPayload):
    event: ClassVar[str] = "lobby_update"
    players: List[PlayerSummary]
    host: str


class ErrorMessage(EventPayload):
    event: ClassVar[str] = "error"
    message: str


class RoleAssigned(EventPayload):
    event: ClassVar[str] = "role_assigned"
    role: Role
    players: List[PlayerSummary]


class PhaseChange(EventPayload):
    event: ClassVar[str] = "phase_change"
    phase: GamePhase
    day_count: int
    time_left: float
    eliminated_player: Optional[Casualty] = None

    def to_wire(self) -> Dict[str, Any]:
        # Night announcements carry no casualty field at all
        data = super().to_wire()
        if self.phase == GamePhase.NIGHT:
            data.pop("eliminatedPlayer", None)
        return data


class VoteUpdate(EventPayload):
    event: ClassVar[str] = "vote_update"
    vote_count: int
    total_alive: int


class WerewolfVoteUpdate(EventPayload):
    event: ClassVar[str] = "werewolf_vote_update"
    voter: str
    target: Optional[str] = None
    vote_count: int
    total_werewolves: int


class SeerResult(EventPayload):
    event: ClassVar[str] = "seer_result"
    target_username: str
    is_werewolf: bool


class DoctorResult(EventPayload):
    event: ClassVar[str] = "doctor_result"
    target_username: str


class ReceiveMessage(EventPayload):
    event: ClassVar[str] = "receive_message"
    sender: str
    content: str
    is_werewolf_chat: bool


class DayResult(EventPayload):
    event: ClassVar[str] = "day_result"
    eliminated_player: EliminatedPlayer


class GameOver(EventPayload):
    event: ClassVar[str] = "game_over"
    winner: Winner
    role_reveal: List[RoleRevealEntry]
    role_history: List[RoleHistoryItem]


class PlayerLeft(EventPayload):
    event: ClassVar[str] = "player_left"
    player_id: str
    username: Optional[str] = None
    new_host: str


@dataclass
class OutboundEvent:
    """A payload addressed to an explicit set of players"""
    payload: EventPayload
    recipients: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.payload.event

    def to_wire(self) -> Dict[str, Any]:
        return self.payload.to_wire()
