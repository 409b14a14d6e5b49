"""Game state models for Nightfall rooms"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr


class Role(str, Enum):
    """Secret roles handed out at game start"""
    VILLAGER = "VILLAGER"
    WEREWOLF = "WEREWOLF"
    SEER = "SEER"
    DOCTOR = "DOCTOR"


class GamePhase(str, Enum):
    """Phases of a room"""
    LOBBY = "LOBBY"
    NIGHT = "NIGHT"
    DAY = "DAY"
    GAME_OVER = "GAME_OVER"


class Winner(str, Enum):
    """Winning side of a finished game"""
    VILLAGERS = "VILLAGERS"
    WEREWOLVES = "WEREWOLVES"


class GameConfig(BaseModel):
    """Timing and sizing rules shared by every room"""
    night_duration: float = Field(30, gt=0, description="Seconds before night actions resolve")
    day_duration: float = Field(120, gt=0, description="Seconds before day votes resolve")
    transition_delay: float = Field(5, ge=0, description="Pause between a day result and the next night")
    min_players: int = Field(4, ge=4, description="Players required to start a game")
    room_code_length: int = Field(4, ge=1, description="Length of generated room codes")


class Player(BaseModel):
    """A connected participant of a room"""
    id: str = Field(..., description="Connection-scoped player identifier")
    username: str
    role: Optional[Role] = Field(None, description="Assigned at game start")
    is_alive: bool = True
    is_ready: bool = False


class ChatMessage(BaseModel):
    """Entry of the room's message log"""
    sender: str
    content: str
    is_werewolf_chat: bool = False


class RoleHistoryEntry(BaseModel):
    """Record of an eliminated player, revealed at game end"""
    id: str
    username: str
    role: Role
    day_eliminated: int


class Room(BaseModel):
    """Complete state of one game session"""
    room_code: str = Field(..., description="Short uppercase code players join with")
    host: str = Field(..., description="Player id allowed to start the game")
    players: Dict[str, Player] = Field(default_factory=dict)
    phase: GamePhase = Field(GamePhase.LOBBY)
    day_count: int = Field(0, ge=0)

    votes: Dict[str, str] = Field(
        default_factory=dict,
        description="Day votes (voter_id -> target_id)"
    )
    werewolf_votes: Dict[str, str] = Field(
        default_factory=dict,
        description="Night kill votes (werewolf_id -> target_id)"
    )
    doctor_save: Optional[str] = Field(None, description="Player protected tonight")

    # Keyed by target rather than by seer; only one seer exists per game
    seer_checks: Dict[str, Role] = Field(
        default_factory=dict,
        description="Seer check results (target_id -> role)"
    )
    eliminated_tonight: Optional[str] = Field(None, description="Pending werewolf kill")

    messages: List[ChatMessage] = Field(default_factory=list)
    role_history: List[RoleHistoryEntry] = Field(default_factory=list)

    winner: Optional[Winner] = None

    _phase_timer: Optional[Any] = PrivateAttr(default=None)

    @property
    def phase_timer(self) -> Optional[Any]:
        """Handle of the pending phase timer, if any"""
        return self._phase_timer

    def replace_timer(self, handle: Optional[Any]) -> None:
        self.cancel_timer()
        self._phase_timer = handle

    def cancel_timer(self) -> None:
        if self._phase_timer is not None:
            self._phase_timer.cancel()
            self._phase_timer = None

    def alive_players(self) -> List[Player]:
        return [p for p in self.players.values() if p.is_alive]

    def alive_werewolves(self) -> List[Player]:
        return [p for p in self.players.values() if p.is_alive and p.role == Role.WEREWOLF]

    def is_in_progress(self) -> bool:
        return self.phase in (GamePhase.NIGHT, GamePhase.DAY)

    def eliminate(self, player_id: str) -> Optional[RoleHistoryEntry]:
        """Mark a living player dead and append them to the role history."""
        player = self.players.get(player_id)
        if player is None or not player.is_alive:
            return None
        return self.record_elimination(player)

    def record_elimination(self, player: Player) -> Optional[RoleHistoryEntry]:
        """Mark a player dead, including one already removed from the room."""
        player.is_alive = False
        if player.role is None:
            return None

        entry = RoleHistoryEntry(
            id=player.id,
            username=player.username,
            role=player.role,
            day_eliminated=self.day_count,
        )
        self.role_history.append(entry)
        return entry
