"""Per-recipient projections of room state.

All information hiding lives here: each function builds the payload a given
viewer is allowed to see, independently of how it is delivered.
"""

from typing import List, Optional

from nightfall.types.events import (
    Casualty,
    GameOver,
    LobbyUpdate,
    PhaseChange,
    PlayerSummary,
    RoleAssigned,
    RoleHistoryItem,
    RoleRevealEntry,
)
from nightfall.types.game import GamePhase, Player, Role, Room


def visible_role(viewer: Optional[Player], subject: Player) -> Optional[Role]:
    """Werewolves see each other; nobody else sees any role."""
    if viewer is None:
        return None
    if viewer.role == Role.WEREWOLF and subject.role == Role.WEREWOLF:
        return Role.WEREWOLF
    return None


def player_list(room: Room, viewer_id: Optional[str] = None) -> List[PlayerSummary]:
    viewer = room.players.get(viewer_id) if viewer_id else None
    return [
        PlayerSummary(
            id=p.id,
            username=p.username,
            is_alive=p.is_alive,
            role=visible_role(viewer, p),
        )
        for p in room.players.values()
    ]


def lobby_update(room: Room) -> LobbyUpdate:
    return LobbyUpdate(players=player_list(room), host=room.host)


def role_assigned(room: Room, viewer_id: str) -> RoleAssigned:
    """The viewer's own role plus the player list as that viewer may see it."""
    viewer = room.players[viewer_id]
    return RoleAssigned(role=viewer.role, players=player_list(room, viewer_id))


def phase_change(room: Room, time_left: float) -> PhaseChange:
    eliminated = None
    if room.phase == GamePhase.DAY and room.eliminated_tonight:
        victim = room.players.get(room.eliminated_tonight)
        eliminated = Casualty(
            id=room.eliminated_tonight,
            username=victim.username if victim else None,
        )
    return PhaseChange(
        phase=room.phase,
        day_count=room.day_count,
        time_left=time_left,
        eliminated_player=eliminated,
    )


def role_reveal(room: Room) -> List[RoleRevealEntry]:
    return [
        RoleRevealEntry(id=p.id, username=p.username, role=p.role)
        for p in room.players.values()
    ]


def game_over(room: Room) -> GameOver:
    return GameOver(
        winner=room.winner,
        role_reveal=role_reveal(room),
        role_history=[
            RoleHistoryItem(**entry.model_dump())
            for entry in room.role_history
        ],
    )
