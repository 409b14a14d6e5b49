"""Room registry: live rooms and player membership"""

import logging
import random
import string
from typing import Dict, Iterator, Optional, Tuple

from nightfall.errors.exceptions import GameAlreadyStarted, RoomNotFound
from nightfall.types.game import GamePhase, Player, Room

logger = logging.getLogger(__name__)


class RoomRegistry:
    """
    Owns every live room and the player -> room mapping.

    A player belongs to at most one room. Rooms are created by their host and
    destroyed when their last player leaves.
    """

    def __init__(self, code_length: int = 4, rng: Optional[random.Random] = None):
        self.code_length = code_length
        self.rng = rng or random.Random()
        self.rooms: Dict[str, Room] = {}
        self.player_rooms: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, room_code: object) -> bool:
        return room_code in self.rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self.rooms.values()))

    def generate_room_code(self) -> str:
        """Random uppercase code, regenerated while it collides with a live room."""
        code = "".join(self.rng.choices(string.ascii_uppercase, k=self.code_length))
        while code in self.rooms:
            logger.warning(f"Room code collision detected, regenerating: {code}")
            code = "".join(self.rng.choices(string.ascii_uppercase, k=self.code_length))
        return code

    def get_room(self, room_code: Optional[str]) -> Optional[Room]:
        if not room_code:
            return None
        return self.rooms.get(room_code)

    def require_room(self, room_code: Optional[str]) -> Room:
        room = self.get_room(room_code)
        if room is None:
            raise RoomNotFound(room_code or "")
        return room

    def room_of(self, player_id: str) -> Optional[Room]:
        return self.get_room(self.player_rooms.get(player_id))

    def create_room(self, creator_id: str, username: str) -> Room:
        """Create a lobby with the creator as host and sole player."""
        room_code = self.generate_room_code()
        room = Room(
            room_code=room_code,
            host=creator_id,
            players={creator_id: Player(id=creator_id, username=username)},
            phase=GamePhase.LOBBY,
        )
        self.rooms[room_code] = room
        self.player_rooms[creator_id] = room_code

        logger.info(f"Created room {room_code} hosted by {username} ({creator_id})")
        return room

    def join_room(self, player_id: str, username: str, room_code: str) -> Room:
        """
        Add a player to a lobby.

        Raises:
            RoomNotFound: No room uses the code
            GameAlreadyStarted: The room is no longer in the lobby
        """
        room = self.get_room(room_code)
        if room is None:
            raise RoomNotFound(room_code)
        if room.phase != GamePhase.LOBBY:
            raise GameAlreadyStarted(room_code)

        room.players[player_id] = Player(id=player_id, username=username)
        self.player_rooms[player_id] = room_code

        logger.info(
            f"Player {username} ({player_id}) joined room {room_code}, "
            f"now {len(room.players)} players"
        )
        return room

    def remove_player(self, player_id: str) -> Optional[Tuple[Room, Player]]:
        """
        Detach a player from their room.

        Returns the room and the removed player, or None when the player was
        not in a room. An emptied room is destroyed and its timer cancelled;
        a departing host is replaced by the first remaining player.
        """
        room_code = self.player_rooms.pop(player_id, None)
        room = self.rooms.get(room_code) if room_code else None
        if room is None:
            return None

        player = room.players.pop(player_id, None)
        if player is None:
            return None

        if not room.players:
            self.destroy_room(room)
        elif room.host == player_id:
            room.host = next(iter(room.players))
            logger.info(f"Host of room {room.room_code} passed to {room.host}")

        logger.info(f"Player {player.username} ({player_id}) left room {room.room_code}")
        return room, player

    def destroy_room(self, room: Room) -> None:
        room.cancel_timer()
        for player_id in list(room.players):
            self.player_rooms.pop(player_id, None)
        self.rooms.pop(room.room_code, None)
        logger.info(f"Destroyed room {room.room_code}")
