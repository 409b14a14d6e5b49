"""
Game exceptions surfaced to players.

Only these failures reach a client, as a single ``error`` event carrying the
exception message. Every other illegal action is dropped without a reply.
"""


class NightfallError(Exception):
    """Base class for errors reported back to the originating player"""
    pass


class RoomNotFound(NightfallError):
    """No live room uses the requested code"""
    def __init__(self, room_code: str):
        self.room_code = room_code
        super().__init__("Room does not exist")


class GameAlreadyStarted(NightfallError):
    """The room has left the lobby and no longer accepts players"""
    def __init__(self, room_code: str):
        self.room_code = room_code
        super().__init__("Game has already started")


class InsufficientPlayers(NightfallError):
    """Too few players in the room to start"""
    def __init__(self, player_count: int, min_players: int):
        self.player_count = player_count
        self.min_players = min_players
        super().__init__(f"Need at least {min_players} players to start")
