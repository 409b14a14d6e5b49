"""Win-condition detection"""

import logging
from typing import Callable, Optional

from nightfall.game import views
from nightfall.types.events import OutboundEvent
from nightfall.types.game import GamePhase, Role, Room, Winner

logger = logging.getLogger(__name__)


class WinEvaluator:
    """Ends a room's game once one side has won"""

    def __init__(self, emit: Callable[[OutboundEvent], None]):
        self.emit = emit

    @staticmethod
    def check(room: Room) -> Optional[Winner]:
        """
        Determine the winner from the living players, if any.

        Villagers win once no werewolf is alive. Werewolves win as soon as
        they equal or outnumber everyone else.
        """
        werewolf_count = 0
        others_count = 0
        for player in room.alive_players():
            if player.role == Role.WEREWOLF:
                werewolf_count += 1
            else:
                others_count += 1

        if werewolf_count == 0:
            return Winner.VILLAGERS
        if werewolf_count >= others_count:
            return Winner.WEREWOLVES
        return None

    def evaluate(self, room: Room) -> bool:
        """Finish the game if it is won. Returns True when the game is over."""
        if room.phase == GamePhase.GAME_OVER:
            return True
        if not room.is_in_progress():
            return False

        winner = self.check(room)
        if winner is None:
            return False

        room.winner = winner
        room.phase = GamePhase.GAME_OVER
        room.cancel_timer()

        logger.info(f"Room {room.room_code} ended on day {room.day_count}. Winner: {winner.value}")
        self.emit(OutboundEvent(views.game_over(room), list(room.players)))
        return True
