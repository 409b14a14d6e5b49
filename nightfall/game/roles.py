"""Role assignment for a starting room"""

import logging
import random
from typing import Dict, List, Optional

from nightfall.types.game import Role, Room

logger = logging.getLogger(__name__)


class RoleAssigner:
    """Hands out the fixed role set to a room's players"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @staticmethod
    def role_counts(player_count: int) -> Dict[Role, int]:
        """Number of each role for a game of ``player_count`` players."""
        werewolves = max(1, player_count // 4)
        seers = 1
        doctors = 1 if player_count >= 6 else 0
        return {
            Role.WEREWOLF: werewolves,
            Role.SEER: seers,
            Role.DOCTOR: doctors,
            Role.VILLAGER: max(0, player_count - werewolves - seers - doctors),
        }

    def assign_roles(self, room: Room) -> Dict[str, Role]:
        """Shuffle the players and deal werewolves, seer, doctor, then villagers"""
        shuffled_ids: List[str] = list(room.players.keys())
        self.rng.shuffle(shuffled_ids)

        counts = self.role_counts(len(shuffled_ids))
        deck: List[Role] = []
        for role in (Role.WEREWOLF, Role.SEER, Role.DOCTOR):
            deck.extend([role] * counts[role])

        assignments: Dict[str, Role] = {}
        for index, player_id in enumerate(shuffled_ids):
            role = deck[index] if index < len(deck) else Role.VILLAGER
            room.players[player_id].role = role
            assignments[player_id] = role

        logger.info(
            f"Assigned roles in room {room.room_code}: "
            f"{counts[Role.WEREWOLF]} werewolves, {counts[Role.DOCTOR]} doctors "
            f"among {len(shuffled_ids)} players"
        )
        return assignments
