"""Vote tallying shared by the werewolf kill and the day execution"""

from collections import Counter
from typing import Dict, Optional


class VoteResolver:
    """Plurality vote counting"""

    @staticmethod
    def tally(votes: Dict[str, str]) -> Counter:
        """Count votes per target, keyed in order of first appearance."""
        return Counter(votes.values())

    @staticmethod
    def resolve(votes: Dict[str, str]) -> Optional[str]:
        """
        Return the target with the strictly highest vote count.

        Ties go to the tied target that appears first when scanning the vote
        map, so the voter who voted earliest decides. An empty map yields None.
        """
        best_target = None
        best_count = 0
        for target_id, count in VoteResolver.tally(votes).items():
            if count > best_count:
                best_target = target_id
                best_count = count
        return best_target
