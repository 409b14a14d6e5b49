"""Game logic for Nightfall"""

from .actions import ActionHandler
from .engine import GameManager
from .phases import PhaseController
from .registry import RoomRegistry
from .roles import RoleAssigner
from .rules import RuleResult, RulesValidator
from .votes import VoteResolver
from .win import WinEvaluator

__all__ = [
    "ActionHandler",
    "GameManager",
    "PhaseController",
    "RoomRegistry",
    "RoleAssigner",
    "RuleResult",
    "RulesValidator",
    "VoteResolver",
    "WinEvaluator",
]
