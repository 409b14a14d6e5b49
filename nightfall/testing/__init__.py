"""Test doubles for driving games without a network or a real clock"""

from .fakes import ManualScheduler, ManualTimer, RecordingSink

__all__ = [
    "ManualScheduler",
    "ManualTimer",
    "RecordingSink",
]
