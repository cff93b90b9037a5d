"""
Scoring module - Finish order and ranking.

This module contains:
- RaceResult: Thread-safe finish recorder
- RankEntry: A horse's final place
"""

from horserace.scoring.results import RaceResult, RankEntry, FinishRecord

__all__ = [
    "RaceResult",
    "RankEntry",
    "FinishRecord",
]
