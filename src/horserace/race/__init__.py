"""
Race module - Horses and the field they run in.

This module contains:
- Horse: A participant running on its own thread
- Roster: Fixed field of horses with read-only snapshots
"""

from horserace.race.horse import Horse
from horserace.race.roster import Roster, RosterSnapshot

__all__ = [
    "Horse",
    "Roster",
    "RosterSnapshot",
]
