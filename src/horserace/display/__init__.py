"""
Display module - Console output of a running race.

This module contains:
- RaceMonitor: Display thread redrawing the race in place
- Console: ANSI cursor and screen control
- build_track: Text track for a single horse
"""

from horserace.display.console import Console
from horserace.display.monitor import RaceMonitor, MonitorState, MonitorExit
from horserace.display.track import build_track

__all__ = [
    "Console",
    "RaceMonitor",
    "MonitorState",
    "MonitorExit",
    "build_track",
]
