"""
Simulation module - Race lifecycle.

This module contains:
- RaceController: Starts, drains and reports a race
- run_race: Validating entry point returning a RaceOutcome
"""

from horserace.simulation.controller import (
    RaceController,
    RaceOutcome,
    RaceStatus,
    run_race,
)

__all__ = [
    "RaceController",
    "RaceOutcome",
    "RaceStatus",
    "run_race",
]
