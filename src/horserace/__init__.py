"""
HorseRace - A threaded console horse race.

This package provides a small concurrent race simulation with:
- One thread per horse advancing at random strides
- A display thread redrawing every horse's track in place
- A thread-safe finish order recorder
- A controller running start, finish barrier, monitor shutdown and ranking
"""

__version__ = "0.1.0"

from horserace.config import RaceConfig
from horserace.race.horse import Horse
from horserace.scoring.results import RaceResult
from horserace.simulation.controller import RaceController, RaceOutcome, run_race

__all__ = ["RaceConfig", "Horse", "RaceResult", "RaceController", "RaceOutcome", "run_race", "__version__"]
