"""
Roster - Fixed field of horses for one race.

Manages:
- Horse creation with IDs 1..N
- Per-horse random generators
- Read-only position snapshots for observers
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Tuple
import logging

import numpy as np

from horserace.config import RaceConfig
from horserace.race.horse import Horse
from horserace.scoring.results import RaceResult


logger = logging.getLogger(__name__)

# Builds the stride callable for a horse ID
StrideFactory = Callable[[int], Callable[[], int]]


@dataclass(frozen=True, eq=False)
class RosterSnapshot:
    """Point-in-time view of every horse's position, sorted by ID."""
    horse_ids: Tuple[int, ...]
    positions: np.ndarray
    finish_line: int

    def __len__(self) -> int:
        return len(self.horse_ids)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return zip(self.horse_ids, (int(p) for p in self.positions))

    @property
    def race_completed(self) -> bool:
        """True when every horse is at or past the finish line."""
        return bool(np.all(self.positions >= self.finish_line))

    @property
    def finished_count(self) -> int:
        """Number of horses at the finish line."""
        return int(np.count_nonzero(self.positions >= self.finish_line))


class Roster:
    """Immutable field of horses.

    Membership is fixed when the roster is built; only the horses'
    positions change while the race runs. Observers should read the
    field through snapshot() rather than touching the horses.
    """

    def __init__(self, horses: Tuple[Horse, ...] | list, finish_line: int):
        self._horses: Tuple[Horse, ...] = tuple(horses)
        self._finish_line = finish_line

    @classmethod
    def create(
        cls,
        count: int,
        result: RaceResult,
        config: RaceConfig | None = None,
        stride_factory: StrideFactory | None = None,
        log: logging.Logger | None = None,
    ) -> "Roster":
        """Build a roster of `count` horses numbered from 1.

        Args:
            count: Number of horses
            result: Shared race result
            config: Race configuration
            stride_factory: Per-horse stride source (random if None)
            log: Logger for lifecycle events

        Returns:
            New roster
        """
        config = config or RaceConfig()
        roster_log = log or logger

        # Independent streams per horse, reproducible when seeded
        seeds = np.random.SeedSequence(config.seed).spawn(count)

        horses = []
        for horse_id, seed in zip(range(1, count + 1), seeds):
            stride = stride_factory(horse_id) if stride_factory else None
            horses.append(Horse(
                horse_id,
                result,
                config=config,
                stride=stride,
                rng=np.random.default_rng(seed),
                log=log,
            ))
            roster_log.debug("Horse %d created", horse_id)

        return cls(horses, config.finish_line)

    def __len__(self) -> int:
        return len(self._horses)

    def __iter__(self) -> Iterator[Horse]:
        return iter(self._horses)

    def __getitem__(self, index: int) -> Horse:
        return self._horses[index]

    @property
    def horses(self) -> Tuple[Horse, ...]:
        """Horses in creation order."""
        return self._horses

    @property
    def finish_line(self) -> int:
        """Finish line position."""
        return self._finish_line

    def get_horse(self, horse_id: int) -> Horse | None:
        """Get horse by ID.

        Args:
            horse_id: Horse ID

        Returns:
            Horse if found
        """
        for horse in self._horses:
            if horse.horse_id == horse_id:
                return horse
        return None

    def snapshot(self) -> RosterSnapshot:
        """Read every position once.

        Returns:
            Snapshot sorted by ascending horse ID
        """
        ordered = sorted(self._horses, key=lambda horse: horse.horse_id)
        positions = np.array([horse.position for horse in ordered], dtype=np.int64)
        positions.setflags(write=False)
        return RosterSnapshot(
            horse_ids=tuple(horse.horse_id for horse in ordered),
            positions=positions,
            finish_line=self._finish_line,
        )
