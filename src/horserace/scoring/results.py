"""
Race result - Thread-safe finish order recording.

Provides:
- Serialized finish recording from many horse threads
- Arrival-ordered ranking
- Printable ranking lines
"""

from dataclasses import dataclass
from typing import List, Tuple
import threading
import time


@dataclass(frozen=True)
class FinishRecord:
    """A single finish event."""
    horse_id: int
    finished_at: float  # time.monotonic() when the lock was acquired


@dataclass(frozen=True)
class RankEntry:
    """A horse's final place."""
    rank: int
    horse_id: int

    @property
    def label(self) -> str:
        """Display label for the horse."""
        return f"🐎 Horse {self.horse_id}"


def _ordinal(rank: int) -> str:
    if 10 <= rank % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"


class RaceResult:
    """Append-only finish log shared by all horses of a race.

    Every call to record_finish is serialized by a single lock, so
    entries are never lost or interleaved and the log order is the
    order in which horses acquired the lock.

    The ranking is meant to be read after every horse has been
    joined; reading earlier is safe but may miss late finishers.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: List[FinishRecord] = []

    def record_finish(self, horse_id: int) -> int:
        """Append a finisher to the log.

        Args:
            horse_id: ID of the horse that crossed the line

        Returns:
            1-based place given to the horse
        """
        with self._lock:
            self._records.append(FinishRecord(horse_id, time.monotonic()))
            return len(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @property
    def records(self) -> Tuple[FinishRecord, ...]:
        """Copy of the finish log in arrival order."""
        with self._lock:
            return tuple(self._records)

    @property
    def finish_order(self) -> Tuple[int, ...]:
        """Horse IDs in arrival order."""
        return tuple(record.horse_id for record in self.records)

    def ranking(self) -> Tuple[RankEntry, ...]:
        """Get the ranking for the current log.

        Returns:
            One entry per finisher, ranks starting at 1, in log order
        """
        return tuple(
            RankEntry(rank=index + 1, horse_id=record.horse_id)
            for index, record in enumerate(self.records)
        )

    def format_ranking(self) -> List[str]:
        """Get printable ranking lines.

        Returns:
            Lines like " 1st: 🐎 Horse 3"
        """
        return [
            f"{_ordinal(entry.rank):>4}: {entry.label}"
            for entry in self.ranking()
        ]
