"""
Horse - An independently running race participant.

Provides:
- One thread per horse advancing at random strides
- Lock-guarded position reads for other threads
- Interruptible pauses between strides
- A single finish report to the race result
"""

from typing import Callable
import logging
import threading

import numpy as np

from horserace.config import RaceConfig
from horserace.scoring.results import RaceResult


logger = logging.getLogger(__name__)


class Horse:
    """A race participant running on its own thread.

    The horse's thread is the only writer of its position. Any other
    thread reads it through the `position` property, which takes the
    same lock as the writer.

    Usage:
        horse = Horse(1, result)
        horse.start()
        horse.join()
    """

    def __init__(
        self,
        horse_id: int,
        result: RaceResult,
        config: RaceConfig | None = None,
        stride: Callable[[], int] | None = None,
        rng: np.random.Generator | None = None,
        log: logging.Logger | None = None,
    ):
        """Initialize horse.

        Args:
            horse_id: Unique horse number (1..N)
            result: Race result the horse reports its finish to
            config: Race configuration. Uses defaults if None.
            stride: Callable returning the next stride. Draws uniformly
                from [0, max_stride] if None.
            rng: Random generator used by the default stride
            log: Logger for lifecycle events
        """
        self.horse_id = horse_id
        self.config = config or RaceConfig()
        self._result = result
        self._log = log or logger

        self._rng = rng or np.random.default_rng()
        self._stride = stride or self._random_stride

        self._position: int = 0
        self._position_lock = threading.Lock()
        self._steps: int = 0
        self._finished = False
        self._ran = False

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self.run,
            name=f"Horse-{horse_id}",
            daemon=True,
        )

    @property
    def position(self) -> int:
        """Current position (0..finish_line)."""
        with self._position_lock:
            return self._position

    @property
    def steps(self) -> int:
        """Number of strides taken so far."""
        return self._steps

    @property
    def finished(self) -> bool:
        """Whether the horse reported a finish."""
        return self._finished

    @property
    def is_alive(self) -> bool:
        """Check if the horse's thread is running."""
        return self._thread.is_alive()

    @property
    def stop_requested(self) -> bool:
        """Check if the horse was told to stop."""
        return self._stop_event.is_set()

    def _random_stride(self) -> int:
        return int(self._rng.integers(0, self.config.max_stride + 1))

    def start(self) -> None:
        """Start running on the horse's own thread."""
        self._thread.start()

    def stop(self) -> None:
        """Ask the horse to leave the track.

        The horse stops at its next pause and does not report a finish
        unless it had already reached the line.
        """
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the horse's thread to end.

        Args:
            timeout: Maximum wait in seconds (None = wait forever)

        Returns:
            True if the thread has ended
        """
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def run(self) -> None:
        """Run until the finish line or until stopped.

        A horse runs once. Later calls, including start() after a direct
        run(), return without touching the result.
        """
        with self._position_lock:
            if self._ran:
                self._log.debug("Horse %d already ran", self.horse_id)
                return
            self._ran = True

        finish_line = self.config.finish_line

        while self._position < finish_line:
            stride = self._stride()
            with self._position_lock:
                self._position = min(self._position + max(stride, 0), finish_line)
            self._steps += 1

            if self._stop_event.wait(self.config.step_interval_s):
                self._log.debug(
                    "Horse %d stopped at %d/%d", self.horse_id, self._position, finish_line
                )
                break

        if self._position >= finish_line:
            place = self._result.record_finish(self.horse_id)
            self._finished = True
            self._log.debug("Horse %d finished in place %d", self.horse_id, place)

    def get_state(self) -> dict:
        """Get horse state.

        Returns:
            Dictionary containing horse state
        """
        return {
            "horse_id": self.horse_id,
            "position": self.position,
            "steps": self._steps,
            "finished": self._finished,
            "alive": self.is_alive,
        }
