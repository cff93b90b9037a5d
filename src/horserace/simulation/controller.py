"""
Race controller - Runs a race from start to final ranking.

Provides:
- Field creation and validation
- Monitor and horse thread lifecycle
- Completion barrier over every horse
- Bounded monitor shutdown
- Final ranking report
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple
import logging
import time

from horserace.config import RaceConfig
from horserace.display.console import Console
from horserace.display.monitor import RaceMonitor, MonitorExit
from horserace.race.roster import Roster, StrideFactory
from horserace.scoring.results import RaceResult, RankEntry


logger = logging.getLogger(__name__)

INVALID_COUNT_MESSAGE = "The number of horses must be at least 1."


class RaceStatus(Enum):
    """How a race ended."""
    COMPLETED = "completed"
    INVALID_CONFIG = "invalid_config"
    FAILED = "failed"


@dataclass
class RaceOutcome:
    """Result of one race run."""
    status: RaceStatus
    horse_count: int
    ranking: Tuple[RankEntry, ...] = ()
    duration_s: float = 0.0
    monitor_stopped: bool = True
    monitor_exit: MonitorExit | None = None
    warnings: List[str] = field(default_factory=list)
    error: str = ""

    @property
    def ok(self) -> bool:
        """True if the race ran to its ranking."""
        return self.status == RaceStatus.COMPLETED

    @property
    def finish_order(self) -> Tuple[int, ...]:
        """Horse IDs in finishing order."""
        return tuple(entry.horse_id for entry in self.ranking)


class RaceController:
    """Owns the horses, the result and the monitor of one race.

    Lifecycle:
    1. Start the monitor
    2. Short pause so the first frame appears before the start
    3. Start every horse
    4. Join every horse (in roster order)
    5. Stop the monitor, waiting at most monitor_join_timeout_s
    6. Print the ranking

    Usage:
        controller = RaceController(5)
        outcome = controller.start_race()
    """

    def __init__(
        self,
        horse_count: int,
        config: RaceConfig | None = None,
        console: Console | None = None,
        stride_factory: StrideFactory | None = None,
        log: logging.Logger | None = None,
    ):
        """Initialize controller and create the field.

        Args:
            horse_count: Number of horses (at least 1)
            config: Race configuration. Uses defaults if None.
            console: Output console (stdout if None)
            stride_factory: Per-horse stride source (random if None)
            log: Logger for lifecycle events
        """
        if horse_count < 1:
            raise ValueError(f"horse_count must be at least 1, got {horse_count}")

        self.config = config or RaceConfig()
        self.horse_count = horse_count
        self._console = console or Console()
        self._log = log or logger
        # Components keep their own module loggers unless one was injected
        self._component_log = log
        self.warnings: List[str] = []

        self._log.info("RaceController created - horses: %d", horse_count)
        if horse_count > self.config.crowded_field_threshold:
            self._warn(
                f"Large field of {horse_count} horses may affect performance"
            )

        self.result = RaceResult()
        self.roster = Roster.create(
            horse_count,
            self.result,
            config=self.config,
            stride_factory=stride_factory,
            log=self._component_log,
        )
        self._log.info("All horses created. Total %d", len(self.roster))

        self.monitor: RaceMonitor | None = None
        self._aborted = False

    @property
    def aborted(self) -> bool:
        """Whether the race was aborted."""
        return self._aborted

    def _warn(self, message: str) -> None:
        self._log.warning(message)
        self.warnings.append(message)

    def abort(self) -> None:
        """Pull every horse off the track.

        Horses that have not reached the finish line never appear in
        the ranking.
        """
        self._aborted = True
        self._log.warning("Race aborted")
        for horse in self.roster:
            horse.stop()

    def start_race(self) -> RaceOutcome:
        """Run the race to completion.

        Returns:
            Race outcome with the final ranking

        Raises:
            KeyboardInterrupt: If interrupted while waiting (after stopping
                every thread)
        """
        self._log.info("======= Race start =======")
        start_time = time.monotonic()

        self.monitor = RaceMonitor(
            self.roster,
            config=self.config,
            console=self._console,
            log=self._component_log,
        )

        try:
            self._log.debug("Starting race monitor")
            self.monitor.start()

            time.sleep(self.config.start_delay_s)

            self._log.info("Starting all horses")
            for horse in self.roster:
                horse.start()
                self._log.debug("Horse %d started", horse.horse_id)
            self._log.info("All horses are running!")

            self._log.debug("Waiting for every horse to finish")
            for horse in self.roster:
                horse.join()
                self._log.debug("Horse %d done", horse.horse_id)
            self._log.info("All horses are done!")

            monitor_stopped = self._stop_monitor()
        except KeyboardInterrupt:
            self._log.error("Race interrupted while waiting")
            self._shutdown()
            raise
        except Exception:
            self._shutdown()
            raise

        unfinished = len(self.roster) - len(self.result)
        if unfinished and not self._aborted:
            self._warn(f"{unfinished} horses did not finish")

        ranking = self.result.ranking()
        self._report(ranking)

        duration = time.monotonic() - start_time
        self._log.info("======= Race complete (%.0fms) =======", duration * 1000)

        return RaceOutcome(
            status=RaceStatus.COMPLETED,
            horse_count=self.horse_count,
            ranking=ranking,
            duration_s=duration,
            monitor_stopped=monitor_stopped,
            monitor_exit=self.monitor.exit_reason,
            warnings=list(self.warnings),
        )

    def _stop_monitor(self) -> bool:
        self._log.debug("Sending stop signal to race monitor")
        self.monitor.stop()

        timeout = self.config.monitor_join_timeout_s
        if self.monitor.join(timeout):
            self._log.debug("Race monitor stopped")
            return True

        self._warn(f"Race monitor did not stop within {timeout:g}s")
        return False

    def _shutdown(self) -> None:
        for horse in self.roster:
            horse.stop()
        if self.monitor is not None:
            self.monitor.stop()

    def _report(self, ranking: Tuple[RankEntry, ...]) -> None:
        self._log.info("======= Final ranking =======")
        lines = ["", "🏁 Final ranking", *self.result.format_ranking()]
        self._console.write("\n".join(lines) + "\n")
        for entry in ranking:
            self._log.info("Place %d: horse %d", entry.rank, entry.horse_id)


def run_race(
    horse_count: int,
    config: RaceConfig | None = None,
    console: Console | None = None,
    stride_factory: StrideFactory | None = None,
    log: logging.Logger | None = None,
) -> RaceOutcome:
    """Validate the field size and run a race.

    Invalid counts and unexpected errors are reported to the user and
    returned as outcomes. KeyboardInterrupt propagates.

    Args:
        horse_count: Number of horses
        config: Race configuration
        console: Output console (stdout if None)
        stride_factory: Per-horse stride source (random if None)
        log: Logger for lifecycle events

    Returns:
        Race outcome
    """
    console = console or Console()

    if horse_count < 1:
        (log or logger).error("Invalid horse count: %d", horse_count)
        console.write(INVALID_COUNT_MESSAGE + "\n")
        return RaceOutcome(
            status=RaceStatus.INVALID_CONFIG,
            horse_count=horse_count,
            error="invalid participant count",
        )

    try:
        controller = RaceController(
            horse_count,
            config=config,
            console=console,
            stride_factory=stride_factory,
            log=log,
        )
        return controller.start_race()
    except Exception as exc:  # pylint: disable=broad-except
        (log or logger).exception("Error during race")
        console.write(f"An error occurred during the race: {exc}\n")
        return RaceOutcome(
            status=RaceStatus.FAILED,
            horse_count=horse_count,
            error=str(exc),
        )
