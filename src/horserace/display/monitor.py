"""
Race monitor - Live in-place display of the race.

Provides:
- Periodic frames of every horse's track, sorted by horse ID
- In-place redraw (cursor moves up by the previous frame's height)
- Race completion detection with a settle period
- Interruptible waits so the controller can stop it at any time
"""

from collections import deque
from enum import Enum
from typing import Deque, List
import logging
import threading

from horserace.config import RaceConfig
from horserace.display.console import CLEAR_SCREEN, Console, cursor_up
from horserace.display.track import build_track
from horserace.race.roster import Roster, RosterSnapshot


logger = logging.getLogger(__name__)

HEADER = "📢 Current race standings:"
RUNNING_FOOTER = "(Race in progress... final ranking is shown after the finish)"
COMPLETED_BANNER = "🏁 All horses have crossed the finish line!"

# Redraw distances kept for inspection
REDRAW_HISTORY = 100


class MonitorState(Enum):
    """Lifecycle state of the monitor."""
    IDLE = "idle"
    RENDERING = "rendering"
    AWAITING_REFRESH = "awaiting_refresh"
    SETTLING = "settling"
    STOPPED = "stopped"


class MonitorExit(Enum):
    """Why the monitor stopped."""
    RACE_COMPLETED = "race_completed"  # Settle period elapsed after the finish
    CANCELLED = "cancelled"            # Stop signal arrived during a wait


class RaceMonitor:
    """Display thread for a running race.

    Reads the roster only through snapshots, never writes to it.

    A frame is one header line, one line per horse and one footer
    line (the completion banner once every horse has finished). Each
    frame after the first is drawn over the previous one.

    Usage:
        monitor = RaceMonitor(roster)
        monitor.start()
        ...
        monitor.stop()
        monitor.join(timeout=5.0)
    """

    def __init__(
        self,
        roster: Roster,
        config: RaceConfig | None = None,
        console: Console | None = None,
        log: logging.Logger | None = None,
    ):
        """Initialize monitor.

        Args:
            roster: Horses to display
            config: Race configuration. Uses defaults if None.
            console: Output console (stdout if None)
            log: Logger for lifecycle events
        """
        self.config = config or RaceConfig()
        self._roster = roster
        self._console = console or Console()
        self._log = log or logger

        self._state = MonitorState.IDLE
        self._exit_reason: MonitorExit | None = None

        # Redraw bookkeeping
        self._lines_rendered: int = 0
        self._frames_rendered: int = 0
        self._redraws: int = 0
        self._redraw_line_counts: Deque[int] = deque(maxlen=REDRAW_HISTORY)
        self._last_snapshot: RosterSnapshot | None = None

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self.run,
            name="RaceMonitor-Thread",
            daemon=True,
        )

    @property
    def state(self) -> MonitorState:
        """Current lifecycle state."""
        return self._state

    @property
    def exit_reason(self) -> MonitorExit | None:
        """Why the monitor stopped (None while running)."""
        return self._exit_reason

    @property
    def lines_rendered(self) -> int:
        """Height of the most recent frame in lines."""
        return self._lines_rendered

    @property
    def frames_rendered(self) -> int:
        """Number of frames drawn."""
        return self._frames_rendered

    @property
    def redraw_line_counts(self) -> List[int]:
        """Cursor-up distances of the most recent redraws (at most REDRAW_HISTORY)."""
        return list(self._redraw_line_counts)

    @property
    def redraws(self) -> int:
        """Number of frames drawn over a previous frame."""
        return self._redraws

    @property
    def last_snapshot(self) -> RosterSnapshot | None:
        """Snapshot behind the most recent frame."""
        return self._last_snapshot

    @property
    def is_alive(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread.is_alive()

    def start(self) -> None:
        """Start the monitor thread."""
        self._thread.start()

    def stop(self) -> None:
        """Signal the monitor to stop at its current or next wait."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the monitor thread to end.

        Args:
            timeout: Maximum wait in seconds (None = wait forever)

        Returns:
            True if the thread has ended
        """
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def compose_frame(self, snapshot: RosterSnapshot) -> List[str]:
        """Build the lines of one frame.

        Args:
            snapshot: Positions to draw

        Returns:
            Header, one line per horse, then banner or footer
        """
        lines = [HEADER]
        for horse_id, position in snapshot:
            track = build_track(position, snapshot.finish_line)
            lines.append(f"Horse {horse_id:2d}: {track}")
        lines.append(COMPLETED_BANNER if snapshot.race_completed else RUNNING_FOOTER)
        return lines

    def render(self) -> RosterSnapshot:
        """Draw one frame over the previous one.

        Returns:
            Snapshot that was drawn
        """
        snapshot = self._roster.snapshot()
        lines = self.compose_frame(snapshot)

        prefix = ""
        if self._frames_rendered == 0 and self.config.clear_screen:
            prefix = CLEAR_SCREEN
        elif self._frames_rendered > 0:
            prefix = cursor_up(self._lines_rendered)
            self._redraws += 1
            self._redraw_line_counts.append(self._lines_rendered)

        # Cursor move and frame go out in one write so a frame is never half drawn
        self._console.write(prefix + "\n".join(lines) + "\n")

        self._lines_rendered = len(lines)
        self._frames_rendered += 1
        self._last_snapshot = snapshot
        return snapshot

    def run(self) -> None:
        """Draw frames until the race completes or a stop arrives."""
        self._log.debug("Race monitor started")

        while not self._stop_event.is_set():
            self._state = MonitorState.RENDERING
            snapshot = self.render()

            if snapshot.race_completed:
                self._state = MonitorState.SETTLING
                if self._stop_event.wait(self.config.settle_period_s):
                    self._finish(MonitorExit.CANCELLED)
                else:
                    self._finish(MonitorExit.RACE_COMPLETED)
                return

            self._state = MonitorState.AWAITING_REFRESH
            if self._stop_event.wait(self.config.refresh_interval_s):
                break

        self._finish(MonitorExit.CANCELLED)

    def _finish(self, reason: MonitorExit) -> None:
        self._exit_reason = reason
        self._state = MonitorState.STOPPED
        self._log.debug(
            "Race monitor stopped (%s) after %d frames", reason.value, self._frames_rendered
        )
