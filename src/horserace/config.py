"""
Race Configuration

Timing, threshold and logging settings shared by every race component.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RaceConfig:
    """Configuration for a single race."""

    # Track
    finish_line: int = 50            # Terminal position every horse runs to
    max_stride: int = 2              # Strides are drawn uniformly from [0, max_stride]

    # Timing (seconds)
    step_interval_s: float = 0.2     # Pause between two strides of a horse
    refresh_interval_s: float = 0.3  # Pause between two monitor frames
    settle_period_s: float = 10.0    # Final frame stays visible this long
    start_delay_s: float = 0.1       # Lets the monitor draw before the start
    monitor_join_timeout_s: float = 5.0

    # Display
    clear_screen: bool = False       # Clear the console before the first frame

    # Field size
    crowded_field_threshold: int = 20  # Larger fields are accepted with a warning

    # Randomness (None = fresh OS entropy)
    seed: Optional[int] = None

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Validate and normalize configuration."""
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level}")

        if self.finish_line < 1:
            raise ValueError(f"finish_line must be positive, got {self.finish_line}")
        if self.max_stride < 1:
            raise ValueError(f"max_stride must be positive, got {self.max_stride}")

        timings = {
            "step_interval_s": self.step_interval_s,
            "refresh_interval_s": self.refresh_interval_s,
            "settle_period_s": self.settle_period_s,
            "start_delay_s": self.start_delay_s,
            "monitor_join_timeout_s": self.monitor_join_timeout_s,
        }
        for name, value in timings.items():
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    def fast(self) -> "RaceConfig":
        """Return a copy with every pause shortened tenfold."""
        return replace(
            self,
            step_interval_s=self.step_interval_s / 10,
            refresh_interval_s=self.refresh_interval_s / 10,
            settle_period_s=self.settle_period_s / 10,
            start_delay_s=self.start_delay_s / 10,
        )
