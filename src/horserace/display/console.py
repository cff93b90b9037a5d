"""
Console control - ANSI cursor and screen primitives.
"""

from typing import TextIO
import sys
import threading

ESC = "\033"
CLEAR_SCREEN = f"{ESC}[H{ESC}[2J"


def cursor_up(lines: int) -> str:
    """Escape sequence moving the cursor up `lines` lines ("" for 0)."""
    return f"{ESC}[{lines}A" if lines > 0 else ""


class Console:
    """Thin wrapper over a text stream that understands ANSI cursor codes.

    Writes are serialized, so text from the monitor thread and the
    controller never interleaves within a single write.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a swapped sys.stdout is honored
        return self._stream or sys.stdout

    def write(self, text: str) -> None:
        """Write text and flush."""
        with self._lock:
            self.stream.write(text)
            self.stream.flush()

    def move_cursor_up(self, lines: int) -> None:
        """Move the cursor up by `lines` lines."""
        if lines > 0:
            self.write(cursor_up(lines))

    def clear_screen(self) -> None:
        """Clear the screen and move the cursor home."""
        self.write(CLEAR_SCREEN)
