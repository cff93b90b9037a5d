"""
Track rendering - Text view of a single horse's progress.
"""

HORSE_MARK = "🐎"
EMPTY_MARK = "-"
FINISH_MARK = "🏁"

DEFAULT_FINISH_LINE = 50


def build_track(position: int, finish_line: int = DEFAULT_FINISH_LINE) -> str:
    """Render a horse's position as a track string.

    The track has finish_line + 1 cells. The cell at `position` holds
    the horse, every other cell is empty, and the finish flag follows
    the last cell.

    Args:
        position: Horse position (0..finish_line)
        finish_line: Finish line position

    Returns:
        Track string
    """
    if not 0 <= position <= finish_line:
        raise ValueError(f"position {position} outside track [0, {finish_line}]")

    cells = [EMPTY_MARK] * (finish_line + 1)
    cells[position] = HORSE_MARK
    return "".join(cells) + FINISH_MARK
