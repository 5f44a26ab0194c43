import logging
from typing import Optional

from rich.console import Console

log = logging.getLogger(__name__)

DEFAULT_ROW_WIDTH: int = int(16)
MIN_ROW_WIDTH: int = int(4)
MAX_ROW_WIDTH: int = int(64)

# A row is "OOOOOOOO: " + N * "XX " + " " + " |" + N chars + "|", i.e. 4N + 14
ROW_OVERHEAD: int = int(14)
BYTE_COST: int = int(4)


def compute_row_width(terminal_width: Optional[int]) -> int:
    """
    Returns how many bytes fit on one row for a terminal of the given width.
    None means the width is unknown and gives the default.
    """
    if terminal_width is None:
        return DEFAULT_ROW_WIDTH
    candidate = (terminal_width - ROW_OVERHEAD) // BYTE_COST
    width = max(MIN_ROW_WIDTH, min(MAX_ROW_WIDTH, candidate))
    # keep the mid-row gap centered
    if width % 2 != 0 and width > 1:
        width -= 1
    return width


def terminal_width(console: Console) -> Optional[int]:
    """The column count of the console, or None when it is not a terminal"""
    if not console.is_terminal:
        return None
    try:
        return console.size.width
    except (OSError, ValueError) as exc:
        log.debug("terminal size query failed: %s", exc)
        return None


def row_width_for(console: Console) -> int:
    columns = terminal_width(console)
    width = compute_row_width(columns)
    log.debug("terminal columns=%s, bytes per row=%d", columns, width)
    return width
