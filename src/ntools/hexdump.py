"""
Renders bytes as offset / hex / ASCII rows.
"""

import logging
from typing import BinaryIO, List

from rich.console import Console

from .bin import iter_rows
from .console import ASCII_STYLE, OFFSET_STYLE, Part, emit

log = logging.getLogger(__name__)


def is_printable(b: int) -> bool:
    return 0x20 <= b <= 0x7E


def hex_field(chunk: bytes, row_width: int) -> str:
    """
    The hex column of a row: one "XX " per slot, blank slots past the end
    of the data, and an extra space after the middle slot.
    """
    middle = row_width // 2 - 1
    parts = []
    for i in range(row_width):
        parts.append(f"{chunk[i]:02X} " if i < len(chunk) else "   ")
        if row_width >= 2 and i == middle:
            parts.append(" ")
    return "".join(parts)


def ascii_field(chunk: bytes) -> str:
    return "".join(chr(b) if is_printable(b) else "." for b in chunk)


def format_row(offset: int, chunk: bytes, row_width: int) -> str:
    return f"{offset:08X}: {hex_field(chunk, row_width)} |{ascii_field(chunk)}|"


def styled_row(offset: int, chunk: bytes, row_width: int) -> List[Part]:
    return [
        (f"{offset:08X}", OFFSET_STYLE),
        (f": {hex_field(chunk, row_width)} |", None),
        (ascii_field(chunk), ASCII_STYLE),
        ("|", None),
    ]


def dump(stream: BinaryIO, row_width: int, console: Console) -> int:
    """Prints every row of the stream, returns the number of rows printed"""
    rows = int(0)
    for offset, chunk in iter_rows(stream, row_width):
        emit(console, *styled_row(offset, chunk, row_width))
        rows += 1
    log.debug("printed %d rows of %d bytes", rows, row_width)
    return rows
