"""
ntools. Terminal display utilities: a hex viewer (nhex) and a directory tree printer (ntree).
"""

__version__ = "0.1.0"

from .bin import BinFile  # noqa: F401
from .layout import compute_row_width  # noqa: F401
from .hexdump import format_row, dump  # noqa: F401
from .tree import DirEntry, list_children, sort_entries, render_tree, print_tree  # noqa: F401

__all__ = [
    "BinFile",
    "compute_row_width",
    "format_row",
    "dump",
    "DirEntry",
    "list_children",
    "sort_entries",
    "render_tree",
    "print_tree",
]
