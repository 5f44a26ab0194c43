"""
Directory tree rendering with box drawing connectors.

Each directory is listed completely (and its handle closed) before any of
its entries are printed, directories come before files, and the prefix for
a subtree is built by extending the parent's prefix string.
"""

import logging
import os
import stat
from functools import cmp_to_key
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from rich.console import Console

from .console import DIRECTORY_STYLE, Part, emit, report

log = logging.getLogger(__name__)

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

# (st_dev, st_ino) of a directory
DirId = Tuple[int, int]


class DirEntry(NamedTuple):
    name: str
    is_dir: bool
    ident: Optional[DirId] = None


def list_children(path: str) -> List[DirEntry]:
    """
    Lists the immediate children of path, classified by following each one
    with stat(). A directory that can't be opened is reported and gives an
    empty list; children whose status can't be read are reported and skipped.
    """
    entries: List[DirEntry] = []
    try:
        with os.scandir(path) as it:
            for child in it:
                if child.name in (".", ".."):
                    continue
                full_path = os.path.join(path, child.name)
                try:
                    st = os.stat(full_path)
                except OSError as exc:
                    report(f"Error getting file status '{full_path}': {exc.strerror or exc}")
                    continue
                if stat.S_ISDIR(st.st_mode):
                    entries.append(DirEntry(child.name, True, (st.st_dev, st.st_ino)))
                else:
                    entries.append(DirEntry(child.name, False))
    except OSError as exc:
        report(f"Error: Cannot open directory '{path}': {exc.strerror or exc}")
        return []
    return entries


def compare_entries(a: DirEntry, b: DirEntry) -> int:
    """Directories before files, then names byte by byte"""
    if a.is_dir and not b.is_dir:
        return -1
    if b.is_dir and not a.is_dir:
        return 1
    name_a, name_b = os.fsencode(a.name), os.fsencode(b.name)
    return (name_a > name_b) - (name_a < name_b)


def sort_entries(entries: Iterable[DirEntry]) -> List[DirEntry]:
    return sorted(entries, key=cmp_to_key(compare_entries))


def entry_line(prefix: str, entry: DirEntry, last: bool) -> List[Part]:
    return [
        (prefix + (LAST_BRANCH if last else BRANCH), None),
        (entry.name, DIRECTORY_STYLE if entry.is_dir else None),
    ]


class Frame(NamedTuple):
    """A directory being printed: where it is, its prefix and what is left of it"""

    path: str
    prefix: str
    ancestors: FrozenSet[DirId]
    entries: Iterator[Tuple[int, DirEntry]]
    count: int


def open_frame(path: str, prefix: str, ancestors: FrozenSet[DirId]) -> Frame:
    entries = sort_entries(list_children(path))
    log.debug("%s: %d entries", path, len(entries))
    return Frame(path, prefix, ancestors, enumerate(entries), len(entries))


def render_tree(
    path: str,
    console: Console,
    prefix: str = "",
    ancestors: FrozenSet[DirId] = frozenset(),
) -> None:
    """
    Prints the sorted children of path, one line each, and descends into
    every subdirectory with the prefix extended by one level. Directories
    already on the way down from the root are printed but not entered.

    The walk is depth first and pre-order, kept on an explicit stack so the
    depth of the tree is not limited by the interpreter's recursion limit.
    """
    stack = [open_frame(path, prefix, ancestors)]
    while stack:
        frame = stack[-1]
        step = next(frame.entries, None)
        if step is None:
            stack.pop()
            continue
        index, entry = step
        last = index == frame.count - 1
        emit(console, *entry_line(frame.prefix, entry, last))
        if not entry.is_dir:
            continue
        child_path = os.path.join(frame.path, entry.name)
        if entry.ident in frame.ancestors:
            report(f"Skipping '{child_path}': symbolic link loop")
            continue
        stack.append(
            open_frame(
                child_path,
                frame.prefix + (SPACE if last else PIPE),
                frame.ancestors | {entry.ident},
            )
        )


def directory_id(path: str) -> Optional[DirId]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def print_tree(path: str, console: Console) -> None:
    """Prints path itself, then everything below it"""
    emit(console, (path, DIRECTORY_STYLE))
    root = directory_id(path)
    render_tree(path, console, "", frozenset() if root is None else frozenset({root}))
