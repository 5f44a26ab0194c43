import logging
from typing import Iterable, Optional, Tuple

from rich.console import Console, ConsoleOptions, RenderResult
from rich.logging import RichHandler
from rich.segment import Segment
from rich.style import Style

OFFSET_STYLE = "#B0FC38 italic"
ASCII_STYLE = "cyan"
DIRECTORY_STYLE = "bold blue"
ERROR_STYLE = "bold red"

# (text, style) pieces of one output line
Part = Tuple[str, Optional[str]]


class RawLine:
    """
    One output line made of styled pieces. The text goes out as raw segments,
    so tabs and control characters in file names are kept as they are.
    """

    def __init__(self, parts: Iterable[Part]) -> None:
        self.parts = list(parts)

    @property
    def plain(self) -> str:
        return "".join(text for text, _ in self.parts)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        for text, style in self.parts:
            yield Segment(text, Style.parse(style) if style else None)
        yield Segment.line()


def stdout_console(color: bool = True) -> Console:
    # Built on demand so a replaced sys.stdout (pipes, pytest) is picked up
    return Console(highlight=False, emoji=False, markup=False, no_color=None if color else True)


def stderr_console() -> Console:
    return Console(stderr=True, highlight=False, emoji=False, markup=False)


def emit(console: Console, *parts: Part) -> None:
    """Prints one line exactly as given, never wrapped or cropped"""
    console.print(RawLine(parts), soft_wrap=True, crop=False)


def report(message: str) -> None:
    """Prints a user facing error on stderr"""
    emit(stderr_console(), (message, ERROR_STYLE))


def setup_logging(verbose: bool) -> None:
    logger = logging.getLogger(__package__)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = RichHandler(console=stderr_console(), show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
