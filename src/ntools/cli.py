import os
import sys
import argparse
from typing import Callable, List, Optional

from .bin import BinFile
from .console import report, setup_logging, stdout_console
from .hexdump import dump
from .layout import row_width_for
from .tree import print_tree


def add_common(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--no-color", dest="color", action="store_false", help="Plain, uncolored output"
    )
    return parser


def add_hex_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "nhex",
        description="Displays the binary content of a file in hexadecimal format.",
    )
    parser.add_argument("file_path", type=str, help="The file to examine")
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Browse the file in a TUI"
    )
    return add_common(parser)


def add_tree_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "ntree", description="Prints a directory and everything below it as a tree."
    )
    parser.add_argument(
        "directory_path", type=str, nargs="?", default=".", help="Where to start"
    )
    return add_common(parser)


def guarded(run: Callable[[], int]) -> int:
    try:
        return run()
    except KeyboardInterrupt:
        return 130
    except BrokenPipeError:
        # the reader went away; point stdout at devnull so the final flush is quiet
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1


def dump_file(file_path: str, color: bool) -> int:
    console = stdout_console(color)
    row_width = row_width_for(console)
    try:
        file = open(file_path, "rb")
    except OSError as exc:
        report(f"Error opening file '{file_path}': {exc.strerror or exc}")
        return 1
    with file:
        try:
            dump(file, row_width, console)
        except MemoryError:
            report(f"Error allocating a {row_width} byte buffer")
            return 1
    return 0


def browse_file(file_path: str) -> int:
    from .tui import HexView

    try:
        bf = BinFile(file_path)
        with bf.open():
            pass
    except OSError as exc:
        report(f"Error opening file '{file_path}': {exc.strerror or exc}")
        return 1
    app = HexView(bf)
    app.run()
    return 0


def hex_main(argv: Optional[List[str]] = None) -> int:
    parser = add_hex_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    if args.interactive:
        return browse_file(args.file_path)
    return guarded(lambda: dump_file(args.file_path, args.color))


def tree_main(argv: Optional[List[str]] = None) -> int:
    parser = add_tree_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    console = stdout_console(args.color)

    def run() -> int:
        print_tree(args.directory_path, console)
        return 0

    return guarded(run)


if __name__ == "__main__":
    sys.exit(hex_main(sys.argv[1:]))
