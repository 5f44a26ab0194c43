import os
import pathlib
from typing import BinaryIO, Iterator, Tuple


class BinFile:
    path: str
    size: int

    def __init__(self, filepath: str):
        self.path = pathlib.Path(filepath).resolve().as_posix()
        # get the number of bytes in the file.
        self.size = os.path.getsize(filepath)

    def open(self) -> BinaryIO:
        return open(self.path, "rb")


def iter_rows(stream: BinaryIO, row_width: int) -> Iterator[Tuple[int, bytes]]:
    """
    Reads the stream in chunks of row_width bytes, yielding (offset, chunk)
    until a read comes back empty. Only the last chunk may be short.
    """
    offset = int(0)
    while True:
        chunk = stream.read(row_width)
        if not chunk:
            return
        yield offset, chunk
        offset += len(chunk)
