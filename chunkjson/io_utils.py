# chunkjson/io_utils.py
"""I/O collaborators: a binary input stream in, pretty JSON text out."""
import contextlib, json, os, sys
from pathlib import Path
from typing import Any, BinaryIO, Optional

from .errors import IOFailure

Json = Any

UTF8_BOM = b"\xef\xbb\xbf"


def open_input(path: Optional[Path]) -> BinaryIO:
    """Open the input file for binary reads, or hand back stdin when path is None."""
    if path is None:
        return sys.stdin.buffer
    try:
        return path.open("rb")
    except OSError as e:
        raise IOFailure(f"Failed to open input file: {e}") from e


class LineReader:
    """
    Text lines over a binary stream, decoded one at a time as UTF-8.
    Nothing past the last requested line is read or decoded, so bytes after
    the blank terminator never matter. A BOM on the first line is dropped.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self._first = True

    def readline(self) -> str:
        raw = self.stream.readline()
        if self._first:
            self._first = False
            if raw.startswith(UTF8_BOM):
                raw = raw[len(UTF8_BOM):]
        return raw.decode("utf-8")


def dumps_pretty(obj: Json) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=4, allow_nan=False)


def write_output(path: Optional[Path], text: str) -> int:
    """
    Write text to path (atomically, via a temp file) or to stdout when path is
    None. Returns the number of bytes written.
    """
    data = text.encode("utf-8")
    try:
        if path is None:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
            return len(data)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            with tmp.open("wb") as f:
                f.write(data)
            os.replace(tmp, path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
    except OSError as e:
        raise IOFailure(f"Failed to write JSON data: {e}") from e
    return len(data)
