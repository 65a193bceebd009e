# chunkjson/decoder.py
"""
Top-level orchestration: load the chunk table, apply patch lines, decode chunk 0.

Input text:
  line 1       JSON array, the initial chunk table
  line 2..N    patch lines 'P<index>:<JSON array>'
  blank line   terminator (optional at end of input)
"""
from __future__ import annotations
import io, sys
from typing import Any, BinaryIO, TextIO

from .containers import MAGIC_SIZE, detect_container, unwrap
from .errors import DecodeError, DepthExceeded, IOFailure
from .fragments import DEFAULT_MAX_DEPTH, FragmentDecoder
from .io_utils import LineReader
from .table import ChunkTable, read_table

Json = Any

ROOT_INDEX = 0


def decode_table(table: ChunkTable, max_depth: int = DEFAULT_MAX_DEPTH) -> Json:
    """Decode the root chunk of an already loaded (and patched) table."""
    try:
        return FragmentDecoder(table, max_depth=max_depth).decode_chunk(ROOT_INDEX)
    except RecursionError:
        # max_depth set above what the interpreter stack can hold
        raise DepthExceeded("Maximum nesting depth exceeded (interpreter recursion limit)",
                            phase="fragment decode") from None
    except DecodeError as e:
        raise e.with_context("fragment decode")


def decode_reader(reader: TextIO, max_depth: int = DEFAULT_MAX_DEPTH, debug: bool = False) -> Json:
    table = read_table(reader, debug=debug)
    if debug:
        print(f"[DBG] decoding root over {len(table)} chunk(s)", file=sys.stderr)
    return decode_table(table, max_depth=max_depth)


def decode_text(text: str, max_depth: int = DEFAULT_MAX_DEPTH, debug: bool = False) -> Json:
    return decode_bytes(text.encode("utf-8"), max_depth=max_depth, debug=debug)


def decode_bytes(raw: bytes, max_depth: int = DEFAULT_MAX_DEPTH, debug: bool = False) -> Json:
    return decode_stream(io.BytesIO(raw), max_depth=max_depth, debug=debug)


def decode_stream(stream: BinaryIO, max_depth: int = DEFAULT_MAX_DEPTH, debug: bool = False) -> Json:
    """
    Decode from a binary stream. Plain text is consumed line by line up to the
    terminator; gzip/lz4-frame/zlib input is read whole and unwrapped first.
    """
    if not hasattr(stream, "peek"):
        stream = io.BufferedReader(stream)
    try:
        if detect_container(stream.peek(MAGIC_SIZE)[:MAGIC_SIZE]):
            payload, _kind = unwrap(stream.read(), debug=debug)
            stream = io.BytesIO(payload)
        elif debug:
            print("[DBG] plain text input", file=sys.stderr)
    except OSError as e:
        raise IOFailure(f"Failed to read input: {e}", phase="table load") from e
    except DecodeError as e:
        raise e.with_context("table load")
    return decode_reader(LineReader(stream), max_depth=max_depth, debug=debug)
