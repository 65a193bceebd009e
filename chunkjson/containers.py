# chunkjson/containers.py
# Transparent unwrapping of compressed encoded input.
# - gzip / lz4-frame / zlib are recognised by their magic bytes
# - anything else is passed through as plain text
import gzip, sys, zlib
from typing import Optional, Tuple

import lz4.frame as lz4f

from .errors import MalformedInput

MAGIC_GZIP = b"\x1f\x8b"
MAGIC_LZ4F = b"\x04\x22\x4d\x18"  # LZ4 frame
# zlib CMF byte 0x78 with the common FLG bytes (fastest / default / best)
MAGIC_ZLIB = (b"\x78\x01", b"\x78\x5e", b"\x78\x9c", b"\x78\xda")
MAGIC_SIZE = 4


def detect_container(b: bytes) -> Optional[str]:
    if b.startswith(MAGIC_GZIP):
        return "gzip"
    if b.startswith(MAGIC_LZ4F):
        return "lz4-frame"
    if b[:2] in MAGIC_ZLIB:
        return "zlib"
    return None


def decode_gzip(b: bytes) -> bytes:
    try:
        return gzip.decompress(b)
    except (OSError, EOFError, zlib.error) as e:
        raise MalformedInput(f"Corrupt gzip input: {e}") from e


def decode_lz4_frame(b: bytes) -> bytes:
    try:
        return lz4f.decompress(b)
    except RuntimeError as e:
        raise MalformedInput(f"Corrupt lz4-frame input: {e}") from e


def decode_zlib(b: bytes) -> bytes:
    try:
        return zlib.decompress(b)
    except zlib.error as e:
        raise MalformedInput(f"Corrupt zlib input: {e}") from e


_DECODERS = {
    "gzip": decode_gzip,
    "lz4-frame": decode_lz4_frame,
    "zlib": decode_zlib,
}


def unwrap(raw: bytes, debug: bool = False) -> Tuple[bytes, Optional[str]]:
    """Return (payload, container name or None)."""
    kind = detect_container(raw)
    if kind is None:
        if debug: print("[DBG] plain text input", file=sys.stderr)
        return raw, None
    out = _DECODERS[kind](raw)
    if debug:
        print(f"[DBG] {kind} detected: {len(raw)} -> {len(out)} bytes", file=sys.stderr)
    return out, kind
