# chunkjson/index.py
from typing import Any, Optional

from .errors import IndexOutOfBounds, InvalidIndex

# References are signed 64-bit on the wire
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


def as_reference(value: Any) -> Optional[int]:
    """Return value as an integer reference, or None when it is not one.

    bool is an int subclass in Python but a distinct JSON type, so it never
    counts. Floats never count either, even integral ones like 1.0.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < I64_MIN or value > I64_MAX:
        return None
    return value


def is_json_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def resolve_index(candidate: Any, length: int) -> int:
    """
    Map a raw reference onto an absolute position in a table of `length` chunks.
      i >= 0  -> i, valid while i < length
      i <  0  -> length - |i|, valid while |i| <= length
    Called at every dereference so relative indices see the length of that moment.
    """
    i = as_reference(candidate)
    if i is None:
        raise InvalidIndex(f"Invalid number format: {candidate!r}")
    if i >= 0:
        if i < length:
            return i
        raise IndexOutOfBounds(f"Index out of bounds: {i} (table length {length})")
    m = -i
    if m <= length:
        return length - m
    raise IndexOutOfBounds(f"Index out of bounds: {i} (table length {length})")
