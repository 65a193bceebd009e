# chunkjson/fragments.py
"""
Fragment decoding: turn one raw chunk into plain JSON by following references.

  [1, "x", [2]]     numbers are references, other elements are nested fragments
  ["P", 3]          push marker, the whole array becomes decoded chunk 3
  {"_4": 5}         key comes from string chunk 4, value from decoded chunk 5

Chunks on the active dereference path are tracked so a reference back into that
path fails with CyclicReference instead of recursing forever. Shared chunks
reached through different branches are fine.
"""
from __future__ import annotations
import re
from typing import Any, Dict, List, Set

from .errors import CyclicReference, DepthExceeded, InvalidIndex, InvalidKeyIndex, NotAString
from .index import is_json_number
from .table import ChunkTable

Json = Any

DEFAULT_MAX_DEPTH = 256
PUSH_MARKER = "P"

_K_INDEX_RX = re.compile(r'_([0-9]+)')


class FragmentDecoder:
    def __init__(self, table: ChunkTable, max_depth: int = DEFAULT_MAX_DEPTH):
        self.table = table
        self.max_depth = max_depth
        self._active: Set[int] = set()

    def decode(self, fragment: Json, depth: int = 0) -> Json:
        if depth > self.max_depth:
            raise DepthExceeded(f"Maximum nesting depth exceeded ({self.max_depth})")
        if isinstance(fragment, list):
            return self._decode_array(fragment, depth)
        if isinstance(fragment, dict):
            return self._decode_object(fragment, depth)
        # str/int/float/bool/None are immutable
        return fragment

    def decode_chunk(self, candidate: Any, depth: int = 0) -> Json:
        """Resolve a reference and decode the chunk it points at."""
        index = self.table.resolve(candidate)
        if index in self._active:
            raise CyclicReference(f"Cyclic reference to chunk {index}")
        self._active.add(index)
        try:
            return self.decode(self.table[index], depth + 1)
        finally:
            self._active.discard(index)

    def _decode_array(self, arr: List[Json], depth: int) -> Json:
        if arr and arr[0] == PUSH_MARKER:
            if len(arr) < 2:
                raise InvalidIndex("Missing index in array")
            return self.decode_chunk(arr[1], depth)

        out: List[Json] = []
        for item in arr:
            if is_json_number(item):
                out.append(self.decode_chunk(item, depth))
            else:
                out.append(self.decode(item, depth + 1))
        return out

    def _decode_object(self, obj: Dict[str, Json], depth: int) -> Dict[str, Json]:
        out: Dict[str, Json] = {}
        for key, value in obj.items():
            m = _K_INDEX_RX.fullmatch(key)
            if not m:
                raise InvalidKeyIndex(f"Invalid K-index format: {key!r}")
            key_chunk = self.table[self.table.resolve(int(m.group(1)))]
            if not isinstance(key_chunk, str):
                raise NotAString(f"Invalid string format: key {key!r} points at {type(key_chunk).__name__}")
            out[key_chunk] = self.decode_chunk(value, depth)
        return out


def decode_fragment(table: ChunkTable, fragment: Json, max_depth: int = DEFAULT_MAX_DEPTH) -> Json:
    return FragmentDecoder(table, max_depth=max_depth).decode(fragment)
