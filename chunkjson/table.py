# chunkjson/table.py
from __future__ import annotations
import json, math, re, sys
from typing import Any, Iterator, List, Optional, TextIO

from .errors import DecodeError, IOFailure, InvalidPlaceholder, MalformedInput, MalformedPatchLine
from .index import resolve_index

Json = Any

# Patch labels: P3, P-1 (signed, ASCII digits only)
_P_INDEX_RX = re.compile(r'P(-?[0-9]+)')


def _reject_constant(name: str):
    # json.loads accepts NaN/Infinity/-Infinity; JSON does not
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_float(s: str) -> float:
    # 1e400 overflows to inf, which cannot be written back as JSON
    v = float(s)
    if not math.isfinite(v):
        raise ValueError(f"number out of range {s}")
    return v


def parse_json_array(text: str) -> List[Json]:
    """Strict json.loads of a line that must hold a JSON array."""
    try:
        obj = json.loads(text.strip(), parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        raise MalformedInput(f"Invalid JSON array: {e}") from e
    except RecursionError:
        raise MalformedInput("Invalid JSON array: nested too deeply") from None
    if not isinstance(obj, list):
        raise MalformedInput(f"Invalid JSON array: got {type(obj).__name__}")
    return obj


def parse_patch_label(label: str) -> int:
    m = _P_INDEX_RX.fullmatch(label.strip())
    if not m:
        raise MalformedPatchLine(f"Invalid P-index format: {label.strip()!r}")
    return int(m.group(1))


class ChunkTable:
    """Append-only list of raw chunks backing one decode."""

    def __init__(self, chunks: Optional[List[Json]] = None):
        self._chunks: List[Json] = list(chunks) if chunks else []

    @classmethod
    def load_line(cls, line: str) -> "ChunkTable":
        return cls(parse_json_array(line))

    def __len__(self) -> int:
        return len(self._chunks)

    def __getitem__(self, index: int) -> Json:
        return self._chunks[index]

    def __iter__(self) -> Iterator[Json]:
        return iter(self._chunks)

    @property
    def chunks(self) -> List[Json]:
        return self._chunks

    def resolve(self, candidate: Any) -> int:
        return resolve_index(candidate, len(self._chunks))

    def apply_patch_line(self, line: str) -> int:
        """
        Apply 'P<index>:<json array>'. The placeholder (a 2-element array) gets
        its second element set to the current table length, then the payload is
        appended so it starts exactly there. Returns the placeholder index.
        """
        label, sep, payload = line.partition(":")
        if not sep:
            raise MalformedPatchLine("Invalid extra line format: missing ':'")

        index = self.resolve(parse_patch_label(label))
        placeholder = self._chunks[index]
        if not isinstance(placeholder, list):
            raise InvalidPlaceholder(f"Invalid array format at chunk {index}")
        if len(placeholder) != 2:
            raise InvalidPlaceholder(f"Array length is not 2 at chunk {index} (got {len(placeholder)})")

        extra = parse_json_array(payload)
        placeholder[1] = len(self._chunks)
        self._chunks.extend(extra)
        return index


def _readline(reader: TextIO, what: str) -> str:
    try:
        return reader.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Failed to read the {what}: {e}") from e


def read_table(reader: TextIO, debug: bool = False) -> ChunkTable:
    """
    Read the first line as the chunk table, then apply patch lines until a blank
    line or end of input.
    """
    try:
        table = ChunkTable.load_line(_readline(reader, "first line"))
    except DecodeError as e:
        raise e.with_context("table load", 1)
    if debug:
        print(f"[DBG] loaded {len(table)} chunk(s)", file=sys.stderr)

    line_no = 1
    while True:
        line_no += 1
        try:
            line = _readline(reader, "extra line")
            if not line.strip():
                break
            before = len(table)
            index = table.apply_patch_line(line)
        except DecodeError as e:
            raise e.with_context("patch application", line_no)
        if debug:
            print(f"[DBG] patch P{index}: placeholder -> {before}, +{len(table) - before} chunk(s)",
                  file=sys.stderr)
    return table
