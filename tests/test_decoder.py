# -*- coding: utf-8 -*-
"""End-to-end decoding tests: text/bytes in, plain JSON value out."""

# Standard
import gzip
import io
import zlib

# Third-Party
import lz4.frame
import pytest

# First-Party
from chunkjson.decoder import decode_bytes, decode_reader, decode_stream, decode_table, decode_text
from chunkjson.errors import (
    CyclicReference, DepthExceeded, IndexOutOfBounds, IOFailure, MalformedInput,
)
from chunkjson.io_utils import dumps_pretty
from chunkjson.table import ChunkTable

from .encoding import encode_chunks, encode_text

DOCUMENTS = [
    {"x": 5},
    [1, 2.5, "three", True, False, None],
    {"user": {"name": "Alice", "tags": ["a", "b", "a"]}, "n": [], "o": {}},
    [[["deep"]], {"P": "P", "_1": "_1"}],
    {"ünïcode": "✓", "empty": ""},
    "just a string",
    0,
]


def test_worked_example():
    assert decode_text('[{"_1":2},"x",5]\n') == {"x": 5}


def test_patch_scenario():
    assert decode_text('[["P",1],0]\nP0:[42]\n\n') == 42


@pytest.mark.parametrize("line,expected", [
    ('[["a","b"]]', ["a", "b"]),
    ('[[true,null,["x"]]]', [True, None, ["x"]]),
    ("[[]]", []),
    ("[{}]", {}),
    ('["solo", "unused"]', "solo"),
])
def test_literal_tables_decode_to_chunk_zero(line, expected):
    assert decode_text(line + "\n") == expected


@pytest.mark.parametrize("doc", DOCUMENTS)
def test_round_trip(doc):
    assert decode_text(encode_text(doc)) == doc


@pytest.mark.parametrize("doc", DOCUMENTS)
def test_round_trip_relative(doc):
    assert decode_text(encode_text(doc, relative=True)) == doc


def test_round_trip_preserves_key_order():
    doc = {"z": 1, "a": 2, "m": 3}
    assert list(decode_text(encode_text(doc))) == ["z", "a", "m"]


def test_relative_reference_sees_patched_length():
    assert decode_text("[[-1],[null,null]]\n") == [[None, None]]
    assert decode_text('[[-1],[null,null]]\nP1:["b"]\n') == ["b"]


def test_streamed_fragment_is_spliced_in():
    text = '[{"_1":2},"items",["P",0]]\nP2:[[4,5],"a","b"]\n\n'
    assert decode_text(text) == {"items": ["a", "b"]}


def test_lines_after_terminator_are_ignored():
    assert decode_text('[["P",1],0]\n\nP0:[42]\n') == 0


def test_undecodable_bytes_after_terminator_are_ignored():
    assert decode_bytes(b'[["P",1],0]\n\n\xff\xfe trailing\n') == 0


class _LineStream:
    """Binary stream that fails if read beyond the lines it was given."""

    def __init__(self, lines):
        self.lines = list(lines)

    def peek(self, n=0):
        return self.lines[0] if self.lines else b""

    def readline(self):
        if not self.lines:
            raise AssertionError("read past the terminator")
        return self.lines.pop(0)


def test_stream_is_not_read_past_terminator():
    stream = _LineStream([b'[["P",1],0]\n', b"P0:[42]\n", b"\n"])
    assert decode_stream(stream) == 42
    assert stream.lines == []


def test_out_of_range_float_fails_decode():
    with pytest.raises(MalformedInput) as exc:
        decode_text("[1e400]\n")
    assert exc.value.phase == "table load"


def test_dumps_pretty_refuses_non_finite_numbers():
    with pytest.raises(ValueError):
        dumps_pretty([float("inf")])


def test_empty_table_has_no_root():
    with pytest.raises(IndexOutOfBounds) as exc:
        decode_text("[]\n")
    assert exc.value.phase == "fragment decode"


def test_malformed_first_line():
    with pytest.raises(MalformedInput) as exc:
        decode_text("not json\n")
    assert exc.value.phase == "table load"


def test_non_standard_constants_rejected():
    with pytest.raises(MalformedInput):
        decode_text("[NaN]\n")


def test_cycle_reports_fragment_phase():
    with pytest.raises(CyclicReference) as exc:
        decode_text("[[0]]\n")
    assert exc.value.phase == "fragment decode"


def test_depth_limit_is_configurable():
    chain = [[i + 1] for i in range(30)] + [0]
    assert decode_table(ChunkTable(chain), max_depth=40) is not None
    with pytest.raises(DepthExceeded):
        decode_table(ChunkTable(chain), max_depth=20)


def test_interpreter_recursion_limit_becomes_depth_exceeded():
    chain = [[i + 1] for i in range(20000)] + [0]
    with pytest.raises(DepthExceeded):
        decode_table(ChunkTable(chain), max_depth=10 ** 6)


def test_decode_reader_accepts_any_line_reader():
    assert decode_reader(io.StringIO('[{"_1":2},"x",5]')) == {"x": 5}


def test_utf8_bom_is_dropped():
    assert decode_bytes(b'\xef\xbb\xbf[{"_1":2},"x",5]\n') == {"x": 5}


def test_invalid_utf8_is_io_failure():
    with pytest.raises(IOFailure):
        decode_bytes(b'["\xff"]\n')


@pytest.mark.parametrize("compress", [gzip.compress, zlib.compress, lz4.frame.compress])
def test_compressed_input_is_unwrapped(compress):
    raw = compress(encode_text({"x": [1, 2]}).encode("utf-8"))
    assert decode_bytes(raw) == {"x": [1, 2]}


def test_corrupt_container_is_malformed_input():
    with pytest.raises(MalformedInput) as exc:
        decode_bytes(b"\x1f\x8bnot really gzip")
    assert exc.value.phase == "table load"


def test_encoder_helper_shape():
    assert encode_chunks({"x": 5}) == [{"_1": 2}, "x", 5]


def test_dumps_pretty_uses_four_spaces():
    assert dumps_pretty({"x": [5]}) == '{\n    "x": [\n        5\n    ]\n}'
    assert dumps_pretty({"k": "✓"}) == '{\n    "k": "✓"\n}'
