# chunkjson/__init__.py
from .errors import (
    DecodeError, MalformedInput, MalformedPatchLine, InvalidIndex, IndexOutOfBounds,
    InvalidPlaceholder, InvalidKeyIndex, NotAString, IOFailure, CyclicReference,
    DepthExceeded, SettingsError,
)
from .index import resolve_index
from .table import ChunkTable, read_table
from .fragments import DEFAULT_MAX_DEPTH, FragmentDecoder, decode_fragment
from .decoder import decode_table, decode_reader, decode_text, decode_bytes, decode_stream
from .io_utils import dumps_pretty

__version__ = "0.1.0"

__all__ = [
    "DecodeError","MalformedInput","MalformedPatchLine","InvalidIndex","IndexOutOfBounds",
    "InvalidPlaceholder","InvalidKeyIndex","NotAString","IOFailure","CyclicReference",
    "DepthExceeded","SettingsError",
    "resolve_index","ChunkTable","read_table",
    "DEFAULT_MAX_DEPTH","FragmentDecoder","decode_fragment",
    "decode_table","decode_reader","decode_text","decode_bytes","decode_stream","dumps_pretty",
]
