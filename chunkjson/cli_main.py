#!/usr/bin/env python3
# chunkjson/cli_main.py
# Decode a chunk-table encoded JSON stream back into plain, pretty-printed JSON.
# - input/output default to stdin/stdout
# - CHUNKJSON_DEBUG / CHUNKJSON_MAX_DEPTH come from the environment or a .env file
import argparse, os, sys
from pathlib import Path
from typing import List, Optional

from .decoder import decode_stream
from .errors import DecodeError, SettingsError
from .io_utils import dumps_pretty, open_input, write_output
from .settings import load_env_file, load_settings


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="chunkjson-decode",
                                 description="Decode chunk-table encoded JSON → plain JSON")
    ap.add_argument("-i", "--input", type=Path, help="Encoded JSON file (defaults to stdin)")
    ap.add_argument("-o", "--output", type=Path, help="Decoded JSON file (defaults to stdout)")
    return ap


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_env_file(os.environ)
    settings = load_settings()
    debug = settings["debug"]

    if debug:
        print(f"[DBG] reading from {args.input or '<stdin>'}", file=sys.stderr)
    stream = open_input(args.input)
    try:
        value = decode_stream(stream, max_depth=settings["max_depth"], debug=debug)
    finally:
        if args.input is not None:
            stream.close()

    # Serialise fully before touching the sink so failures leave no partial output
    text = dumps_pretty(value)
    n = write_output(args.output, text)
    if debug:
        print(f"[DBG] wrote {n} bytes", file=sys.stderr)
    if args.output is not None:
        print(f"[OK] Decoded -> {args.output} ({n} bytes)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return run(argv)
    except (DecodeError, SettingsError) as e:
        print(f"[ERR] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
