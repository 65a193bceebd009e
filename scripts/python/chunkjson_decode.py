#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Direct-execution entry for the chunk-table JSON decoder."""
from pathlib import Path
import sys

# Ensure the repo root is importable when invoked directly
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from chunkjson.cli_main import main

if __name__ == "__main__":
    sys.exit(main())
