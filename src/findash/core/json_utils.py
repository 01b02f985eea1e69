#!/usr/bin/env python3
"""
JSON Utilities Module

Pretty-printed JSON files for workspace snapshots and exported reports.
Writes go through a sibling temporary file and an atomic rename, so an
interrupted save never leaves a half-written workspace behind. The finished
file gets the usual umask-based permissions rather than the private mode of
the temporary file.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def _default_file_mode() -> int:
    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def format_json(data: Any, sort_keys: bool = False) -> str:
    """Format data as a pretty-printed JSON string."""
    return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys)


def write_json(filepath: str | Path, data: Any, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file, replacing any existing file atomically.

    Parent directories are created as needed.

    Args:
        filepath: Destination path
        data: JSON-serializable data
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    payload = format_json(data, sort_keys=sort_keys)

    fd, tmp_name = tempfile.mkstemp(dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.write("\n")
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, filepath)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the content is not valid JSON (a ValueError)
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)
