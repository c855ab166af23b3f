"""Read-side file helpers shared by loaders and config reading.

Loaders run these through ``asyncio.to_thread`` so file access never blocks
the event loop.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]

_MISSING = object()


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file with simple, explicit error handling.

    Raises:
        FileNotFoundError: If the file does not exist
        Other I/O errors are propagated to callers
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {path}")
    return path.read_text(encoding="utf-8")


def read_json(file_path: PathLike, *, default: Any = _MISSING) -> Any:
    """Read a JSON file.

    Args:
        file_path: Path to JSON file
        default: Value to return if file doesn't exist (optional).
                 If not provided, FileNotFoundError is raised.
    """
    path = Path(file_path)
    if not path.exists():
        if default is not _MISSING:
            return default
        raise FileNotFoundError(f"JSON file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML (or JSON, which YAML accepts) with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


__all__ = ["PathLike", "read_text", "read_json", "read_yaml"]
