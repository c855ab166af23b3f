"""Shared helpers: pattern matching, file reading and type-definition merging."""
from __future__ import annotations

from .io import read_json, read_text, read_yaml
from .merge import filter_type_definitions, merge_type_defs
from .patterns import expand_glob, has_magic, matches

__all__ = [
    "read_json",
    "read_text",
    "read_yaml",
    "filter_type_definitions",
    "merge_type_defs",
    "expand_glob",
    "has_magic",
    "matches",
]
