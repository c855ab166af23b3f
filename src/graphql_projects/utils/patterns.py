"""Unified file pattern matching - single source of truth.

All include/exclude membership checks and glob pointer expansion go through
this module so both agree on what a pattern means:

- ``*`` matches within one path segment, ``**`` spans any number of segments
  (including none), ``?`` and ``[...]`` behave like shell globs;
- ``{a,b}`` brace groups are expanded before matching;
- wildcards match dotfiles (``*.graphql`` matches ``.hidden.graphql``).

Example:
    from graphql_projects.utils.patterns import matches

    if matches("/repo/src/app.ts", "/repo", ["src/**"]):
        print("file belongs to the project")
"""
from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Any, List, Mapping

WILDCARD_CHARS = frozenset("*?[")


def matches(filepath: str, base_dir: str, pattern: Any) -> bool:
    """Check whether ``filepath`` matches ``pattern`` relative to ``base_dir``.

    Args:
        filepath: File to test. Absolute paths are made relative to ``base_dir``.
        base_dir: Directory the pattern is relative to (the config's directory).
        pattern: A glob string, a sequence of patterns, or a single-key mapping
            ``{pattern: options}`` whose options are ignored.

    Returns:
        True if any pattern matches
    """
    if not pattern:
        return False

    if isinstance(pattern, (list, tuple)):
        return any(matches(filepath, base_dir, p) for p in pattern)

    if isinstance(pattern, Mapping):
        return matches(filepath, base_dir, next(iter(pattern)))

    if isinstance(pattern, str):
        return _matches_pattern(
            _normalize(filepath, base_dir),
            _normalize(pattern, base_dir),
        )

    return False


def has_magic(pattern: str) -> bool:
    """Return True if ``pattern`` contains glob wildcards."""
    return any(ch in WILDCARD_CHARS for ch in pattern)


def expand_glob(pattern: str, cwd: str) -> List[str]:
    """Expand ``pattern`` into the files it matches.

    Relative patterns are expanded under ``cwd`` and yield relative paths;
    absolute patterns yield absolute paths. Dotfiles are included. The
    result is sorted and free of duplicates.

    Args:
        pattern: Glob pattern
        cwd: Base directory for relative patterns

    Returns:
        Sorted list of matching file paths
    """
    found: set[str] = set()
    absolute = os.path.isabs(pattern)

    for expanded in _expand_braces(_to_posix(pattern)):
        root, rest = _split_static_prefix(expanded)
        if absolute:
            walk_root = Path(root or "/")
        else:
            walk_root = Path(cwd) / root if root else Path(cwd)

        if not rest:
            # No wildcard at all: the pattern names a single file.
            if walk_root.is_file():
                found.add(expanded)
            continue

        if not walk_root.is_dir():
            continue

        regex = _compile(rest)
        for dirpath, _dirnames, filenames in os.walk(walk_root):
            for filename in filenames:
                full = Path(dirpath) / filename
                relative = full.relative_to(walk_root).as_posix()
                if regex.match(relative) is None:
                    continue
                if absolute:
                    found.add(full.as_posix())
                else:
                    found.add(f"{root}/{relative}" if root else relative)

    return sorted(found)


def _normalize(path: str, base_dir: str) -> str:
    if os.path.isabs(path):
        path = os.path.relpath(path, base_dir)
    return _to_posix(os.path.normpath(path))


def _to_posix(path: str) -> str:
    return str(PurePosixPath(path.replace("\\", "/")))


def _matches_pattern(file_path: str, pattern: str) -> bool:
    for pat in _expand_braces(pattern):
        if _compile(pat).match(file_path) is not None:
            return True
    return False


def _split_static_prefix(pattern: str) -> tuple[str, str]:
    """Split ``pattern`` into its wildcard-free leading directories and the rest."""
    parts = pattern.split("/")
    static: list[str] = []
    for index, part in enumerate(parts):
        if has_magic(part):
            return "/".join(static), "/".join(parts[index:])
        static.append(part)
    return "/".join(static), ""


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    parts = pattern.split("/")
    regex = ""
    for index, part in enumerate(parts):
        last = index == len(parts) - 1
        if part == "**":
            regex += ".*" if last else "(?:.*/)?"
        else:
            regex += _translate_segment(part)
            if not last:
                regex += "/"
    try:
        return re.compile(rf"\A{regex}\Z", re.DOTALL)
    except re.error:
        return re.compile(rf"\A{re.escape(pattern)}\Z", re.DOTALL)


def _translate_segment(segment: str) -> str:
    out: list[str] = []
    i, n = 0, len(segment)
    while i < n:
        ch = segment[i]
        i += 1
        if ch == "*":
            while i < n and segment[i] == "*":
                i += 1
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        elif ch == "[":
            start = i + 1 if i < n and segment[i] in "!^" else i
            # A leading "]" is part of the class.
            if start < n and segment[start] == "]":
                start += 1
            end = segment.find("]", start)
            if end == -1:
                out.append(re.escape(ch))
                continue
            body = segment[i:end]
            i = end + 1
            if body[:1] in ("!", "^"):
                body = "^" + body[1:]
            out.append(f"[{body.replace(chr(92), chr(92) * 2)}]")
        else:
            out.append(re.escape(ch))
    return "".join(out)


def _expand_braces(pattern: str) -> list[str]:
    """Expand a single-level brace group like 'foo.{a,b}' into ['foo.a', 'foo.b'].

    Supports multiple brace groups via recursion.
    If no braces are present, returns [pattern].
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]
    end = pattern.find("}", start + 1)
    if end == -1:
        return [pattern]

    before = pattern[:start]
    inside = pattern[start + 1 : end]
    after = pattern[end + 1 :]

    parts = [p.strip() for p in inside.split(",") if p.strip()]
    if len(parts) <= 1:
        return [pattern]

    out: list[str] = []
    for part in parts:
        out.extend(_expand_braces(f"{before}{part}{after}"))
    return out


__all__ = [
    "matches",
    "has_magic",
    "expand_glob",
]
