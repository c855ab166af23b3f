"""Pointer values as a closed set of variants.

A schema or documents pointer in the configuration can be written as:

- a literal path, URL or inline SDL string (``"schema.graphql"``),
- a glob string (``"src/**/*.graphql"``),
- a list of pointers,
- a single-key mapping from a pointer to loader options
  (``{"schema.json": {"headers": {...}}}``).

``parse_pointer`` turns the raw value into one of the dataclasses below once,
where the configuration is ingested; everything downstream matches on the
variant instead of re-probing shapes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union

from graphql_projects.exceptions import PointerError

MAX_POINTER_DEPTH = 16


@dataclass(frozen=True)
class LiteralPointer:
    value: str

    @property
    def raw(self) -> str:
        return self.value


@dataclass(frozen=True)
class GlobPointer:
    pattern: str

    @property
    def raw(self) -> str:
        return self.pattern


@dataclass(frozen=True)
class ConfiguredPointer:
    pointer: "Pointer"
    options: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def raw(self) -> Dict[str, Any]:
        return {self.pointer.raw: dict(self.options)}


@dataclass(frozen=True)
class PointerList:
    items: Tuple["Pointer", ...]

    @property
    def raw(self) -> list:
        return [item.raw for item in self.items]


Pointer = Union[LiteralPointer, GlobPointer, ConfiguredPointer, PointerList]


def is_glob(value: Any) -> bool:
    """True if ``value`` is a string containing a wildcard marker."""
    return isinstance(value, str) and "*" in value


def is_pointer_with_configuration(value: Any) -> bool:
    """True for ``{pointer: {...options}}`` - one key whose value is a mapping."""
    if not isinstance(value, Mapping) or len(value) != 1:
        return False
    key = next(iter(value))
    return isinstance(key, str) and isinstance(value[key], Mapping)


def parse_pointer(raw: Any, *, _depth: int = 0) -> Pointer:
    """Build a :data:`Pointer` from a raw configuration value.

    Raises:
        PointerError: For values that are not a valid pointer, or that nest
            deeper than ``MAX_POINTER_DEPTH``.
    """
    if _depth > MAX_POINTER_DEPTH:
        raise PointerError(
            f"Pointer nests deeper than {MAX_POINTER_DEPTH} levels",
            context={"pointer": raw},
        )

    if isinstance(raw, (LiteralPointer, GlobPointer, ConfiguredPointer, PointerList)):
        return raw

    if isinstance(raw, str):
        if not raw.strip():
            raise PointerError("Pointer must not be an empty string", context={"pointer": raw})
        return GlobPointer(raw) if is_glob(raw) else LiteralPointer(raw)

    if isinstance(raw, (list, tuple)):
        return PointerList(tuple(parse_pointer(item, _depth=_depth + 1) for item in raw))

    if is_pointer_with_configuration(raw):
        key = next(iter(raw))
        inner = parse_pointer(key, _depth=_depth + 1)
        return ConfiguredPointer(inner, dict(raw[key]))

    raise PointerError(
        f"Unsupported pointer {raw!r}: expected a string, a list, "
        "or a single-key mapping of pointer to options",
        context={"pointer": raw},
    )


def unwrap(pointer: ConfiguredPointer, options: Mapping[str, Any] | None = None) -> Tuple[Pointer, Dict[str, Any]]:
    """Return the wrapped pointer and ``options`` overlaid with its own options."""
    merged: Dict[str, Any] = dict(options or {})
    merged.update(pointer.options)
    return pointer.pointer, merged


def describe(pointer: Any) -> str:
    """Human-readable form of a pointer for log and error messages."""
    raw = getattr(pointer, "raw", pointer)
    if isinstance(raw, str):
        return raw
    return repr(raw)


__all__ = [
    "MAX_POINTER_DEPTH",
    "Pointer",
    "LiteralPointer",
    "GlobPointer",
    "ConfiguredPointer",
    "PointerList",
    "is_glob",
    "is_pointer_with_configuration",
    "parse_pointer",
    "unwrap",
    "describe",
]
