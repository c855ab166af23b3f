"""Loader interface and the Source record loaders produce."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from graphql import DocumentNode, GraphQLSchema


@dataclass(frozen=True)
class Source:
    """The loaded representation of one resolved pointer."""

    location: str
    document: Optional[DocumentNode] = None
    raw_sdl: Optional[str] = None
    schema: Optional[GraphQLSchema] = None


class Loader(ABC):
    """A capability object that can claim and resolve a pointer.

    Subclasses must implement:
    - loader_id() - stable identity used to de-duplicate registrations
    - can_load(pointer, options) - side-effect free capability probe
    - load(pointer, options) - produce a Source, or None to decline
    """

    @abstractmethod
    def loader_id(self) -> str:
        ...

    @abstractmethod
    async def can_load(self, pointer: str, options: Mapping[str, Any]) -> bool:
        ...

    @abstractmethod
    async def load(self, pointer: str, options: Mapping[str, Any]) -> Optional[Source]:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.loader_id()!r}>"


def resolve_path(pointer: str, options: Mapping[str, Any]) -> Path:
    """Resolve ``pointer`` against ``options['cwd']`` unless it is absolute."""
    path = Path(pointer).expanduser()
    if path.is_absolute():
        return path
    cwd = options.get("cwd")
    return Path(cwd) / path if cwd else path


__all__ = ["Source", "Loader", "resolve_path"]
