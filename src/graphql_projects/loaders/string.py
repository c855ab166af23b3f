"""Loader for SDL or operations written inline in the configuration."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from graphql import GraphQLError, parse

from .base import Loader, Source
from .file import GRAPHQL_EXTENSIONS, JSON_EXTENSIONS

INLINE_LOCATION = "<inline>"


class SchemaStringLoader(Loader):
    """Treat the pointer itself as GraphQL source text."""

    def loader_id(self) -> str:
        return "string"

    async def can_load(self, pointer: str, options: Mapping[str, Any]) -> bool:
        # File-looking pointers belong to the file loaders even when missing.
        if pointer.lower().endswith(GRAPHQL_EXTENSIONS + JSON_EXTENSIONS):
            return False
        try:
            parse(pointer, no_location=True)
        except GraphQLError:
            return False
        return True

    async def load(self, pointer: str, options: Mapping[str, Any]) -> Optional[Source]:
        return Source(location=INLINE_LOCATION, document=parse(pointer), raw_sdl=pointer)


__all__ = ["INLINE_LOCATION", "SchemaStringLoader"]
