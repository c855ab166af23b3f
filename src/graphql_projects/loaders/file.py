"""Loaders for schema and documents stored on disk."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from graphql import Source as GraphQLSource
from graphql import DocumentNode, build_client_schema, parse, print_schema

from graphql_projects.utils.io import read_json, read_text

from .base import Loader, Source, resolve_path

logger = logging.getLogger(__name__)

GRAPHQL_EXTENSIONS = (".graphql", ".graphqls", ".gql", ".gqls")
JSON_EXTENSIONS = (".json",)


class GraphQLFileLoader(Loader):
    """Load ``.graphql`` files (schema SDL or operations)."""

    def loader_id(self) -> str:
        return "graphql-file"

    async def can_load(self, pointer: str, options: Mapping[str, Any]) -> bool:
        if not pointer.lower().endswith(GRAPHQL_EXTENSIONS):
            return False
        return await asyncio.to_thread(resolve_path(pointer, options).is_file)

    async def load(self, pointer: str, options: Mapping[str, Any]) -> Optional[Source]:
        path = resolve_path(pointer, options)
        content = await asyncio.to_thread(read_text, path)
        if not content.strip():
            logger.debug("Empty GraphQL file %s", path)
            return Source(location=str(path), document=DocumentNode(definitions=()), raw_sdl=content)
        document = parse(
            GraphQLSource(content, str(path)),
            no_location=bool(options.get("no_location", False)),
        )
        return Source(location=str(path), document=document, raw_sdl=content)


class JsonFileLoader(Loader):
    """Load an introspection result stored as JSON.

    Accepts both the raw ``{"__schema": ...}`` payload and the full
    ``{"data": {"__schema": ...}}`` response shape.
    """

    def loader_id(self) -> str:
        return "json-file"

    async def can_load(self, pointer: str, options: Mapping[str, Any]) -> bool:
        if not pointer.lower().endswith(JSON_EXTENSIONS):
            return False
        return await asyncio.to_thread(resolve_path(pointer, options).is_file)

    async def load(self, pointer: str, options: Mapping[str, Any]) -> Optional[Source]:
        path = resolve_path(pointer, options)
        payload = await asyncio.to_thread(read_json, path)
        introspection = _introspection_of(payload)
        if introspection is None:
            logger.debug("%s is not an introspection result", path)
            return None
        schema = build_client_schema(introspection)
        sdl = print_schema(schema)
        return Source(
            location=str(path),
            document=parse(GraphQLSource(sdl, str(path))),
            raw_sdl=sdl,
            schema=schema,
        )


def _introspection_of(payload: Any) -> Optional[dict]:
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict) and "__schema" in data:
        return data
    if "__schema" in payload:
        return payload
    return None


__all__ = ["GRAPHQL_EXTENSIONS", "JSON_EXTENSIONS", "GraphQLFileLoader", "JsonFileLoader"]
