"""A single named project inside a GraphQL config."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from graphql import DocumentNode, GraphQLSchema, build_ast_schema, print_ast

from graphql_projects.exceptions import ConfigInvalidError, ExtensionMissingError, PointerError
from graphql_projects.extensions import ExtensionsRegistry
from graphql_projects.loaders import Source
from graphql_projects.pointers import Pointer, parse_pointer
from graphql_projects.utils.merge import merge_type_defs
from graphql_projects.utils.patterns import matches

logger = logging.getLogger(__name__)

SCHEMA_OUTPUTS = ("GraphQLSchema", "DocumentNode", "string")

SchemaResult = Union[GraphQLSchema, DocumentNode, str]


class GraphQLProjectConfig:
    """One project: schema and documents pointers, include/exclude rules, extensions.

    Relative pointers and patterns resolve against ``dirpath``, the directory
    of the config file the project was declared in.
    """

    def __init__(
        self,
        *,
        filepath: str,
        name: str,
        config: Mapping[str, Any],
        extensions_registry: ExtensionsRegistry,
    ) -> None:
        self.filepath = filepath
        self.dirpath = os.path.dirname(filepath)
        self.name = name

        self.schema = config.get("schema")
        self.documents = config.get("documents")
        self.include = config.get("include")
        self.exclude = config.get("exclude")
        self.extensions: Dict[str, Any] = dict(config.get("extensions") or {})

        self._extensions_registry = extensions_registry
        self._schema_pointer = self._parse("schema", self.schema)
        self._documents_pointer = self._parse("documents", self.documents)

    def __repr__(self) -> str:
        return f"<GraphQLProjectConfig name={self.name!r} filepath={self.filepath!r}>"

    def _parse(self, field: str, raw: Any) -> Optional[Pointer]:
        if not raw:
            return None
        try:
            return parse_pointer(raw)
        except PointerError as exc:
            raise ConfigInvalidError(
                f"Project '{self.name}' in {self.filepath}: invalid \"{field}\": {exc}",
                context={"project": self.name, "filepath": self.filepath, "field": field},
            ) from exc

    # Extensions

    def has_extension(self, name: str) -> bool:
        return bool(self.extensions.get(name))

    def extension(self, name: str) -> Dict[str, Any]:
        """Return this project's ``extensions[name]`` data with the project pointers.

        Only mapping payloads contribute keys; scalars, lists and booleans
        are kept on ``extensions`` as written but add nothing here.

        Raises:
            ExtensionMissingError: If no extension named ``name`` is registered.
        """
        if not self._extensions_registry.has(name):
            raise ExtensionMissingError(
                f"Project {self.name} is missing {name} extension",
                context={"project": self.name, "extension": name, "filepath": self.filepath},
            )

        payload = self.extensions.get(name)
        return {
            **(payload if isinstance(payload, Mapping) else {}),
            "schema": self.schema,
            "documents": self.documents,
            "include": self.include,
            "exclude": self.exclude,
        }

    # Schema

    async def get_schema(self, out: str = "GraphQLSchema") -> SchemaResult:
        """Load the project's schema as a ``GraphQLSchema``, ``DocumentNode`` or SDL string."""
        if self._schema_pointer is None:
            raise ConfigInvalidError(
                f"\"schema\" is required but not provided for project '{self.name}' in {self.filepath}",
                context={"project": self.name, "filepath": self.filepath},
            )
        return await self.load_schema(self._schema_pointer, out)

    async def load_schema(self, pointer: Any, out: str = "GraphQLSchema") -> SchemaResult:
        """Load ``pointer`` through the schema loaders and render it as ``out``.

        Operations and fragments found in the sources are ignored; all type
        definitions are merged into one set before rendering.
        """
        if out not in SCHEMA_OUTPUTS:
            raise ValueError(f"Unsupported schema output {out!r}; expected one of {SCHEMA_OUTPUTS}")

        sources = await self._extensions_registry.loaders.schema.load(pointer)

        if out == "GraphQLSchema":
            if len(sources) == 1 and sources[0].schema is not None:
                return sources[0].schema
            return build_ast_schema(_merge_sources(sources))

        merged = _merge_sources(sources)
        if out == "DocumentNode":
            return merged
        return print_ast(merged)

    # Documents

    async def get_documents(self) -> List[Source]:
        if self._documents_pointer is None:
            return []
        return await self.load_documents(self._documents_pointer)

    async def load_documents(self, pointer: Any) -> List[Source]:
        if not pointer:
            return []
        return await self._extensions_registry.loaders.documents.load(pointer)

    # Membership

    def match(self, filepath: str) -> bool:
        """Decide whether ``filepath`` belongs to this project.

        Schema and documents pointers win over ``exclude``; ``exclude`` wins
        over ``include``; a project without ``include`` claims nothing else.
        """
        if any(matches(filepath, self.dirpath, pointer) for pointer in (self.schema, self.documents)):
            return True

        if self.exclude and matches(filepath, self.dirpath, self.exclude):
            return False

        if self.include and matches(filepath, self.dirpath, self.include):
            return True

        return False


def _merge_sources(sources: List[Source]) -> DocumentNode:
    return merge_type_defs(source.document for source in sources)


__all__ = ["SCHEMA_OUTPUTS", "GraphQLProjectConfig"]
