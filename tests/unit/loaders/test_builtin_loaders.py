from __future__ import annotations

import asyncio
from pathlib import Path

from graphql import build_schema, get_introspection_query, graphql_sync, print_ast

from graphql_projects.loaders import (
    GraphQLFileLoader,
    JsonFileLoader,
    LoadersRegistry,
    SchemaStringLoader,
    default_loaders,
)
from graphql_projects.loaders.string import INLINE_LOCATION
from helpers.io_utils import write_json, write_text

SDL = "type Query {\n  hello: String\n}"


def _introspection(sdl: str) -> dict:
    result = graphql_sync(build_schema(sdl), get_introspection_query())
    assert result.errors is None
    return result.data


def test_graphql_file_loader_reads_relative_to_cwd(tmp_path: Path) -> None:
    write_text(tmp_path / "schema.graphql", SDL)
    loader = GraphQLFileLoader()
    options = {"cwd": str(tmp_path)}

    assert asyncio.run(loader.can_load("schema.graphql", options))
    source = asyncio.run(loader.load("schema.graphql", options))

    assert source is not None
    assert source.location == str(tmp_path / "schema.graphql")
    assert source.raw_sdl == SDL
    assert print_ast(source.document) == SDL


def test_graphql_file_loader_declines_missing_or_foreign_files(tmp_path: Path) -> None:
    write_text(tmp_path / "app.ts", "export {}")
    loader = GraphQLFileLoader()
    options = {"cwd": str(tmp_path)}

    assert not asyncio.run(loader.can_load("missing.graphql", options))
    assert not asyncio.run(loader.can_load("app.ts", options))


def test_graphql_file_loader_reads_empty_file_as_empty_document(tmp_path: Path) -> None:
    write_text(tmp_path / "empty.graphql", "\n")

    source = asyncio.run(GraphQLFileLoader().load("empty.graphql", {"cwd": str(tmp_path)}))

    assert source is not None
    assert source.document is not None
    assert source.document.definitions == ()


def test_json_file_loader_builds_schema_from_introspection(tmp_path: Path) -> None:
    write_json(tmp_path / "schema.json", {"data": _introspection(SDL)})
    loader = JsonFileLoader()
    options = {"cwd": str(tmp_path)}

    assert asyncio.run(loader.can_load("schema.json", options))
    source = asyncio.run(loader.load("schema.json", options))

    assert source is not None
    assert source.schema is not None
    assert source.schema.query_type.name == "Query"
    assert "hello: String" in source.raw_sdl


def test_json_file_loader_accepts_bare_introspection(tmp_path: Path) -> None:
    write_json(tmp_path / "schema.json", _introspection(SDL))

    source = asyncio.run(JsonFileLoader().load("schema.json", {"cwd": str(tmp_path)}))

    assert source is not None
    assert "type Query" in source.raw_sdl


def test_json_file_loader_declines_other_json(tmp_path: Path) -> None:
    write_json(tmp_path / "package.json", {"name": "web"})

    assert asyncio.run(JsonFileLoader().load("package.json", {"cwd": str(tmp_path)})) is None


def test_string_loader_accepts_inline_sdl_only() -> None:
    loader = SchemaStringLoader()

    assert asyncio.run(loader.can_load("type Query { hello: String }", {}))
    assert not asyncio.run(loader.can_load("schema.graphql", {}))
    assert not asyncio.run(loader.can_load("not graphql at all {", {}))

    source = asyncio.run(loader.load("type Query { hello: String }", {}))
    assert source is not None
    assert source.location == INLINE_LOCATION
    assert print_ast(source.document) == SDL


def test_default_loaders_resolve_files_and_inline_sdl(tmp_path: Path) -> None:
    write_text(tmp_path / "schema.graphql", SDL)
    registry = LoadersRegistry(cwd=str(tmp_path))
    for loader in default_loaders():
        registry.register(loader)

    sources = asyncio.run(registry.load(["schema.graphql", "type Mutation { ping: Boolean }"]))

    assert [s.location for s in sources] == [str(tmp_path / "schema.graphql"), INLINE_LOCATION]
