from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from graphql_projects import load_config
from graphql_projects.exceptions import ConfigEmptyError, ConfigNotFoundError
from graphql_projects.extensions import ExtensionAPI, GraphQLExtension
from helpers.io_utils import write_json, write_text, write_yaml


def test_load_json_config_and_schema(tmp_path: Path) -> None:
    write_json(tmp_path / "graphql.config.json", {"schema": "schema.graphql"})
    write_text(tmp_path / "schema.graphql", "type Query { hello: String }")

    config = load_config(str(tmp_path / "graphql.config.json"))

    assert config is not None
    sdl = asyncio.run(config.get_default().get_schema("string"))
    assert "type Query" in sdl
    assert "hello: String" in sdl


def test_load_yaml_multi_project_config(tmp_path: Path) -> None:
    write_yaml(
        tmp_path / ".graphqlrc.yml",
        {
            "projects": {
                "api": {"schema": "api/*.graphql"},
                "web": {"schema": "web.graphql", "include": ["src/**"]},
            }
        },
    )

    config = load_config(str(tmp_path / ".graphqlrc.yml"))

    assert config is not None
    assert list(config.projects) == ["api", "web"]
    assert config.dirpath == str(tmp_path)


def test_relative_filepath_is_made_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_json(tmp_path / "graphql.config.json", {"schema": "schema.graphql"})
    monkeypatch.chdir(tmp_path)

    config = load_config("graphql.config.json")

    assert config is not None
    assert config.filepath == str(tmp_path / "graphql.config.json")


def test_missing_config_raises_or_returns_none(tmp_path: Path) -> None:
    missing = str(tmp_path / "graphql.config.json")

    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_config(missing)
    assert missing in str(excinfo.value)
    assert isinstance(excinfo.value, FileNotFoundError)

    assert load_config(missing, throw_on_missing=False) is None


def test_empty_config_raises_or_returns_none(tmp_path: Path) -> None:
    write_text(tmp_path / "graphql.config.yml", "# nothing here\n")
    path = str(tmp_path / "graphql.config.yml")

    with pytest.raises(ConfigEmptyError):
        load_config(path)

    assert load_config(path, throw_on_empty=False) is None


def test_throw_flags_are_independent(tmp_path: Path) -> None:
    with pytest.raises(ConfigNotFoundError):
        load_config(str(tmp_path / "nope.json"), throw_on_empty=False)


def test_extensions_are_passed_through(tmp_path: Path) -> None:
    write_json(
        tmp_path / "graphql.config.json",
        {"schema": "schema.graphql", "extensions": {"codegen": {"out": "types.ts"}}},
    )

    def codegen(api: ExtensionAPI) -> GraphQLExtension:
        return GraphQLExtension(name="codegen")

    config = load_config(str(tmp_path / "graphql.config.json"), extensions=[codegen])

    assert config is not None
    assert config.get_default().extension("codegen")["out"] == "types.ts"
