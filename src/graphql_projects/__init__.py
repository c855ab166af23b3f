"""graphql-projects: multi-project GraphQL configuration.

Usage:
    from graphql_projects import load_config

    config = load_config("graphql.config.yaml")
    project = config.get_project_for_file("src/app.ts")
    sdl = asyncio.run(project.get_schema("string"))
"""
from __future__ import annotations

from .config import ConfigResult, GraphQLConfig, load_config
from .exceptions import (
    ConfigEmptyError,
    ConfigInvalidError,
    ConfigNotFoundError,
    ExtensionMissingError,
    GraphQLConfigError,
    LoaderNoResultError,
    LoadersMissingError,
    PointerError,
    ProjectNotFoundError,
    SchemaMergeError,
)
from .extensions import ExtensionAPI, ExtensionsRegistry, GraphQLExtension
from .loaders import Loader, LoadersRegistry, Source
from .project import GraphQLProjectConfig

__version__ = "0.1.0"

__all__ = [
    "ConfigResult",
    "GraphQLConfig",
    "GraphQLProjectConfig",
    "load_config",
    "ExtensionAPI",
    "ExtensionsRegistry",
    "GraphQLExtension",
    "Loader",
    "LoadersRegistry",
    "Source",
    "GraphQLConfigError",
    "ConfigEmptyError",
    "ConfigInvalidError",
    "ConfigNotFoundError",
    "ExtensionMissingError",
    "LoaderNoResultError",
    "LoadersMissingError",
    "PointerError",
    "ProjectNotFoundError",
    "SchemaMergeError",
]
