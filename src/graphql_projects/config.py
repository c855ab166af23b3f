"""
GraphQL config: a set of named projects read from one configuration file.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from graphql_projects.exceptions import (
    ConfigEmptyError,
    ConfigInvalidError,
    ConfigNotFoundError,
    ProjectNotFoundError,
)
from graphql_projects.extensions import ExtensionDeclaration, ExtensionsRegistry
from graphql_projects.project import GraphQLProjectConfig
from graphql_projects.schemas.validation import validate_payload_safe
from graphql_projects.utils.io import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "default"
CONFIG_SCHEMA = "config.schema"


@dataclass(frozen=True)
class ConfigResult:
    """A raw configuration together with the file it came from."""

    config: Dict[str, Any]
    filepath: str


def is_multiple_project_config(config: Mapping[str, Any]) -> bool:
    projects = config.get("projects")
    return isinstance(projects, Mapping) and len(projects) > 0


def is_single_project_config(config: Mapping[str, Any]) -> bool:
    return not is_multiple_project_config(config)


def validate_config(config: Any, filepath: str) -> None:
    """Check ``config`` against the bundled config schema.

    Raises:
        ConfigInvalidError: Listing every violation and ``filepath``.
    """
    errors = validate_payload_safe(config, CONFIG_SCHEMA)
    if errors:
        details = "\n".join(f"- {e}" for e in errors)
        raise ConfigInvalidError(
            f"Invalid GraphQL config in {filepath}:\n{details}",
            context={"filepath": filepath, "errors": errors},
        )


class GraphQLConfig:
    """Named projects of one configuration, sharing an extensions registry.

    A single-project configuration becomes one project named ``default``.
    Projects keep their declaration order.
    """

    def __init__(
        self,
        raw: ConfigResult,
        extensions: Iterable[ExtensionDeclaration] = (),
    ) -> None:
        validate_config(raw.config, raw.filepath)

        self._raw_config = raw.config
        self.filepath = raw.filepath
        self.dirpath = os.path.dirname(raw.filepath)
        self.extensions = ExtensionsRegistry(cwd=self.dirpath)

        for declaration in extensions:
            self.extensions.register(declaration)

        self.projects: Dict[str, GraphQLProjectConfig] = {}

        if is_multiple_project_config(self._raw_config):
            for project_name, config in self._raw_config["projects"].items():
                self.projects[project_name] = self._make_project(project_name, config)
        else:
            self.projects[DEFAULT_PROJECT_NAME] = self._make_project(
                DEFAULT_PROJECT_NAME, self._raw_config
            )

        logger.debug(
            "Loaded %s with project(s): %s", self.filepath, ", ".join(self.projects)
        )

    def _make_project(self, name: str, config: Mapping[str, Any]) -> GraphQLProjectConfig:
        return GraphQLProjectConfig(
            filepath=self.filepath,
            name=name,
            config=config,
            extensions_registry=self.extensions,
        )

    def __repr__(self) -> str:
        return f"<GraphQLConfig filepath={self.filepath!r} projects={list(self.projects)!r}>"

    def get_project(self, name: Optional[str] = None) -> GraphQLProjectConfig:
        """Return the project called ``name`` (``default`` when omitted).

        Raises:
            ProjectNotFoundError: If there is no such project.
        """
        if not name:
            name = DEFAULT_PROJECT_NAME

        project = self.projects.get(name)
        if project is None:
            raise ProjectNotFoundError(
                f"Project '{name}' not found in {self.filepath}",
                context={"project": name, "filepath": self.filepath},
            )
        return project

    def get_default(self) -> GraphQLProjectConfig:
        return self.get_project(DEFAULT_PROJECT_NAME)

    def get_project_for_file(self, filepath: str) -> GraphQLProjectConfig:
        """Find the project ``filepath`` belongs to.

        The first project whose ``match`` accepts the file wins. Failing that,
        the first project declaring neither ``include`` nor ``exclude`` is
        used as a catch-all.

        Raises:
            ProjectNotFoundError: If no project claims the file.
        """
        for project in self.projects.values():
            if project.match(filepath):
                return project

        for project in self.projects.values():
            if not project.include and not project.exclude:
                logger.debug("No project matched %s; using catch-all %r", filepath, project.name)
                return project

        raise ProjectNotFoundError(
            f"File '{filepath}' doesn't match any project in {self.filepath}",
            context={"file": filepath, "filepath": self.filepath},
        )


def load_config(
    filepath: str,
    *,
    extensions: Iterable[ExtensionDeclaration] = (),
    throw_on_missing: bool = True,
    throw_on_empty: bool = True,
) -> Optional[GraphQLConfig]:
    """Read the YAML or JSON config at ``filepath`` and build a :class:`GraphQLConfig`.

    Args:
        filepath: Path of the config file (no discovery is performed).
        extensions: Extension declarations to register.
        throw_on_missing: Raise ``ConfigNotFoundError`` for a missing file;
            return ``None`` otherwise.
        throw_on_empty: Raise ``ConfigEmptyError`` for an empty file;
            return ``None`` otherwise.
    """
    path = os.path.abspath(filepath)
    try:
        if not os.path.isfile(path):
            raise ConfigNotFoundError(
                f"GraphQL config file not found: {path}",
                context={"filepath": path},
            )
        raw = read_yaml(path, default=None, raise_on_error=True)
        if not raw:
            raise ConfigEmptyError(
                f"GraphQL config file is empty: {path}",
                context={"filepath": path},
            )
        return GraphQLConfig(ConfigResult(config=raw, filepath=path), extensions)
    except ConfigNotFoundError:
        if throw_on_missing:
            raise
        logger.debug("No GraphQL config at %s", path)
        return None
    except ConfigEmptyError:
        if throw_on_empty:
            raise
        logger.debug("Empty GraphQL config at %s", path)
        return None


__all__ = [
    "DEFAULT_PROJECT_NAME",
    "ConfigResult",
    "GraphQLConfig",
    "is_multiple_project_config",
    "is_single_project_config",
    "validate_config",
    "load_config",
]
