"""Extension declarations and the per-config registry that holds them.

An extension declaration is a callable receiving an :class:`ExtensionAPI` and
returning an object with a ``name`` (usually a :class:`GraphQLExtension`).
Declarations can register extra loaders through the API; projects later look
extensions up by name.

Registration policy: the first declaration registered under a name stays.
Registering another declaration under the same name is ignored (with a
warning) unless ``replace=True`` is passed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from graphql_projects.loaders import LoadersRegistry, default_loaders

logger = logging.getLogger(__name__)


@dataclass
class GraphQLExtension:
    """What a declaration returns: a name plus arbitrary extension data."""

    name: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExtensionLoaders:
    schema: LoadersRegistry
    documents: LoadersRegistry


@dataclass(frozen=True)
class ExtensionAPI:
    """Handle passed to every declaration while it is being registered."""

    loaders: ExtensionLoaders
    logger: logging.Logger


ExtensionDeclaration = Callable[[ExtensionAPI], Any]


class ExtensionsRegistry:
    """Name -> extension mapping shared by all projects of one config."""

    def __init__(self, *, cwd: str) -> None:
        self._extensions: Dict[str, Any] = {}
        self.loaders = ExtensionLoaders(
            schema=LoadersRegistry(cwd=cwd),
            documents=LoadersRegistry(cwd=cwd),
        )
        for loader in default_loaders():
            self.loaders.schema.register(loader)
            self.loaders.documents.register(loader)

    def register(self, declaration: ExtensionDeclaration, *, replace: bool = False) -> Any:
        """Run ``declaration`` and store the extension it returns.

        Returns:
            The extension now registered under that name.

        Raises:
            ValueError: If the declaration returns an object without a name.
        """
        api = ExtensionAPI(
            loaders=self.loaders,
            logger=logging.getLogger(f"{__name__}.{getattr(declaration, '__name__', 'extension')}"),
        )
        extension = declaration(api)
        name = getattr(extension, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError(
                f"Extension declaration {declaration!r} returned {extension!r} without a name"
            )

        if name in self._extensions and not replace:
            logger.warning("Extension %r is already registered; keeping the first one", name)
            return self._extensions[name]

        self._extensions[name] = extension
        logger.debug("Registered extension %r", name)
        return extension

    def has(self, name: str) -> bool:
        return name in self._extensions

    def get(self, name: str) -> Optional[Any]:
        return self._extensions.get(name)

    def names(self) -> List[str]:
        return list(self._extensions)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._extensions.values()))


__all__ = [
    "GraphQLExtension",
    "ExtensionAPI",
    "ExtensionLoaders",
    "ExtensionDeclaration",
    "ExtensionsRegistry",
]
