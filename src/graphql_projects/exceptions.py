from __future__ import annotations

from typing import Any, Dict, Mapping


class GraphQLConfigError(Exception):
    """Base exception for graphql-projects."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigNotFoundError(GraphQLConfigError, FileNotFoundError):
    """Raised when a configuration file does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GraphQLConfigError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class ConfigEmptyError(GraphQLConfigError):
    """Raised when a configuration file exists but holds no configuration."""


class ConfigInvalidError(GraphQLConfigError, ValueError):
    """Raised when a configuration (or part of it) has an unexpected shape."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GraphQLConfigError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ProjectNotFoundError(GraphQLConfigError, LookupError):
    """Raised when a project is unknown or no project matches a file."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GraphQLConfigError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class ExtensionMissingError(GraphQLConfigError, LookupError):
    """Raised when a project asks for an extension nobody registered."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GraphQLConfigError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class LoadersMissingError(GraphQLConfigError):
    """Raised when a loaders registry has nothing to dispatch to."""


class LoaderNoResultError(GraphQLConfigError):
    """Raised when none of the registered loaders resolved a pointer."""

    def __init__(
        self,
        message: str = "",
        *,
        pointer: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if pointer is not None:
            ctx["pointer"] = pointer
        super().__init__(message, context=ctx)


class PointerError(GraphQLConfigError, ValueError):
    """Raised when a pointer value cannot be interpreted."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GraphQLConfigError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class SchemaMergeError(GraphQLConfigError, ValueError):
    """Raised when type definitions from several sources conflict."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GraphQLConfigError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "GraphQLConfigError",
    "ConfigNotFoundError",
    "ConfigEmptyError",
    "ConfigInvalidError",
    "ProjectNotFoundError",
    "ExtensionMissingError",
    "LoadersMissingError",
    "LoaderNoResultError",
    "PointerError",
    "SchemaMergeError",
]
