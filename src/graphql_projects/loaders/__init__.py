"""Loaders resolve pointers into Sources.

Architecture:
    Loader (base.py) - capability interface
    ├── GraphQLFileLoader - .graphql/.gql files
    ├── JsonFileLoader - introspection JSON files
    └── SchemaStringLoader - inline SDL
    LoadersRegistry (registry.py) - ordered, first-match dispatch
"""
from __future__ import annotations

from .base import Loader, Source, resolve_path
from .file import GraphQLFileLoader, JsonFileLoader
from .registry import LoadersRegistry
from .string import SchemaStringLoader


def default_loaders() -> list[Loader]:
    """Loaders every new extensions registry starts with, in priority order."""
    return [GraphQLFileLoader(), JsonFileLoader(), SchemaStringLoader()]


__all__ = [
    "Loader",
    "Source",
    "resolve_path",
    "GraphQLFileLoader",
    "JsonFileLoader",
    "SchemaStringLoader",
    "LoadersRegistry",
    "default_loaders",
]
