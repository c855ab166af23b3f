"""Ordered registry of loaders for one kind of pointer (schema or documents).

Dispatch order for ``load``:

1. Glob pointers are expanded under ``cwd``; every match is loaded
   (concurrently) and the results are flattened in match order.
2. Configured pointers are unwrapped; their options overlay the call options.
3. Pointer lists are loaded item by item and flattened.
4. Literal pointers go to the first loader whose ``can_load`` accepts them
   and whose ``load`` returns a Source. Loaders are tried strictly in
   registration order.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from graphql_projects.exceptions import LoaderNoResultError, LoadersMissingError
from graphql_projects.pointers import (
    ConfiguredPointer,
    GlobPointer,
    LiteralPointer,
    Pointer,
    PointerList,
    describe,
    parse_pointer,
    unwrap,
)
from graphql_projects.utils.patterns import expand_glob

from .base import Loader, Source

logger = logging.getLogger(__name__)


class LoadersRegistry:
    """Loaders tried in registration order, resolving relative to ``cwd``."""

    def __init__(self, *, cwd: str) -> None:
        self._loaders: List[Loader] = []
        self.cwd = cwd

    def register(self, loader: Loader) -> None:
        """Add ``loader`` unless a loader with the same id is already registered."""
        loader_id = loader.loader_id()
        if any(existing.loader_id() == loader_id for existing in self._loaders):
            logger.debug("Loader %r already registered; ignoring", loader_id)
            return
        self._loaders.append(loader)
        logger.debug("Registered loader %r", loader_id)

    @property
    def loaders(self) -> Tuple[Loader, ...]:
        return tuple(self._loaders)

    def __len__(self) -> int:
        return len(self._loaders)

    async def load(self, pointer: Any, options: Optional[Mapping[str, Any]] = None) -> List[Source]:
        """Resolve ``pointer`` into sources.

        Args:
            pointer: A raw pointer value or an already parsed ``Pointer``.
            options: Loader options; ``cwd`` is always set to the registry's.

        Raises:
            LoadersMissingError: A literal pointer needs a loader and none are registered.
            LoaderNoResultError: No loader produced a result for a literal pointer.
        """
        return await self._load(parse_pointer(pointer), dict(options or {}))

    async def _load(self, pointer: Pointer, options: Dict[str, Any]) -> List[Source]:
        options["cwd"] = self.cwd

        if isinstance(pointer, GlobPointer):
            return await self._load_glob(pointer, options)

        if isinstance(pointer, ConfiguredPointer):
            inner, inner_options = unwrap(pointer, options)
            return await self._load(inner, inner_options)

        if isinstance(pointer, PointerList):
            sources: List[Source] = []
            for item in pointer.items:
                sources.extend(await self._load(item, dict(options)))
            return sources

        return [await self._load_literal(pointer, options)]

    async def _load_glob(self, pointer: GlobPointer, options: Dict[str, Any]) -> List[Source]:
        filepaths = await asyncio.to_thread(expand_glob, pointer.pattern, self.cwd)
        logger.debug("Glob %r matched %d file(s)", pointer.pattern, len(filepaths))
        tasks = [
            asyncio.ensure_future(self._load(LiteralPointer(path), dict(options)))
            for path in filepaths
        ]
        try:
            # gather() keeps argument order, so results line up with filepaths.
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Retrieve every outcome so no sibling failure goes unreported.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return [source for result in results if result for source in result]

    async def _load_literal(self, pointer: LiteralPointer, options: Dict[str, Any]) -> Source:
        if not self._loaders:
            raise LoadersMissingError(
                f"Loaders are missing, cannot resolve: {pointer.value}",
                context={"pointer": pointer.value, "cwd": self.cwd},
            )

        for loader in self._loaders:
            if not await loader.can_load(pointer.value, options):
                continue
            result = await loader.load(pointer.value, options)
            if result:
                logger.debug("Loader %r resolved %s", loader.loader_id(), pointer.value)
                return result
            logger.debug("Loader %r returned nothing for %s", loader.loader_id(), pointer.value)

        raise LoaderNoResultError(
            f"None of provided loaders could resolve: {describe(pointer)}",
            pointer=pointer.value,
            context={"cwd": self.cwd},
        )


__all__ = ["LoadersRegistry"]
