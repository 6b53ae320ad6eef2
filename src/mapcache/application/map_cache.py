"""
Mapping Facade
Public entry points: map one instance, map a lazy sequence, build plans
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

from mapcache.application.plan_builder import MappingPlanBuilder
from mapcache.config import get_settings
from mapcache.domain.mapping_configuration import MappingConfiguration
from mapcache.domain.protocols import ICompiledMapper, IMappingExecutor, IMappingPlanBuilder
from mapcache.exceptions import MapCacheConfigurationError
from mapcache.infrastructure.cache.mapper_cache import MapperCache
from mapcache.infrastructure.executor.attribute_executor import AttributeMappingExecutor

S = TypeVar("S")
D = TypeVar("D")

# -----------------------------
# Lazy process-wide cache
# -----------------------------
_mapper_cache: Optional[MapperCache] = None
_lock = threading.Lock()


def get_mapper_cache() -> MapperCache:
    """Process-wide MapperCache, created on first use (thread-safe)."""
    global _mapper_cache
    if _mapper_cache is not None:
        return _mapper_cache

    with _lock:
        if _mapper_cache is not None:
            return _mapper_cache
        settings = get_settings()
        _mapper_cache = MapperCache(
            builder=MappingPlanBuilder(),
            executor=AttributeMappingExecutor(verify_types=settings.verify_instance_types),
        )
        return _mapper_cache


class MapCache:
    """
    Convention-based mapper between independently defined types.

    Same-named members are copied when their declared types match (or
    differ only by Optional). Compiled mappers are cached per type pair in
    a MapperCache shared by every facade that uses it.

    Usage:
        map_cache = MapCache()
        user = map_cache.map(create_user_request, User())
        users = map_cache.map_many(rows, User)
    """

    def __init__(
        self,
        cache: MapperCache | None = None,
        builder: IMappingPlanBuilder | None = None,
        executor: IMappingExecutor | None = None,
    ) -> None:
        """
        Args:
            cache: Mapper cache to use (process-wide cache when omitted)
            builder: Plan builder for uncached ``configuration`` calls
                (the cache's builder when omitted)
            executor: Executor compiling caller-supplied configurations
                (the cache's executor when omitted)
        """
        self._cache = cache if cache is not None else get_mapper_cache()
        self._builder = builder if builder is not None else self._cache.builder
        self._executor = executor if executor is not None else self._cache.executor

    @property
    def cache(self) -> MapperCache:
        return self._cache

    # ------------------------------------------------------------------
    # Plans and mappers
    # ------------------------------------------------------------------

    def configuration(self, source_type: type, destination_type: type) -> MappingConfiguration:
        """Build a fresh configuration, bypassing the cache."""
        return self._builder.build(source_type, destination_type)

    def configuration_for(self, source: Any, destination: Any) -> MappingConfiguration:
        return self.configuration(type(source), type(destination))

    def mapper_for(self, source_type: type, destination_type: type) -> ICompiledMapper:
        """Cached mapper for a type pair."""
        return self._cache.get_or_build(source_type, destination_type)

    def compile(self, configuration: MappingConfiguration) -> ICompiledMapper:
        """Compile a caller-supplied configuration; the result is not cached."""
        return self._executor.compile(configuration)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def map(
        self,
        source: Any,
        destination: D,
        *,
        mapper: ICompiledMapper | None = None,
        configuration: MappingConfiguration | None = None,
    ) -> D:
        """
        Copy compatible members from ``source`` onto ``destination``.

        Args:
            source: Instance to read from
            destination: Instance to write to
            mapper: Mapper to use instead of the cached one
            configuration: Configuration to compile instead of the cached mapper

        Returns:
            ``destination``

        Raises:
            MapCacheConfigurationError: If both ``mapper`` and ``configuration`` are given
        """
        resolved = self._explicit_mapper(mapper, configuration)
        if resolved is None:
            resolved = self.mapper_for(type(source), type(destination))
        return resolved.map(source, destination)

    def map_new(
        self,
        source: Any,
        factory: Callable[[], D],
        *,
        mapper: ICompiledMapper | None = None,
        configuration: MappingConfiguration | None = None,
    ) -> D:
        """Map ``source`` onto a destination created by ``factory()``."""
        return self.map(source, factory(), mapper=mapper, configuration=configuration)

    def map_many(
        self,
        sources: Iterable[Any],
        factory: Callable[[], D],
        *,
        source_type: type | None = None,
        destination_type: type | None = None,
        mapper: ICompiledMapper | None = None,
        configuration: MappingConfiguration | None = None,
    ) -> Iterator[D]:
        """
        Lazily map every element of ``sources`` onto a new destination.

        ``factory`` is called once per element, when that element is
        consumed. The same mapper is applied to every element: the explicit
        one, the one compiled from ``configuration``, the cached one for
        ``(source_type, destination_type)``, or else the cached one for the
        types of the first source and the first destination.

        Returns:
            Single-pass iterator preserving input order
        """
        resolved = self._explicit_mapper(mapper, configuration)
        if resolved is None and source_type is not None and destination_type is not None:
            resolved = self.mapper_for(source_type, destination_type)
        return self._iter_mapped(iter(sources), factory, resolved)

    def _iter_mapped(
        self,
        sources: Iterator[Any],
        factory: Callable[[], D],
        mapper: ICompiledMapper | None,
    ) -> Iterator[D]:
        for source in sources:
            destination = factory()
            if mapper is None:
                mapper = self.mapper_for(type(source), type(destination))
            yield mapper.map(source, destination)

    def _explicit_mapper(
        self,
        mapper: ICompiledMapper | None,
        configuration: MappingConfiguration | None,
    ) -> ICompiledMapper | None:
        if mapper is not None and configuration is not None:
            raise MapCacheConfigurationError("Pass either a mapper or a configuration, not both")
        if configuration is not None:
            return self.compile(configuration)
        return mapper
