"""
Mapper Cache
Process-wide, append-only memo of compiled mappers per type pair

Policy:
- Entries are never evicted or invalidated.
- Reads take no lock. Only the final insert-if-absent is locked, so slow
  builds for the same pair may run concurrently; the first insert wins and
  every caller gets that instance back.
"""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping

from mapcache.domain.protocols import ICompiledMapper, IMappingExecutor, IMappingPlanBuilder
from mapcache.infrastructure.observability.logger import get_logger
from mapcache.infrastructure.observability.metrics import MetricsCollector, get_metrics

logger = get_logger(__name__)


class MapperCache:
    """
    Two-level table: source type -> (destination type -> compiled mapper).

    Construct once at process start (see ``get_mapper_cache``) or inject an
    instance explicitly. There is no teardown.
    """

    def __init__(
        self,
        builder: IMappingPlanBuilder,
        executor: IMappingExecutor,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._builder = builder
        self._executor = executor
        self._metrics = metrics
        self._table: dict[type, dict[type, ICompiledMapper]] = {}
        self._size = 0
        self._lock = threading.Lock()

    @property
    def builder(self) -> IMappingPlanBuilder:
        return self._builder

    @property
    def executor(self) -> IMappingExecutor:
        return self._executor

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics if self._metrics is not None else get_metrics()

    def get_or_build(self, source_type: type, destination_type: type) -> ICompiledMapper:
        """
        Return the compiled mapper for a type pair, building it on first use.

        Args:
            source_type: Type of the instances values are read from
            destination_type: Type of the instances values are written to

        Returns:
            The single mapper stored for this pair
        """
        mappings = self._mappings(source_type)

        mapper = mappings.get(destination_type)
        if mapper is not None:
            self.metrics.increment_counter("mapcache_lookups_total", result="hit")
            return mapper

        self.metrics.increment_counter("mapcache_lookups_total", result="miss")
        logger.debug(
            "Mapper cache miss",
            source=source_type.__qualname__,
            destination=destination_type.__qualname__,
        )

        configuration = self._builder.build(source_type, destination_type)
        candidate = self._executor.compile(configuration)

        with self._lock:
            mapper = mappings.setdefault(destination_type, candidate)
            if mapper is candidate:
                self._size += 1
            size = self._size

        if mapper is not candidate:
            self.metrics.increment_counter("mapcache_build_races_total")
            logger.debug(
                "Discarded concurrently built mapper",
                source=source_type.__qualname__,
                destination=destination_type.__qualname__,
            )
            return mapper

        self.metrics.increment_counter("mapcache_builds_total")
        self.metrics.set_gauge("mapcache_cached_pairs", size)
        logger.debug(
            "Mapper cached",
            source=source_type.__qualname__,
            destination=destination_type.__qualname__,
            copied=list(configuration.copied_members),
        )
        return mapper

    def mappings_for(self, source_type: type) -> Mapping[type, ICompiledMapper]:
        """Read-only view of the mappers cached for one source type."""
        return MappingProxyType(self._mappings(source_type))

    def _mappings(self, source_type: type) -> dict[type, ICompiledMapper]:
        mappings = self._table.get(source_type)
        if mappings is None:
            with self._lock:
                mappings = self._table.setdefault(source_type, {})
        return mappings

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        source_type, destination_type = pair
        mappings = self._table.get(source_type)
        return mappings is not None and destination_type in mappings

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"MapperCache(pairs={self._size})"
