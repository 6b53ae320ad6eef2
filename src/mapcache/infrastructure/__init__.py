"""
mapcache Infrastructure Layer
Mapper cache, default executor, framework surface readers and observability
"""
from mapcache.infrastructure.cache import MapperCache
from mapcache.infrastructure.executor import AttributeMappingExecutor, CompiledMapper
from mapcache.infrastructure.introspection import (
    PydanticSurfaceReader,
    SQLAlchemySurfaceReader,
    default_surface_readers,
)
from mapcache.infrastructure.observability import (
    MetricsCollector,
    configure_logging,
    configure_metrics,
    get_logger,
    get_metrics,
)

__all__ = [
    # Cache
    "MapperCache",
    # Executor
    "AttributeMappingExecutor",
    "CompiledMapper",
    # Introspection
    "PydanticSurfaceReader",
    "SQLAlchemySurfaceReader",
    "default_surface_readers",
    # Observability
    "MetricsCollector",
    "configure_logging",
    "get_logger",
    "configure_metrics",
    "get_metrics",
]
