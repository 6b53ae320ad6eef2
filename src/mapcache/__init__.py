"""
mapcache
Cached, convention-based attribute mapping between independently defined types
"""

# Domain layer
from mapcache.domain import (
    CompatibilityAnalyzer,
    ICompiledMapper,
    IMappingExecutor,
    IMappingPlanBuilder,
    ISurfaceReader,
    MappingConfiguration,
    MappingDirective,
    PropertySurfaceResolver,
    is_interface,
    is_wrapped,
    underlying_type,
)

# Infrastructure layer
from mapcache.infrastructure import (
    AttributeMappingExecutor,
    CompiledMapper,
    MapperCache,
    MetricsCollector,
    PydanticSurfaceReader,
    SQLAlchemySurfaceReader,
    configure_logging,
    configure_metrics,
    get_logger,
    get_metrics,
)

# Application layer
from mapcache.application import (
    MapCache,
    MappingPlanBuilder,
    get_mapper_cache,
    property_dictionary,
)

from mapcache.bootstrap import configure_observability
from mapcache.config import Settings, get_settings
from mapcache.exceptions import (
    InterfaceHierarchyTooLargeError,
    MapCacheConfigurationError,
    MapCacheError,
    MappingTypeMismatchError,
    MemberAssignmentError,
    SurfaceResolutionError,
)

__all__ = [
    # Domain
    "CompatibilityAnalyzer",
    "MappingConfiguration",
    "MappingDirective",
    "PropertySurfaceResolver",
    "is_interface",
    "is_wrapped",
    "underlying_type",
    "ICompiledMapper",
    "IMappingExecutor",
    "IMappingPlanBuilder",
    "ISurfaceReader",
    # Infrastructure
    "AttributeMappingExecutor",
    "CompiledMapper",
    "MapperCache",
    "PydanticSurfaceReader",
    "SQLAlchemySurfaceReader",
    "MetricsCollector",
    "configure_logging",
    "configure_metrics",
    "get_logger",
    "get_metrics",
    # Application
    "MapCache",
    "MappingPlanBuilder",
    "get_mapper_cache",
    "property_dictionary",
    # Config
    "configure_observability",
    "Settings",
    "get_settings",
    # Errors
    "MapCacheError",
    "SurfaceResolutionError",
    "InterfaceHierarchyTooLargeError",
    "MapCacheConfigurationError",
    "MappingTypeMismatchError",
    "MemberAssignmentError",
]
