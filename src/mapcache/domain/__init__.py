"""
mapcache Domain Layer
Surface resolution, compatibility policy and mapping configuration.
No imports from the infrastructure layer.
"""
from mapcache.domain.compatibility import CompatibilityAnalyzer, is_wrapped, underlying_type
from mapcache.domain.mapping_configuration import MappingConfiguration, MappingDirective
from mapcache.domain.property_surface import (
    PropertySurfaceResolver,
    direct_interfaces,
    is_interface,
)
from mapcache.domain.protocols import (
    ICompiledMapper,
    IMappingExecutor,
    IMappingPlanBuilder,
    ISurfaceReader,
)

__all__ = [
    "CompatibilityAnalyzer",
    "is_wrapped",
    "underlying_type",
    "MappingConfiguration",
    "MappingDirective",
    "PropertySurfaceResolver",
    "is_interface",
    "direct_interfaces",
    "ICompiledMapper",
    "IMappingExecutor",
    "IMappingPlanBuilder",
    "ISurfaceReader",
]
