"""
mapcache Application Layer
Plan building and the public mapping facade
"""
from mapcache.application.map_cache import MapCache, get_mapper_cache
from mapcache.application.plan_builder import (
    MappingPlanBuilder,
    default_resolver,
    property_dictionary,
)

__all__ = [
    "MapCache",
    "get_mapper_cache",
    "MappingPlanBuilder",
    "default_resolver",
    "property_dictionary",
]
