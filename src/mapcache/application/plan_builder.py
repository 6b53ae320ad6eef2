"""
Mapping Plan Builder
Combines two property surfaces into a MappingConfiguration
"""
from __future__ import annotations

from typing import Any

from mapcache.config import get_settings
from mapcache.domain.compatibility import CompatibilityAnalyzer
from mapcache.domain.mapping_configuration import MappingConfiguration, MappingDirective
from mapcache.domain.property_surface import PropertySurfaceResolver
from mapcache.infrastructure.introspection import default_surface_readers
from mapcache.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


def default_resolver() -> PropertySurfaceResolver:
    """Resolver that understands SQLAlchemy models, pydantic models, dataclasses and protocols."""
    return PropertySurfaceResolver(
        readers=default_surface_readers(),
        max_interface_count=get_settings().max_interface_count,
    )


def property_dictionary(cls: type) -> dict[str, Any]:
    """Property surface of ``cls`` resolved with the default resolver."""
    return default_resolver().resolve(cls)


class MappingPlanBuilder:
    """
    Builds the mapping configuration for a (source type, destination type) pair.

    The plan is driven by the destination: every destination member is
    checked against the source surface and excluded when the analyzer says
    so. Members that only exist on the source are never looked at.
    """

    def __init__(
        self,
        resolver: PropertySurfaceResolver | None = None,
        analyzer: CompatibilityAnalyzer | None = None,
    ) -> None:
        self._resolver = resolver or default_resolver()
        self._analyzer = analyzer or CompatibilityAnalyzer()

    @property
    def resolver(self) -> PropertySurfaceResolver:
        return self._resolver

    def build(self, source_type: type, destination_type: type) -> MappingConfiguration:
        source_surface = self._resolver.resolve(source_type)
        destination_surface = self._resolver.resolve(destination_type)

        ignored = frozenset(
            name
            for name, member_type in destination_surface.items()
            if self._analyzer.decide(name, member_type, source_surface) is MappingDirective.IGNORE
        )

        if ignored:
            logger.debug(
                "Mapping plan excludes destination members",
                source=source_type.__qualname__,
                destination=destination_type.__qualname__,
                ignored=sorted(ignored),
            )

        return MappingConfiguration(
            source_type=source_type,
            destination_type=destination_type,
            destination_members=tuple(destination_surface),
            ignored=ignored,
        )
