"""
Framework surface readers
"""
from mapcache.domain.protocols import ISurfaceReader
from mapcache.infrastructure.introspection.pydantic_reader import PydanticSurfaceReader
from mapcache.infrastructure.introspection.sqlalchemy_reader import SQLAlchemySurfaceReader


def default_surface_readers() -> tuple[ISurfaceReader, ...]:
    """Readers consulted before the generic dataclass/annotation resolution."""
    return (SQLAlchemySurfaceReader(), PydanticSurfaceReader())


__all__ = [
    "PydanticSurfaceReader",
    "SQLAlchemySurfaceReader",
    "default_surface_readers",
]
