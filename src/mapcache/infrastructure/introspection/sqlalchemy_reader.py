"""
SQLAlchemy ORM surface reader
"""
from __future__ import annotations

from typing import Any, Optional, get_args, get_origin, get_type_hints

from sqlalchemy import Column
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapped, Mapper

from mapcache.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


def _python_type(column: Column) -> Any:
    try:
        return column.type.python_type
    except NotImplementedError:
        return Any


def _column_type(column: Column) -> Any:
    python_type = _python_type(column)
    if column.nullable and python_type is not Any:
        return Optional[python_type]
    return python_type


def _annotated_type(hint: Any) -> Any:
    if get_origin(hint) is Mapped:
        return get_args(hint)[0]
    return hint


def _class_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as exc:
        # relationship targets are often only imported under TYPE_CHECKING
        logger.debug(
            "ORM annotations unresolved, using column types",
            model=cls.__qualname__,
            error=str(exc),
        )
        return {}


class SQLAlchemySurfaceReader:
    """
    Surface of a mapped ORM class, read from its column attributes.

    A column declared as ``Mapped[X]`` reads as ``X``, so
    ``Mapped[dict[str, Any]] = mapped_column(JSON)`` reads as
    ``dict[str, Any]`` and ``Mapped[Optional[datetime]]`` as
    ``Optional[datetime]``. Columns without an annotation fall back to the
    column's Python type, made Optional when the column is nullable, and to
    ``Any`` when the column type has no Python type. Relationships and SQL
    expression properties are not part of the surface.
    """

    def supports(self, cls: type) -> bool:
        return isinstance(sa_inspect(cls, raiseerr=False), Mapper)

    def read(self, cls: type) -> dict[str, Any]:
        mapper = sa_inspect(cls)
        hints = _class_hints(cls)
        surface: dict[str, Any] = {}
        for attr in mapper.column_attrs:
            if attr.key.startswith("_"):
                continue
            column = attr.columns[0]
            if not isinstance(column, Column):
                continue
            if attr.key in hints:
                surface[attr.key] = _annotated_type(hints[attr.key])
            else:
                surface[attr.key] = _column_type(column)
        return surface
