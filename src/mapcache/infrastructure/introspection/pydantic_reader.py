"""
pydantic model surface reader
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class PydanticSurfaceReader:
    """Surface of a pydantic model: its declared fields, in declaration order."""

    def supports(self, cls: type) -> bool:
        return isinstance(cls, type) and issubclass(cls, BaseModel)

    def read(self, cls: type[BaseModel]) -> dict[str, Any]:
        return {
            name: field.annotation if field.annotation is not None else Any
            for name, field in cls.model_fields.items()
            if not name.startswith("_")
        }
