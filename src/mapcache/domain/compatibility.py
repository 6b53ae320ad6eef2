"""
Compatibility Analyzer
Decides whether a destination member can be copied from a source surface
"""
from __future__ import annotations

import types
from typing import Any, Mapping, Union, get_args, get_origin

from mapcache.domain.mapping_configuration import MappingDirective

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def is_wrapped(tp: Any) -> bool:
    """True for parameterized generics: Optional[int], int | None, list[str], ..."""
    return get_origin(tp) is not None


def underlying_type(tp: Any) -> Any | None:
    """
    Inner value type of an optional wrapper.

    ``Optional[int]`` and ``int | None`` give ``int``. Any other type,
    including unions with more than one non-None member, gives None.
    """
    if get_origin(tp) not in _UNION_ORIGINS:
        return None
    args = get_args(tp)
    if _NONE_TYPE not in args:
        return None
    inner = [arg for arg in args if arg is not _NONE_TYPE]
    if len(inner) != 1:
        return None
    return inner[0]


def _underlying_matches(wrapped: Any, bare: Any) -> bool:
    if not is_wrapped(wrapped):
        return False
    inner = underlying_type(wrapped)
    return inner is not None and inner == bare


class CompatibilityAnalyzer:
    """
    Conservative per-member compatibility policy.

    A member is copied when source and destination declare the same type,
    or when one side is the optional form of the other (``int`` vs
    ``Optional[int]``). Two different bare types, or two different wrapped
    types, are never treated as compatible.
    """

    def decide(
        self,
        destination_name: str,
        destination_type: Any,
        source_surface: Mapping[str, Any],
    ) -> MappingDirective:
        if destination_name not in source_surface:
            return MappingDirective.IGNORE

        source_type = source_surface[destination_name]
        if source_type == destination_type:
            return MappingDirective.COPY

        # int vs Optional[int] is the only mismatch we let through
        if is_wrapped(source_type) == is_wrapped(destination_type):
            return MappingDirective.IGNORE

        if _underlying_matches(source_type, destination_type) or _underlying_matches(
            destination_type, source_type
        ):
            return MappingDirective.COPY
        return MappingDirective.IGNORE
