"""
mapcache error hierarchy.

Compatibility decisions are policy, not faults: an incompatible or missing
member is simply ignored. The errors below cover misuse of the public API
and failures of the executor while copying values.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class MapCacheError(Exception):
    """Base class for every error raised by mapcache."""
    code: str = "mapcache_error"
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.__class__.__name__)
        if code is not None:
            self.code = code
        self.message = message or self.__class__.__name__
        self.details = details or None


class SurfaceResolutionError(MapCacheError):
    code = "surface_resolution_failed"


class InterfaceHierarchyTooLargeError(MapCacheError):
    code = "interface_hierarchy_too_large"


class MapCacheConfigurationError(MapCacheError):
    code = "invalid_configuration"


class MappingTypeMismatchError(MapCacheError):
    code = "type_mismatch"


class MemberAssignmentError(MapCacheError):
    code = "member_assignment_failed"
