"""
Attribute Mapping Executor
Copies COPY-directed members between instances with getattr/setattr
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from mapcache.domain.mapping_configuration import MappingConfiguration
from mapcache.exceptions import MappingTypeMismatchError, MemberAssignmentError

D = TypeVar("D")


@dataclass(frozen=True)
class CompiledMapper:
    """
    Mapper bound to one (source type, destination type) pair.

    Values are copied by reference, member by member, in destination
    surface order. Nested objects and collections are not copied deeply.
    """

    source_type: type
    destination_type: type
    members: tuple[str, ...]
    verify_types: bool = True

    def map(self, source: Any, destination: D) -> D:
        """
        Copy every bound member from ``source`` onto ``destination``.

        Returns:
            ``destination``, mutated in place

        Raises:
            MappingTypeMismatchError: If the instances do not match the bound types
            MemberAssignmentError: If a member cannot be read or assigned
        """
        if self.verify_types:
            self._check_instance(source, self.source_type, "source")
            self._check_instance(destination, self.destination_type, "destination")

        for member in self.members:
            try:
                setattr(destination, member, getattr(source, member))
            except (AttributeError, TypeError, ValueError) as exc:
                raise MemberAssignmentError(
                    f"Cannot copy {member!r} from {type(source).__name__} to {type(destination).__name__}: {exc}",
                    details={
                        "member": member,
                        "source": type(source).__qualname__,
                        "destination": type(destination).__qualname__,
                    },
                ) from exc
        return destination

    @staticmethod
    def _check_instance(value: Any, expected: type, role: str) -> None:
        if not isinstance(value, expected):
            raise MappingTypeMismatchError(
                f"Mapper expects a {expected.__name__} {role}, got {type(value).__name__}",
                details={"role": role, "expected": expected.__qualname__, "actual": type(value).__qualname__},
            )

    def __repr__(self) -> str:
        return f"CompiledMapper({self.source_type.__name__} -> {self.destination_type.__name__}, members={list(self.members)})"


class AttributeMappingExecutor:
    """Compiles a MappingConfiguration into a CompiledMapper."""

    def __init__(self, verify_types: bool = True) -> None:
        self._verify_types = verify_types

    def compile(self, configuration: MappingConfiguration) -> CompiledMapper:
        return CompiledMapper(
            source_type=configuration.source_type,
            destination_type=configuration.destination_type,
            members=configuration.copied_members,
            verify_types=self._verify_types,
        )
