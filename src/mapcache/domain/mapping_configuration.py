"""
Mapping Configuration Value Objects
Per-member directives for one (source type, destination type) pair
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import StrEnum

from mapcache.exceptions import MapCacheConfigurationError


class MappingDirective(StrEnum):
    """Decision taken for a single destination member."""
    COPY = "copy"
    IGNORE = "ignore"


@dataclass(frozen=True)
class MappingConfiguration:
    """
    Directives for every destination member of a type pair.

    Only exclusions are recorded: a destination member that is not in
    ``ignored`` is copied from the same-named source member.

    Attributes:
        source_type: Type the values are read from
        destination_type: Type the values are written to
        destination_members: Destination member names, in surface order
        ignored: Destination member names that must not be copied
    """

    source_type: type
    destination_type: type
    destination_members: tuple[str, ...]
    ignored: frozenset[str] = frozenset()

    def directive_for(self, member: str) -> MappingDirective:
        """
        Directive for a destination member.

        Raises:
            KeyError: If ``member`` is not a destination member
        """
        if member not in self.destination_members:
            raise KeyError(member)
        if member in self.ignored:
            return MappingDirective.IGNORE
        return MappingDirective.COPY

    @property
    def directives(self) -> dict[str, MappingDirective]:
        return {name: self.directive_for(name) for name in self.destination_members}

    @property
    def copied_members(self) -> tuple[str, ...]:
        return tuple(name for name in self.destination_members if name not in self.ignored)

    def ignore(self, *members: str) -> MappingConfiguration:
        """
        Derive a configuration that additionally ignores ``members``.

        Raises:
            MapCacheConfigurationError: If a name is not a destination member
        """
        unknown = [name for name in members if name not in self.destination_members]
        if unknown:
            raise MapCacheConfigurationError(
                f"{self.destination_type.__name__} has no member(s) {', '.join(unknown)}",
                details={"destination": self.destination_type.__qualname__, "members": unknown},
            )
        return dataclasses.replace(self, ignored=self.ignored | frozenset(members))

    def __repr__(self) -> str:
        return (
            f"MappingConfiguration({self.source_type.__name__} -> {self.destination_type.__name__}, "
            f"copy={list(self.copied_members)}, ignore={sorted(self.ignored)})"
        )
