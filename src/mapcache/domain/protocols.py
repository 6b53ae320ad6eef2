"""
mapcache Domain Protocols
Contracts for the collaborators the mapping core is wired with
"""
from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from mapcache.domain.mapping_configuration import MappingConfiguration

D = TypeVar("D")


@runtime_checkable
class ISurfaceReader(Protocol):
    """
    Reads the property surface of classes owned by a framework
    (ORM models, validation models, ...).
    """

    def supports(self, cls: type) -> bool:
        """True when this reader knows how to enumerate ``cls``."""
        ...

    def read(self, cls: type) -> dict[str, Any]:
        """Ordered member name -> declared type mapping of ``cls``."""
        ...


class IMappingPlanBuilder(Protocol):
    def build(self, source_type: type, destination_type: type) -> MappingConfiguration: ...


@runtime_checkable
class ICompiledMapper(Protocol):
    """
    Executable mapper bound to one (source type, destination type) pair.
    Immutable once created.
    """

    @property
    def source_type(self) -> type: ...

    @property
    def destination_type(self) -> type: ...

    def map(self, source: Any, destination: D) -> D:
        """Copy every COPY member from ``source`` onto ``destination`` and return it."""
        ...


class IMappingExecutor(Protocol):
    """Turns a MappingConfiguration into an ICompiledMapper."""

    def compile(self, configuration: MappingConfiguration) -> ICompiledMapper: ...
