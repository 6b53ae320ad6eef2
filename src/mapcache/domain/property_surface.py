"""
Property Surface Resolver
Enumerates the public, readable and writable members of a type

A surface is an ordered ``dict`` of member name -> declared type. It is
rebuilt on every call; caching happens at the compiled-mapper level only.
"""
from __future__ import annotations

import dataclasses
import inspect
from collections import deque
from typing import Any, ClassVar, Generic, Protocol, Sequence, get_origin, get_type_hints

from mapcache.domain.protocols import ISurfaceReader
from mapcache.exceptions import InterfaceHierarchyTooLargeError, SurfaceResolutionError

_INTERFACE_MARKERS = (Protocol, Generic, object)

DEFAULT_MAX_INTERFACE_COUNT = 256


def is_interface(cls: Any) -> bool:
    """True for classes declared as typing.Protocol (not their implementations)."""
    return (
        isinstance(cls, type)
        and cls not in _INTERFACE_MARKERS
        and bool(getattr(cls, "_is_protocol", False))
    )


def direct_interfaces(cls: type) -> list[type]:
    """Protocols ``cls`` directly extends, in base-class order."""
    return [base for base in cls.__bases__ if is_interface(base)]


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise SurfaceResolutionError(
            f"Cannot resolve annotations of {cls.__qualname__}: {exc}",
            details={"type": f"{cls.__module__}.{cls.__qualname__}"},
        ) from exc


def _property_type(prop: property) -> Any:
    try:
        return get_type_hints(prop.fget).get("return", Any)
    except (NameError, TypeError) as exc:
        raise SurfaceResolutionError(
            f"Cannot resolve return annotation of property {prop.fget.__qualname__}: {exc}",
        ) from exc


def _is_settable_property(attr: Any) -> bool:
    return isinstance(attr, property) and attr.fget is not None and attr.fset is not None


def _settable_properties(cls: type) -> dict[str, Any]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for name in vars(klass):
            if _is_public(name) and name not in names:
                names.append(name)

    found: dict[str, Any] = {}
    for name in names:
        attr = inspect.getattr_static(cls, name)
        if _is_settable_property(attr):
            found[name] = _property_type(attr)
    return found


def _own_members(iface: type) -> dict[str, Any]:
    """Members declared directly on ``iface``, ignoring what it inherits."""
    hints = _resolve_hints(iface)
    try:
        own_annotations = inspect.get_annotations(iface)
    except NameError as exc:
        raise SurfaceResolutionError(
            f"Cannot resolve annotations of {iface.__qualname__}: {exc}",
        ) from exc

    members: dict[str, Any] = {}
    for name in own_annotations:
        hint = hints.get(name, Any)
        if _is_public(name) and get_origin(hint) is not ClassVar:
            members[name] = hint
    for name, attr in vars(iface).items():
        if _is_public(name) and _is_settable_property(attr):
            members.setdefault(name, _property_type(attr))
    return members


class PropertySurfaceResolver:
    """
    Resolves property surfaces.

    Framework classes are handed to the first ``ISurfaceReader`` that
    supports them. Protocols are walked breadth-first over the interfaces
    they extend. Everything else is read from dataclass fields or class
    annotations plus settable properties.
    """

    def __init__(
        self,
        readers: Sequence[ISurfaceReader] = (),
        max_interface_count: int | None = None,
    ) -> None:
        if max_interface_count is None:
            max_interface_count = DEFAULT_MAX_INTERFACE_COUNT
        if max_interface_count <= 0:
            raise ValueError(f"max_interface_count must be positive, got {max_interface_count}")
        self._readers = tuple(readers)
        self._max_interface_count = max_interface_count

    def resolve(self, cls: type) -> dict[str, Any]:
        if not isinstance(cls, type):
            raise SurfaceResolutionError(
                f"Expected a class, got {cls!r}",
                details={"value": repr(cls)},
            )
        if is_interface(cls):
            return self._resolve_interface(cls)
        return self._resolve_flat(cls)

    def _resolve_flat(self, cls: type) -> dict[str, Any]:
        for reader in self._readers:
            if reader.supports(cls):
                return reader.read(cls)

        hints = _resolve_hints(cls)
        if dataclasses.is_dataclass(cls):
            names = [f.name for f in dataclasses.fields(cls)]
        else:
            names = [name for name, hint in hints.items() if get_origin(hint) is not ClassVar]

        surface = {name: hints.get(name, Any) for name in names if _is_public(name)}
        for name, prop_type in _settable_properties(cls).items():
            surface.setdefault(name, prop_type)
        return surface

    def _resolve_interface(self, iface: type) -> dict[str, Any]:
        limit = self._max_interface_count

        considered = {iface}
        queue = deque([iface])
        collected: list[tuple[str, Any]] = []
        collected_names: set[str] = set()

        while queue:
            current = queue.popleft()

            for parent in direct_interfaces(current):
                if parent in considered:
                    continue
                considered.add(parent)
                if len(considered) > limit:
                    raise InterfaceHierarchyTooLargeError(
                        f"{iface.__qualname__} extends more than {limit} interfaces",
                        details={"interface": iface.__qualname__, "limit": limit},
                    )
                queue.append(parent)

            new_members = [
                (name, member_type)
                for name, member_type in _own_members(current).items()
                if name not in collected_names
            ]
            collected_names.update(name for name, _ in new_members)
            # ancestors end up in front of the interfaces that extend them
            collected[0:0] = new_members

        return dict(collected)
