from dataclasses import dataclass, field
from typing import ClassVar, Optional, Protocol

import pytest

from mapcache.domain.property_surface import (
    PropertySurfaceResolver,
    direct_interfaces,
    is_interface,
)
from mapcache.exceptions import InterfaceHierarchyTooLargeError, SurfaceResolutionError


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass
class AuditedDTO:
    created_at: str
    updated_at: Optional[str] = None


@dataclass
class UserDTO(AuditedDTO):
    email: str = ""
    login_count: int = 0
    _cache_key: str = ""
    tags: list[str] = field(default_factory=list)
    registry: ClassVar[dict] = {}


class Account:
    kind: ClassVar[str] = "account"
    email: str
    balance: Optional[int]

    def __init__(self) -> None:
        self._nickname = ""

    @property
    def nickname(self) -> str:
        return self._nickname

    @nickname.setter
    def nickname(self, value: str) -> None:
        self._nickname = value

    @property
    def display_name(self) -> str:
        return self.email


class PremiumAccount(Account):
    tier: int


class HasP(Protocol):
    p: int


class HasQ(HasP, Protocol):
    q: str


class HasR(HasP, Protocol):
    r: float


class HasAll(HasQ, HasR, Protocol):
    pass


class HasName(Protocol):
    label: str

    @property
    def name(self) -> str: ...

    @name.setter
    def name(self, value: str) -> None: ...

    @property
    def slug(self) -> str: ...


class Named:
    name: str


class Broken:
    owner: "MissingType"  # noqa: F821


def _resolver(**kwargs) -> PropertySurfaceResolver:
    return PropertySurfaceResolver(**kwargs)


# ---------------------------------------------------------------------------
# Ordinary types
# ---------------------------------------------------------------------------


def test_dataclass_surface_follows_field_order_including_bases():
    surface = _resolver().resolve(UserDTO)

    assert list(surface) == ["created_at", "updated_at", "email", "login_count", "tags"]
    assert surface["updated_at"] == Optional[str]
    assert surface["tags"] == list[str]


def test_private_and_classvar_members_are_excluded():
    surface = _resolver().resolve(UserDTO)

    assert "_cache_key" not in surface
    assert "registry" not in surface


def test_plain_class_uses_annotations_and_settable_properties():
    surface = _resolver().resolve(Account)

    assert surface == {"email": str, "balance": Optional[int], "nickname": str}
    assert "kind" not in surface
    assert "display_name" not in surface


def test_plain_class_surface_is_flattened_base_first():
    surface = _resolver().resolve(PremiumAccount)

    assert list(surface) == ["email", "balance", "tier", "nickname"]


def test_surface_is_rebuilt_on_every_call():
    resolver = _resolver()

    first = resolver.resolve(UserDTO)
    first["injected"] = int

    assert "injected" not in resolver.resolve(UserDTO)


def test_unresolvable_annotation_raises_surface_error():
    with pytest.raises(SurfaceResolutionError) as exc_info:
        _resolver().resolve(Broken)

    assert exc_info.value.code == "surface_resolution_failed"
    assert isinstance(exc_info.value.__cause__, NameError)


def test_non_class_is_rejected():
    with pytest.raises(SurfaceResolutionError):
        _resolver().resolve(Optional[int])


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


def test_protocols_are_interfaces_but_implementations_are_not():
    assert is_interface(HasP)
    assert is_interface(HasAll)
    assert not is_interface(Protocol)
    assert not is_interface(Named)
    assert not is_interface(int)


def test_direct_interfaces_lists_extended_protocols_only():
    assert direct_interfaces(HasAll) == [HasQ, HasR]
    assert direct_interfaces(HasP) == []


def test_diamond_interface_members_appear_once():
    surface = _resolver().resolve(HasAll)

    assert surface == {"p": int, "q": str, "r": float}


def test_diamond_interface_orders_ancestors_first():
    surface = _resolver().resolve(HasAll)

    # HasQ is visited before HasR, HasP last; each level is inserted in front
    assert list(surface) == ["p", "r", "q"]


def test_interface_surface_includes_settable_properties_only():
    surface = _resolver().resolve(HasName)

    assert surface == {"label": str, "name": str}


def test_interface_traversal_is_bounded():
    with pytest.raises(InterfaceHierarchyTooLargeError) as exc_info:
        _resolver(max_interface_count=2).resolve(HasAll)

    assert exc_info.value.details == {"interface": "HasAll", "limit": 2}


def test_interface_bound_defaults_when_not_given():
    assert _resolver().resolve(HasAll) == {"p": int, "r": float, "q": str}
    assert _resolver(max_interface_count=None).resolve(HasAll) == {"p": int, "r": float, "q": str}


def test_exact_interface_bound_is_allowed():
    assert _resolver(max_interface_count=4).resolve(HasAll) == {"p": int, "r": float, "q": str}


@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_interface_bound_is_rejected(limit):
    with pytest.raises(ValueError):
        _resolver(max_interface_count=limit)


# ---------------------------------------------------------------------------
# Framework readers
# ---------------------------------------------------------------------------


class _FixedReader:
    def supports(self, cls):
        return cls is Named

    def read(self, cls):
        return {"name": str, "extra": int}


def test_first_supporting_reader_wins():
    resolver = _resolver(readers=[_FixedReader()])

    assert resolver.resolve(Named) == {"name": str, "extra": int}
    assert resolver.resolve(Account) == {"email": str, "balance": Optional[int], "nickname": str}
