from enum import IntEnum
from typing import Optional, Union

import pytest

from mapcache.domain.compatibility import CompatibilityAnalyzer, is_wrapped, underlying_type
from mapcache.domain.mapping_configuration import MappingDirective

COPY = MappingDirective.COPY
IGNORE = MappingDirective.IGNORE


class Color(IntEnum):
    RED = 1


class Status(IntEnum):
    ACTIVE = 1


@pytest.fixture
def analyzer():
    return CompatibilityAnalyzer()


def test_wrapped_means_parameterized():
    assert is_wrapped(Optional[int])
    assert is_wrapped(int | None)
    assert is_wrapped(list[int])
    assert not is_wrapped(int)
    assert not is_wrapped(str)


def test_underlying_type_of_optional_wrappers():
    assert underlying_type(Optional[int]) is int
    assert underlying_type(int | None) is int
    assert underlying_type(list[int]) is None
    assert underlying_type(Union[int, str]) is None
    assert underlying_type(Optional[Union[int, str]]) is None
    assert underlying_type(int) is None


def test_absent_member_is_ignored(analyzer):
    assert analyzer.decide("count", int, {"total": int}) is IGNORE


def test_exact_type_match_is_copied(analyzer):
    assert analyzer.decide("count", int, {"count": int}) is COPY
    assert analyzer.decide("tags", list[str], {"tags": list[str]}) is COPY
    assert analyzer.decide("count", Optional[int], {"count": int | None}) is COPY


def test_different_bare_types_are_ignored(analyzer):
    assert analyzer.decide("count", int, {"count": str}) is IGNORE


def test_unrelated_enums_with_same_base_are_ignored(analyzer):
    assert analyzer.decide("state", Color, {"state": Status}) is IGNORE


@pytest.mark.parametrize(
    ("destination_type", "source_type"),
    [(Optional[int], int), (int, Optional[int]), (int | None, int)],
)
def test_optional_and_bare_of_same_type_are_copied(analyzer, destination_type, source_type):
    assert analyzer.decide("count", destination_type, {"count": source_type}) is COPY


def test_optional_and_unrelated_bare_type_are_ignored(analyzer):
    assert analyzer.decide("count", Optional[int], {"count": str}) is IGNORE
    assert analyzer.decide("count", str, {"count": Optional[int]}) is IGNORE


def test_two_different_wrapped_types_are_ignored(analyzer):
    assert analyzer.decide("count", Optional[int], {"count": Optional[float]}) is IGNORE
    assert analyzer.decide("tags", list[str], {"tags": Optional[str]}) is IGNORE


def test_non_optional_wrapper_never_unwraps(analyzer):
    assert analyzer.decide("tags", str, {"tags": list[str]}) is IGNORE
