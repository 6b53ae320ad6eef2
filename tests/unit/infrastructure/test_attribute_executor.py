from dataclasses import dataclass
from typing import Optional

import pytest
from pydantic import BaseModel, ConfigDict

from mapcache.domain.mapping_configuration import MappingConfiguration
from mapcache.exceptions import MappingTypeMismatchError, MemberAssignmentError
from mapcache.infrastructure.executor.attribute_executor import AttributeMappingExecutor


@dataclass
class ProfileDTO:
    name: str = ""
    age: int = 0


@dataclass
class Profile:
    name: str = ""
    age: Optional[int] = None


@dataclass
class VipProfile(Profile):
    level: int = 1


@dataclass(frozen=True)
class FrozenProfile:
    name: str = ""
    age: int = 0


class ProfileView(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""


def _configuration(source_type, destination_type, members=("name", "age"), ignored=frozenset()):
    return MappingConfiguration(
        source_type=source_type,
        destination_type=destination_type,
        destination_members=members,
        ignored=ignored,
    )


def test_compiled_mapper_copies_only_copy_members():
    mapper = AttributeMappingExecutor().compile(
        _configuration(ProfileDTO, Profile, ignored=frozenset({"age"}))
    )

    profile = mapper.map(ProfileDTO(name="ada", age=36), Profile())

    assert profile.name == "ada"
    assert profile.age is None
    assert mapper.members == ("name",)


def test_compiled_mapper_accepts_subclass_instances():
    mapper = AttributeMappingExecutor().compile(_configuration(ProfileDTO, Profile))

    profile = mapper.map(ProfileDTO(name="ada", age=36), VipProfile())

    assert (profile.name, profile.age, profile.level) == ("ada", 36, 1)


def test_compiled_mapper_rejects_foreign_instances():
    mapper = AttributeMappingExecutor().compile(_configuration(ProfileDTO, Profile))

    with pytest.raises(MappingTypeMismatchError) as exc_info:
        mapper.map(Profile(), Profile())

    assert exc_info.value.details["role"] == "source"


def test_type_verification_can_be_disabled():
    mapper = AttributeMappingExecutor(verify_types=False).compile(_configuration(ProfileDTO, Profile))

    profile = mapper.map(Profile(name="ada", age=1), Profile())

    assert profile.name == "ada"


def test_frozen_destination_raises_member_assignment_error():
    mapper = AttributeMappingExecutor().compile(_configuration(ProfileDTO, FrozenProfile))

    with pytest.raises(MemberAssignmentError) as exc_info:
        mapper.map(ProfileDTO(name="ada"), FrozenProfile())

    assert exc_info.value.details["member"] == "name"
    assert isinstance(exc_info.value.__cause__, AttributeError)


def test_frozen_pydantic_destination_raises_member_assignment_error():
    mapper = AttributeMappingExecutor().compile(_configuration(ProfileDTO, ProfileView, members=("name",)))

    with pytest.raises(MemberAssignmentError):
        mapper.map(ProfileDTO(name="ada"), ProfileView())


def test_compiled_mapper_is_immutable():
    mapper = AttributeMappingExecutor().compile(_configuration(ProfileDTO, Profile))

    with pytest.raises(AttributeError):
        mapper.members = ()
