from dataclasses import dataclass

import pytest

from fluentmap import TypeMappingSpec, mapping


@dataclass
class Person:
    name: str = ""
    age: int = 0
    full_name: str = ""


@dataclass
class PersonRecord:
    name: str
    age: int
    first: str
    last: str
    row_id: int


@dataclass(frozen=True)
class Greeting:
    salutation: str


@pytest.fixture
def unrefined_spec() -> TypeMappingSpec[Person, PersonRecord]:
    """The discovered specification, before any property is ignored or bound."""
    return mapping(Person, PersonRecord)


@pytest.fixture
def spec(unrefined_spec) -> TypeMappingSpec[Person, PersonRecord]:
    """A specification which compiles: only ``name`` and ``age`` are matched."""
    return (
        unrefined_spec.ignoring_source_property("first")
        .ignoring_source_property("last")
        .ignoring_source_property("row_id")
        .ignoring_target_property("full_name")
    )


@pytest.fixture
def record() -> PersonRecord:
    return PersonRecord(name="ann", age=30, first="Ann", last="Lee", row_id=7)


@pytest.fixture
def greeting() -> Greeting:
    return Greeting(salutation="Dr.")
