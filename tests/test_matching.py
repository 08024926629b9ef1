import pytest

from fluentmap.exceptions import (
    DuplicatePropertyError,
    IncompatibleTypesError,
    UnmatchedSourcePropertyError,
    UnmatchedTargetPropertyError,
)
from fluentmap.matching import match_values, validate_mapping
from fluentmap.values import AttributeTargetValue, SourceValue


class Person:
    pass


class PersonDto:
    pass


def target(name: str, tp: object = str) -> AttributeTargetValue:
    return AttributeTargetValue(Person, name, tp)


def source(name: str, tp: object = str) -> SourceValue:
    return SourceValue.attribute(PersonDto, name, tp)


def test_match_values_pairs_by_name_in_name_order() -> None:
    pairs = match_values(
        [target("name"), target("age", int)],
        [source("age", int), source("name")],
    )

    assert [(it.target.name, it.source.name) for it in pairs] == [("age", "age"), ("name", "name")]


def test_match_values_accepts_empty_sides() -> None:
    assert match_values([], []) == []


def test_unmatched_target_names_first_in_name_order() -> None:
    with pytest.raises(UnmatchedTargetPropertyError) as exc_info:
        validate_mapping([target("zeta"), target("beta"), target("name")], [source("name")])

    assert exc_info.value.target.name == "beta"
    assert "Target str Person.beta is unmatched." in str(exc_info.value)


def test_unmatched_source_is_reported() -> None:
    with pytest.raises(UnmatchedSourcePropertyError) as exc_info:
        validate_mapping([target("name")], [source("name"), source("age", int)])

    assert exc_info.value.source.name == "age"
    assert "Source int PersonDto.age is unmatched." in str(exc_info.value)


def test_unmatched_targets_are_checked_before_unmatched_sources() -> None:
    with pytest.raises(UnmatchedTargetPropertyError):
        validate_mapping([target("a")], [source("b")])


def test_type_mismatch_names_both_descriptors() -> None:
    with pytest.raises(IncompatibleTypesError) as exc_info:
        validate_mapping([target("age", str)], [source("age", int)])

    assert str(exc_info.value) == "Cannot map [str Person.age] from [int PersonDto.age]."
    assert exc_info.value.target.name == "age"
    assert exc_info.value.source.value_type is int


def test_unmatched_names_are_checked_before_types() -> None:
    with pytest.raises(UnmatchedSourcePropertyError):
        validate_mapping([target("age", str)], [source("age", int), source("extra")])


@pytest.mark.parametrize(
    ("targets", "sources", "side"),
    [
        ([target("name"), target("name")], [source("name")], "Target"),
        ([target("name")], [source("name"), source("name")], "Source"),
    ],
)
def test_duplicate_names_fail_fast(targets, sources, side) -> None:
    with pytest.raises(DuplicatePropertyError) as exc_info:
        validate_mapping(targets, sources)

    assert str(exc_info.value).startswith(f"{side} property 'name' is declared more than once")


def test_subtypes_are_not_compatible() -> None:
    with pytest.raises(IncompatibleTypesError):
        validate_mapping([target("flag", int)], [source("flag", bool)])
