"""Pairing target values with source values by name.

Validation is deterministic: both descriptor lists are ordered by name, and
when several descriptors are at fault the error names the first of them in
that order. Checks run in a fixed sequence (duplicates, unmatched targets,
unmatched sources, type mismatches), so the same specification always fails
with the same error.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fluentmap._types.annotations import types_are_identical
from fluentmap.exceptions import (
    DuplicatePropertyError,
    IncompatibleTypesError,
    UnmatchedSourcePropertyError,
    UnmatchedTargetPropertyError,
)
from fluentmap.utils.collections import first_duplicate
from fluentmap.values import SourceValue, TargetValue

_T = TypeVar("_T")
_S = TypeVar("_S")


@dataclass(frozen=True, slots=True)
class ValuePair(Generic[_T, _S]):
    """A validated target value and the same-named source value it is read from."""

    target: TargetValue[_T]
    source: SourceValue[_S]


def _by_name(values: Sequence[Any]) -> list[Any]:
    return sorted(values, key=lambda it: it.name)


def validate_mapping(
    target_values: Sequence[TargetValue[Any]],
    source_values: Sequence[SourceValue[Any]],
) -> None:
    """Check that target and source values correspond one-to-one with matching types.

    Args:
        target_values: Descriptors for the properties written on the target.
        source_values: Descriptors for the properties read from the source.

    Raises:
        DuplicatePropertyError: If either side declares a name twice.
        UnmatchedTargetPropertyError: If a target name has no source counterpart.
        UnmatchedSourcePropertyError: If a source name has no target counterpart.
        IncompatibleTypesError: If a same-named pair declare different value types.
    """
    if duplicate := first_duplicate(target_values, key=lambda it: it.name):
        raise DuplicatePropertyError("target", *duplicate)
    if duplicate := first_duplicate(source_values, key=lambda it: it.name):
        raise DuplicatePropertyError("source", *duplicate)

    targets = {it.name: it for it in target_values}
    sources = {it.name: it for it in source_values}

    unmatched_target = next((it for it in _by_name(target_values) if it.name not in sources), None)
    if unmatched_target is not None:
        raise UnmatchedTargetPropertyError(unmatched_target)

    unmatched_source = next((it for it in _by_name(source_values) if it.name not in targets), None)
    if unmatched_source is not None:
        raise UnmatchedSourcePropertyError(unmatched_source)

    mismatch = next(
        (
            (target, sources[target.name])
            for target in _by_name(target_values)
            if not types_are_identical(target.value_type, sources[target.name].value_type)
        ),
        None,
    )
    if mismatch is not None:
        raise IncompatibleTypesError(*mismatch)


def match_values(
    target_values: Sequence[TargetValue[_T]],
    source_values: Sequence[SourceValue[_S]],
) -> list[ValuePair[_T, _S]]:
    """Validate, then pair each target value with its same-named source value.

    Returns:
        The pairs in ascending name order.
    """
    validate_mapping(target_values, source_values)
    return [
        ValuePair(target, source)
        for target, source in zip(_by_name(target_values), _by_name(source_values), strict=True)
    ]
