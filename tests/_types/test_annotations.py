from typing import Annotated, Any, ClassVar, Final, NotRequired, Optional, Required
from uuid import UUID

import pytest
from sqlalchemy.orm import Mapped

from fluentmap._types.annotations import TypeAnnotation, type_name, types_are_identical, unwrap


@pytest.mark.parametrize(
    ("annotation", "expected_tp"),
    [
        (str, str),
        (int, int),
        (UUID, UUID),
        (list[int], list[int]),
        (dict[str, int], dict[str, int]),
    ],
)
def test_create_extracts_plain_type(annotation, expected_tp):
    result = TypeAnnotation.create(annotation)
    assert result.tp == expected_tp
    assert result.qualifiers == ()
    assert result.metadata == ()


@pytest.mark.parametrize(
    ("annotation", "expected_tp", "expected_qualifier"),
    [
        (Mapped[str], str, Mapped),
        (Mapped[list[int]], list[int], Mapped),
        (Required[str], str, Required),
        (NotRequired[int], int, NotRequired),
        (ClassVar[int], int, ClassVar),
        (Final[str], str, Final),
    ],
)
def test_create_extracts_type_from_single_qualifier(annotation, expected_tp, expected_qualifier):
    result = TypeAnnotation.create(annotation)
    assert result.tp == expected_tp
    assert expected_qualifier in result.qualifiers


def test_create_handles_annotated_with_qualifier():
    annotation = Annotated[Mapped[str], "metadata"]
    result = TypeAnnotation.create(annotation)
    assert result.tp is str
    assert Mapped in result.qualifiers
    assert result.metadata == ("metadata",)


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [(ClassVar[int], True), (Final[int], True), (ClassVar, True), (Mapped[int], False), (int, False)],
)
def test_is_class_level(annotation, expected):
    assert TypeAnnotation.create(annotation).is_class_level is expected


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (str, str),
        (Mapped[str], str),
        (Annotated[int, "meta"], int),
        (Annotated[Mapped[UUID], "meta"], UUID),
    ],
)
def test_unwrap_removes_wrappers(annotation, expected):
    assert unwrap(annotation) == expected


@pytest.mark.parametrize(
    ("target_tp", "source_tp"),
    [
        (int, int),
        (Mapped[int], int),
        (Annotated[str, "meta"], str),
        (list[int], list[int]),
        (Optional[int], int | None),
    ],
)
def test_types_are_identical(target_tp, source_tp):
    assert types_are_identical(target_tp, source_tp)


@pytest.mark.parametrize(
    ("target_tp", "source_tp"),
    [
        (int, str),
        (int, bool),
        (bool, int),
        (float, int),
        (list[int], list[str]),
        (list[int], list),
        (int | None, int),
    ],
)
def test_types_are_not_identical(target_tp, source_tp):
    assert not types_are_identical(target_tp, source_tp)


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (int, "int"),
        (UUID, "UUID"),
        (list[int], "list[int]"),
        (dict[str, int], "dict[str, int]"),
        (int | None, "int | None"),
        (Any, "Any"),
    ],
)
def test_type_name(tp, expected):
    assert type_name(tp) == expected
