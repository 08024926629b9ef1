from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol

import pytest

from fluentmap.construction import resolve_constructor
from fluentmap.exceptions import NoParameterlessConstructorError


@dataclass
class WithDefaults:
    name: str = ""


@dataclass
class RequiresName:
    name: str


class Variadic:
    def __init__(self, *args: object, **kwargs: object) -> None:
        self.args = args


class Named(Protocol):
    name: str


class AbstractNamed(ABC):
    @abstractmethod
    def name(self) -> str: ...


def test_explicit_constructor_is_returned_unmodified() -> None:
    def factory() -> RequiresName:
        return RequiresName(name="x")

    assert resolve_constructor(RequiresName, factory) is factory


@pytest.mark.parametrize("tp", [WithDefaults, Variadic, object])
def test_parameterless_type_is_its_own_factory(tp) -> None:
    constructor = resolve_constructor(tp)

    assert constructor is tp
    assert isinstance(constructor(), tp)


@pytest.mark.parametrize(
    ("tp", "reason"),
    [
        (RequiresName, "requires 'name'"),
        (Named, "is a Protocol"),
        (AbstractNamed, "is abstract"),
    ],
)
def test_unconstructible_type_raises(tp, reason) -> None:
    with pytest.raises(NoParameterlessConstructorError) as exc_info:
        resolve_constructor(tp)

    assert reason in str(exc_info.value)
    assert "with_constructor" in str(exc_info.value)
    assert exc_info.value.target_type is tp


def test_non_class_target_raises() -> None:
    with pytest.raises(NoParameterlessConstructorError, match="it is not a class"):
        resolve_constructor(len)  # type: ignore[arg-type]
