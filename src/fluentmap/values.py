"""Named, typed handles for reading a source property or writing a target property.

A mapping is declared as two lists of descriptors: ``SourceValue`` objects
which know how to read one value off a source instance, and ``TargetValue``
objects which know how to write one value onto a target instance. Descriptors
are joined by name, and a matched pair must agree on its value type.

Example::

    name = SourceValue.attribute(PersonDto, "name", str)
    target = AttributeTargetValue(Person, "name", str)
    setter = target.create_setter(name.create_getter())
    person = setter(Person(), PersonDto(name="Ann"))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Generic, Protocol, Self, TypeVar, runtime_checkable

from fluentmap._types.annotations import type_name, unwrap

_T = TypeVar("_T")
_S = TypeVar("_S")

#: A single mapping stage: given the target so far and the source, yield the target
Stage = Callable[[_T, _S], _T]

#: Builds a new target with one property replaced
Replacer = Callable[[_T, str, Any], _T]


def describe(value_type: Any, owner: Any, name: str) -> str:
    """Human-readable description of a descriptor, e.g. ``"int Person.age"``."""
    return f"{type_name(value_type)} {type_name(owner)}.{name}"


@dataclass(frozen=True, slots=True)
class SourceValue(Generic[_S]):
    """A readable property on the source side of a mapping.

    Attributes:
        owner: The source type the property belongs to.
        name: The property name, used to match against target values.
        value_type: The declared type of the value, with Annotated/Mapped wrappers removed.
        reader: Reads the value off a source instance.
    """

    owner: Any
    name: str
    value_type: Any
    reader: Callable[[_S], Any] = field(compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_type", unwrap(self.value_type))

    @classmethod
    def attribute(cls, owner: Any, name: str, value_type: Any) -> Self:
        """Create a source value which reads attribute ``name``."""
        return cls(owner=owner, name=name, value_type=value_type, reader=attrgetter(name))

    @property
    def description(self) -> str:
        return describe(self.value_type, self.owner, self.name)

    def create_getter(self) -> Callable[[_S], Any]:
        return self.reader


@runtime_checkable
class TargetValue(Protocol[_T]):
    """A writable property on the target side of a mapping.

    Implementations differ only in how the write is performed; see
    ``AttributeTargetValue`` and ``ReplaceTargetValue``.
    """

    @property
    def owner(self) -> Any: ...

    @property
    def name(self) -> str: ...

    @property
    def value_type(self) -> Any: ...

    @property
    def description(self) -> str: ...

    def create_setter(self, getter: Callable[[Any], Any]) -> Stage[_T, Any]:
        """Create a stage which writes ``getter(source)`` into this property.

        Args:
            getter: Reads the value to write from the source instance.

        Returns:
            A callable ``(target, source) -> target``. The returned target may be
            the same instance (mutated) or a new one (replaced).
        """
        ...


@dataclass(frozen=True, slots=True)
class AttributeTargetValue(Generic[_T]):
    """Target value written with ``setattr``; the target is mutated in place."""

    owner: Any
    name: str
    value_type: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_type", unwrap(self.value_type))

    @property
    def description(self) -> str:
        return describe(self.value_type, self.owner, self.name)

    def create_setter(self, getter: Callable[[Any], Any]) -> Stage[_T, Any]:
        name = self.name

        def set_attribute(target: _T, source: Any) -> _T:
            setattr(target, name, getter(source))
            return target

        return set_attribute


@dataclass(frozen=True, slots=True)
class ReplaceTargetValue(Generic[_T]):
    """Target value written by building a new target with the property replaced.

    Used for immutable targets such as frozen dataclasses, where the write is
    ``dataclasses.replace(target, **{name: value})``.

    Attributes:
        replacer: Called as ``replacer(target, name, value)``; returns the new target.
    """

    owner: Any
    name: str
    value_type: Any
    replacer: Replacer[_T] = field(compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_type", unwrap(self.value_type))

    @property
    def description(self) -> str:
        return describe(self.value_type, self.owner, self.name)

    def create_setter(self, getter: Callable[[Any], Any]) -> Stage[_T, Any]:
        name = self.name
        replacer = self.replacer

        def replace_value(target: _T, source: Any) -> _T:
            return replacer(target, name, getter(source))

        return replace_value
