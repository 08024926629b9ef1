"""Mapping specifications and their compilation into mappers.

A ``TypeMappingSpec`` declares how a source type maps onto a target type:
the target values to write, the source values to read, any custom mappings
to run afterwards, and optionally the factory used to create targets.
Specifications are immutable; every builder method returns a new one.

Example::

    @dataclass
    class Person:
        name: str = ""
        age: int = 0


    @dataclass
    class PersonRecord:
        name: str
        age: int
        row_id: int


    mapper = (
        TypeMappingSpec(Person, PersonRecord)
        .ignoring_source_property("row_id")
        .with_custom_mapping(lambda person, record: setattr(person, "name", person.name.title()))
        .create()
    )
    person = mapper.map(PersonRecord(name="ann", age=30, row_id=7))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from logging import getLogger
from typing import Any, Generic, TypeVar

from fluentmap._types.annotations import type_name, types_are_identical
from fluentmap.composition import (
    ContextualStage,
    compose,
    compose_contextual,
    create_setters,
)
from fluentmap.construction import resolve_constructor
from fluentmap.discovery import ValueProviderRegistry, default_provider_registry
from fluentmap.exceptions import IncompatibleTypesError, UnknownPropertyError
from fluentmap.mapper import ContextualMapper, SimpleMapper
from fluentmap.matching import match_values
from fluentmap.values import SourceValue, Stage, TargetValue

logger = getLogger(__name__)

_T = TypeVar("_T")
_S = TypeVar("_S")
_C = TypeVar("_C")

#: A custom mapping; a returned instance of the target type replaces the target
CustomMapping = Callable[[_T, _S], Any]

#: A custom mapping which also receives the mapping context
ContextualCustomMapping = Callable[[_T, _S, _C], Any]


def _find(values: Iterable[Any], name: str) -> Any | None:
    return next((it for it in values if it.name == name), None)


class TypeMappingSpec(Generic[_T, _S]):
    """Declarative description of how to map a ``_S`` source onto a ``_T`` target.

    Args:
        target_type: The type produced by the mapper.
        source_type: The type read by the mapper.
        target_values: Descriptors for the target properties to write. Discovered
            from target_type using ``providers`` when omitted.
        source_values: Descriptors for the source properties to read. Discovered
            from source_type using ``providers`` when omitted.
        custom_mappings: Stages run after all matched properties are set, in order.
        constructor: Factory for fresh targets. Defaults to calling target_type
            with no arguments.
        providers: Registry used to discover omitted descriptor lists.
    """

    __slots__ = (
        "_target_type",
        "_source_type",
        "_target_values",
        "_source_values",
        "_custom_mappings",
        "_constructor",
        "_providers",
    )

    def __init__(
        self,
        target_type: type[_T],
        source_type: type[_S],
        target_values: Iterable[TargetValue[_T]] | None = None,
        source_values: Iterable[SourceValue[_S]] | None = None,
        custom_mappings: Iterable[CustomMapping[_T, _S]] = (),
        constructor: Callable[[], _T] | None = None,
        providers: ValueProviderRegistry = default_provider_registry,
    ) -> None:
        self._target_type = target_type
        self._source_type = source_type
        self._target_values: tuple[TargetValue[_T], ...] = tuple(
            target_values if target_values is not None else providers.target_values(target_type)
        )
        self._source_values: tuple[SourceValue[_S], ...] = tuple(
            source_values if source_values is not None else providers.source_values(source_type)
        )
        self._custom_mappings: tuple[CustomMapping[_T, _S], ...] = tuple(custom_mappings)
        self._constructor = constructor
        self._providers = providers

    @property
    def target_type(self) -> type[_T]:
        return self._target_type

    @property
    def source_type(self) -> type[_S]:
        return self._source_type

    @property
    def target_values(self) -> tuple[TargetValue[_T], ...]:
        return self._target_values

    @property
    def source_values(self) -> tuple[SourceValue[_S], ...]:
        return self._source_values

    @property
    def custom_mappings(self) -> tuple[CustomMapping[_T, _S], ...]:
        return self._custom_mappings

    @property
    def constructor(self) -> Callable[[], _T] | None:
        return self._constructor

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({type_name(self._target_type)} <- {type_name(self._source_type)}, "
            f"targets={[it.name for it in self._target_values]}, "
            f"sources={[it.name for it in self._source_values]}, "
            f"custom_mappings={len(self._custom_mappings)})"
        )

    def _derive(self, **changes: Any) -> TypeMappingSpec[_T, _S]:
        kwargs: dict[str, Any] = {
            "target_type": self._target_type,
            "source_type": self._source_type,
            "target_values": self._target_values,
            "source_values": self._source_values,
            "custom_mappings": self._custom_mappings,
            "constructor": self._constructor,
            "providers": self._providers,
        }
        kwargs.update(changes)
        return TypeMappingSpec(**kwargs)

    def target_value(self, name: str) -> TargetValue[_T]:
        """Look up a target value by name.

        Raises:
            UnknownPropertyError: If the specification has no such target value.
        """
        if (value := _find(self._target_values, name)) is None:
            raise UnknownPropertyError(
                "target", name, self._target_type, [it.name for it in self._target_values]
            )
        return value

    def source_value(self, name: str) -> SourceValue[_S]:
        """Look up a source value by name.

        Raises:
            UnknownPropertyError: If the specification has no such source value.
        """
        if (value := _find(self._source_values, name)) is None:
            raise UnknownPropertyError(
                "source", name, self._source_type, [it.name for it in self._source_values]
            )
        return value

    def ignoring_target_property(self, name: str) -> TypeMappingSpec[_T, _S]:
        """Stop writing target property ``name``; it keeps whatever the factory set."""
        removed = self.target_value(name)
        return self._derive(target_values=[it for it in self._target_values if it is not removed])

    def ignoring_source_property(self, name: str) -> TypeMappingSpec[_T, _S]:
        """Stop reading source property ``name``."""
        removed = self.source_value(name)
        return self._derive(source_values=[it for it in self._source_values if it is not removed])

    def that_sets(self, name: str) -> SetterSpec[_T, _S]:
        """Select target property ``name`` to bind to a custom value.

        Example::

            spec.that_sets("full_name").from_(lambda src: f"{src.first} {src.last}")
        """
        return SetterSpec(self, self.target_value(name))

    def with_custom_mapping(self, mapping: CustomMapping[_T, _S]) -> TypeMappingSpec[_T, _S]:
        """Append a stage run after all matched properties are set.

        The mapping is called as ``mapping(target, source)``. It may mutate
        the target, or return a new instance of the target type to continue
        with. Any other return value is ignored.
        """
        return self._derive(custom_mappings=(*self._custom_mappings, mapping))

    def with_constructor(self, constructor: Callable[[], _T]) -> TypeMappingSpec[_T, _S]:
        """Use ``constructor`` to create targets instead of calling the target type."""
        return self._derive(constructor=constructor)

    def using_context(self, context_type: type[_C]) -> ContextualTypeMappingSpec[_T, _S, _C]:
        """Derive a specification whose mapper takes an extra context argument.

        Args:
            context_type: The type of context passed to every ``map`` call. Only
                used for typing and descriptions.
        """
        return ContextualTypeMappingSpec(self, context_type)

    def create(self) -> SimpleMapper[_T, _S]:
        """Validate the specification and compile it into a mapper.

        Raises:
            DuplicatePropertyError: If either side declares a property name twice.
            UnmatchedTargetPropertyError: If a target value has no same-named source value.
            UnmatchedSourcePropertyError: If a source value has no same-named target value.
            IncompatibleTypesError: If a matched pair declare different value types.
            NoParameterlessConstructorError: If no constructor was supplied and the
                target type can't be instantiated without arguments.
        """
        setters = self._compile_setters()
        transform = compose([*setters, *self._custom_mappings])
        constructor = resolve_constructor(self._target_type, self._constructor)
        logger.debug(
            "Compiled mapper %s <- %s with %d property setters and %d custom mappings",
            type_name(self._target_type),
            type_name(self._source_type),
            len(setters),
            len(self._custom_mappings),
        )
        return SimpleMapper(constructor, transform)

    def _compile_setters(self) -> list[Stage[_T, _S]]:
        return create_setters(match_values(self._target_values, self._source_values))


class SetterSpec(Generic[_T, _S]):
    """A target property selected with ``TypeMappingSpec.that_sets``, awaiting its value."""

    __slots__ = ("_spec", "_target")

    def __init__(self, spec: TypeMappingSpec[_T, _S], target: TargetValue[_T]) -> None:
        self._spec = spec
        self._target = target

    def from_(self, reader: Callable[[_S], Any]) -> TypeMappingSpec[_T, _S]:
        """Write ``reader(source)`` into the selected property.

        The property is removed from name matching and set by a custom
        mapping instead, so it runs after the matched properties. Only the
        target side changes: a same-named source property is left in place
        and must be dropped with ``ignoring_source_property`` or it will be
        reported as unmatched by ``create``.
        """
        spec = self._spec
        return spec._derive(
            target_values=[it for it in spec.target_values if it is not self._target],
            custom_mappings=(*spec.custom_mappings, self._target.create_setter(reader)),
        )

    def from_source(self, name: str) -> TypeMappingSpec[_T, _S]:
        """Read the selected property from the differently named source property ``name``.

        Both properties are removed from name matching.

        Raises:
            UnknownPropertyError: If there is no source value called ``name``.
            IncompatibleTypesError: If the two properties declare different value types.
        """
        source = self._spec.source_value(name)
        if not types_are_identical(self._target.value_type, source.value_type):
            raise IncompatibleTypesError(self._target, source)
        spec = self.from_(source.create_getter())
        return spec._derive(
            source_values=[it for it in spec.source_values if it is not source],
        )


class ContextualTypeMappingSpec(Generic[_T, _S, _C]):
    """A ``TypeMappingSpec`` whose mapper threads a context value into custom mappings.

    Matching, validation and composition are those of the wrapped
    specification. Custom mappings added here receive
    ``(target, source, context)`` and run after the wrapped specification's
    own custom mappings.
    """

    __slots__ = ("_spec", "_context_type", "_custom_mappings")

    def __init__(
        self,
        spec: TypeMappingSpec[_T, _S],
        context_type: type[_C],
        custom_mappings: Iterable[ContextualCustomMapping[_T, _S, _C]] = (),
    ) -> None:
        self._spec = spec
        self._context_type = context_type
        self._custom_mappings: tuple[ContextualCustomMapping[_T, _S, _C], ...] = tuple(
            custom_mappings
        )

    @property
    def spec(self) -> TypeMappingSpec[_T, _S]:
        return self._spec

    @property
    def context_type(self) -> type[_C]:
        return self._context_type

    @property
    def custom_mappings(self) -> tuple[ContextualCustomMapping[_T, _S, _C], ...]:
        return self._custom_mappings

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._spec!r}, context={type_name(self._context_type)}, "
            f"contextual_mappings={len(self._custom_mappings)})"
        )

    def _derive(
        self,
        spec: TypeMappingSpec[_T, _S] | None = None,
        custom_mappings: Iterable[ContextualCustomMapping[_T, _S, _C]] | None = None,
    ) -> ContextualTypeMappingSpec[_T, _S, _C]:
        return ContextualTypeMappingSpec(
            spec if spec is not None else self._spec,
            self._context_type,
            custom_mappings if custom_mappings is not None else self._custom_mappings,
        )

    def ignoring_target_property(self, name: str) -> ContextualTypeMappingSpec[_T, _S, _C]:
        return self._derive(spec=self._spec.ignoring_target_property(name))

    def ignoring_source_property(self, name: str) -> ContextualTypeMappingSpec[_T, _S, _C]:
        return self._derive(spec=self._spec.ignoring_source_property(name))

    def with_constructor(self, constructor: Callable[[], _T]) -> ContextualTypeMappingSpec[_T, _S, _C]:
        return self._derive(spec=self._spec.with_constructor(constructor))

    def that_sets(self, name: str) -> ContextualSetterSpec[_T, _S, _C]:
        """Select target property ``name`` to bind to a value computed from source and context."""
        return ContextualSetterSpec(self, self._spec.target_value(name))

    def with_custom_mapping(
        self, mapping: ContextualCustomMapping[_T, _S, _C]
    ) -> ContextualTypeMappingSpec[_T, _S, _C]:
        """Append a stage called as ``mapping(target, source, context)``."""
        return self._derive(custom_mappings=(*self._custom_mappings, mapping))

    def create(self) -> ContextualMapper[_T, _S, _C]:
        """Validate the specification and compile it into a contextual mapper.

        Raises the same errors as ``TypeMappingSpec.create``.
        """
        spec = self._spec
        setters = spec._compile_setters()
        transform: ContextualStage[_T, _S, _C] = compose_contextual(
            [*setters, *spec.custom_mappings], self._custom_mappings
        )
        constructor = resolve_constructor(spec.target_type, spec.constructor)
        logger.debug(
            "Compiled contextual mapper %s <- %s (context %s) with %d property setters "
            "and %d custom mappings",
            type_name(spec.target_type),
            type_name(spec.source_type),
            type_name(self._context_type),
            len(setters),
            len(spec.custom_mappings) + len(self._custom_mappings),
        )
        return ContextualMapper(constructor, transform)


class ContextualSetterSpec(Generic[_T, _S, _C]):
    """A target property selected with ``ContextualTypeMappingSpec.that_sets``."""

    __slots__ = ("_spec", "_target")

    def __init__(
        self, spec: ContextualTypeMappingSpec[_T, _S, _C], target: TargetValue[_T]
    ) -> None:
        self._spec = spec
        self._target = target

    def from_(self, reader: Callable[[_S, _C], Any]) -> ContextualTypeMappingSpec[_T, _S, _C]:
        """Write ``reader(source, context)`` into the selected property.

        As with ``SetterSpec.from_``, a same-named source property is not
        removed.
        """
        # The setter's "source" is the (source, context) pair
        setter = self._target.create_setter(lambda pair: reader(*pair))

        def set_from_context(target: _T, source: _S, context: _C) -> _T:
            return setter(target, (source, context))

        inner = self._spec.spec
        return self._spec._derive(
            spec=inner._derive(
                target_values=[it for it in inner.target_values if it is not self._target]
            ),
            custom_mappings=(*self._spec.custom_mappings, set_from_context),
        )

    def from_source(self, name: str) -> ContextualTypeMappingSpec[_T, _S, _C]:
        """Read the selected property from the differently named source property ``name``.

        Both properties are removed from name matching. The value is written
        by a contextual custom mapping, in the order this call was made.

        Raises:
            UnknownPropertyError: If there is no source value called ``name``.
            IncompatibleTypesError: If the two properties declare different value types.
        """
        source = self._spec.spec.source_value(name)
        if not types_are_identical(self._target.value_type, source.value_type):
            raise IncompatibleTypesError(self._target, source)
        getter = source.create_getter()
        contextual = self.from_(lambda value, _context: getter(value))
        inner = contextual.spec
        return contextual._derive(
            spec=inner._derive(source_values=[it for it in inner.source_values if it is not source])
        )


def mapping(
    target_type: type[_T],
    source_type: type[_S],
    **kwargs: Any,
) -> TypeMappingSpec[_T, _S]:
    """Start a mapping specification; reads as ``mapping(Person, PersonDto)``.

    Keyword arguments are passed to ``TypeMappingSpec``.
    """
    return TypeMappingSpec(target_type, source_type, **kwargs)
