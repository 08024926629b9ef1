"""Exceptions raised while compiling a mapping specification.

Every error in this module is raised synchronously by
``TypeMappingSpec.create()`` or by a builder call on a specification. None
of them is raised by a compiled mapper: failures while mapping (an accessor
or factory raising) propagate from user code unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fluentmap._types.annotations import type_name

if TYPE_CHECKING:
    from fluentmap.values import SourceValue, TargetValue


class MappingError(Exception):
    """Base exception for invalid mapping specifications.

    Attributes:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UnmatchedTargetPropertyError(MappingError):
    """Raised when a target property has no source property of the same name."""

    def __init__(self, target: TargetValue) -> None:
        self.target = target
        super().__init__(
            f"Target {target.description} is unmatched.\n"
            f"Hint: add a source value named '{target.name}', set it explicitly with "
            f"that_sets('{target.name}'), or drop it with "
            f"ignoring_target_property('{target.name}')."
        )


class UnmatchedSourcePropertyError(MappingError):
    """Raised when a source property has no target property of the same name."""

    def __init__(self, source: SourceValue) -> None:
        self.source = source
        super().__init__(
            f"Source {source.description} is unmatched.\n"
            f"Hint: drop it with ignoring_source_property('{source.name}')."
        )


class IncompatibleTypesError(MappingError):
    """Raised when a matched target/source pair declare different value types.

    Attributes:
        target: The target descriptor of the pair.
        source: The source descriptor of the pair.
    """

    def __init__(self, target: TargetValue, source: SourceValue) -> None:
        self.target = target
        self.source = source
        super().__init__(f"Cannot map [{target.description}] from [{source.description}].")


class NoParameterlessConstructorError(MappingError):
    """Raised when no factory was supplied and the target type can't be built without arguments.

    Attributes:
        target_type: The type that could not be constructed.
    """

    def __init__(self, target_type: Any, reason: str) -> None:
        self.target_type = target_type
        super().__init__(
            f"Cannot construct {type_name(target_type)} without arguments: {reason}.\n"
            f"Hint: supply a factory with with_constructor(lambda: {type_name(target_type)}(...))."
        )


class DuplicatePropertyError(MappingError):
    """Raised when two descriptors on the same side of a mapping share a name."""

    def __init__(self, side: str, first: Any, second: Any) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"{side.capitalize()} property '{first.name}' is declared more than once: "
            f"[{first.description}] and [{second.description}]."
        )


class UnknownPropertyError(MappingError):
    """Raised when a builder call names a property the specification doesn't hold."""

    def __init__(self, side: str, name: str, owner: Any, known: list[str]) -> None:
        self.name = name
        self.owner = owner
        super().__init__(
            f"{type_name(owner)} has no {side} property '{name}'. "
            f"Known {side} properties: {', '.join(known) or '(none)'}."
        )
