import typing
from sqlalchemy.orm import Mapped
from typing import Any, ClassVar, Final, Required, NotRequired, get_origin, get_args, Self
from dataclasses import dataclass

DEFAULT_QUALIFIERS = (Mapped, Required, NotRequired, ClassVar, Final)

#: Qualifiers which mark an annotation as not describing a per-instance value
CLASS_LEVEL_QUALIFIERS = (ClassVar, Final)


@dataclass(frozen=True, kw_only=True, slots=True)
class TypeAnnotation:
    tp: type[Any]
    qualifiers: tuple[Any, ...]
    metadata: tuple[Any, ...]

    @classmethod
    def create(
        cls,
        annotation: Any,
        known_qualifiers: tuple[Any, ...] = DEFAULT_QUALIFIERS,
    ) -> Self:
        tp, qualifiers, metadata = cls._walk_tp(annotation, known_qualifiers)
        return cls(tp=tp, qualifiers=qualifiers, metadata=metadata)

    @classmethod
    def _walk_tp(
        cls,
        annotation: Any,
        known_qualifiers: tuple[Any, ...],
    ) -> tuple[Any, tuple[Any, ...], tuple[Any, ...]]:
        if annotation in CLASS_LEVEL_QUALIFIERS:
            # Bare `ClassVar` / `Final` with no parameter
            return Any, (annotation,), ()

        origin = get_origin(annotation)
        args = get_args(annotation)

        match origin, args:
            case typing.Annotated, (inner, *metadata):
                tp, inner_qualifiers, inner_metadata = cls._walk_tp(inner, known_qualifiers)
                return tp, inner_qualifiers, (*inner_metadata, *metadata)
            case qualifier, (inner,) if qualifier in known_qualifiers:
                tp, inner_qualifiers, inner_metadata = cls._walk_tp(inner, known_qualifiers)
                return tp, (qualifier, *inner_qualifiers), inner_metadata
            case _:
                return annotation, (), ()

    @property
    def is_class_level(self) -> bool:
        """Whether the annotation declares a class attribute rather than an instance value."""
        return any(it in CLASS_LEVEL_QUALIFIERS for it in self.qualifiers)


def unwrap(tp: Any) -> Any:
    """Unwrap a type annotation, removing qualifiers like Mapped, Required, and Annotated.

    Args:
        tp: The type annotation to unwrap.

    Returns:
        The inner type with all wrappers removed.
    """
    return TypeAnnotation.create(tp).tp


def types_are_identical(target_tp: Any, source_tp: Any) -> bool:
    """Check whether two value types are the same type once wrappers are removed.

    No subtype or conversion leniency is applied: ``int`` and ``bool`` are
    different types, as are ``list[int]`` and ``list[object]``. Equivalent
    spellings of the same type compare equal, e.g. ``Optional[int]`` and
    ``int | None``.
    """
    return unwrap(target_tp) == unwrap(source_tp)


def type_name(tp: Any) -> str:
    """Render a value type for use in descriptions and error messages.

    Example:
        >>> type_name(int)
        'int'
        >>> type_name(list[int])
        'list[int]'
    """
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    if tp is Any:
        return "Any"
    return repr(tp).replace("typing.", "")
