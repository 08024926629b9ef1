"""Utilities for reading evaluated annotations off classes and callables."""

from __future__ import annotations

from logging import getLogger
from typing import Any, Callable, get_type_hints

from typing_extensions import Format, get_annotations


logger = getLogger(__name__)


def class_annotations(tp: type) -> dict[str, Any]:
    """Collect evaluated annotations from a class and all of its bases.

    Bases are walked from the least to the most derived, so an annotation
    redeclared on a subclass replaces the inherited one while keeping the
    position at which the name was first declared.

    Args:
        tp: The class to read annotations from.

    Returns:
        A dict of attribute name to evaluated annotation.
    """
    result: dict[str, Any] = {}
    for base in reversed(tp.__mro__):
        if base is object:
            continue
        try:
            result.update(own_annotations(base))
        except (NameError, TypeError) as e:
            # Typically a library base annotated with names imported under TYPE_CHECKING
            logger.debug("Using unevaluated annotations of %s: %s", base.__qualname__, e)
            result.update(get_annotations(base, format=Format.VALUE))
    return result


def own_annotations(tp: type) -> dict[str, Any]:
    """Evaluated annotations declared directly on ``tp`` (not inherited)."""
    return dict(get_annotations(tp, eval_str=True, format=Format.VALUE))


def return_annotation(fn: Callable[..., Any]) -> Any:
    """Get the evaluated return annotation of a callable, or Any if it has none.

    Args:
        fn: A function, typically a property getter.

    Returns:
        The return type, or Any when the callable is unannotated.
    """
    try:
        hints = get_type_hints(fn)
    except (NameError, TypeError):
        # Unresolvable forward reference; keep the raw annotation
        hints = dict(getattr(fn, "__annotations__", {}))
    if "return" not in hints:
        logger.warning(
            "%s has no return annotation; its value type will be treated as Any",
            getattr(fn, "__qualname__", fn),
        )
        return Any
    return hints["return"]
