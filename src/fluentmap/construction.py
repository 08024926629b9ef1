"""Resolving the factory used to create fresh target instances."""

import inspect
from collections.abc import Callable
from logging import getLogger
from typing import Any, TypeVar

from typing_extensions import is_protocol

from fluentmap._types.annotations import type_name
from fluentmap.exceptions import NoParameterlessConstructorError

logger = getLogger(__name__)

_T = TypeVar("_T")

_OPTIONAL_PARAMETER_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def resolve_constructor(
    target_type: type[_T],
    constructor: Callable[[], _T] | None = None,
) -> Callable[[], _T]:
    """Get a zero-argument factory for ``target_type``.

    An explicit constructor is returned unmodified. Otherwise the type itself
    is used as the factory, provided it can be called without arguments.

    Args:
        target_type: The type to construct.
        constructor: An explicit factory, if the caller supplied one.

    Returns:
        A callable returning a new target instance on every call.

    Raises:
        NoParameterlessConstructorError: If no constructor was supplied and
            target_type can't be instantiated without arguments.
    """
    if constructor is not None:
        return constructor

    reason = _why_not_constructible(target_type)
    if reason is not None:
        raise NoParameterlessConstructorError(target_type, reason)

    logger.debug("Using %s() as the default target factory", type_name(target_type))
    return target_type


def _why_not_constructible(target_type: Any) -> str | None:
    if not isinstance(target_type, type):
        return "it is not a class"
    if is_protocol(target_type):
        return "it is a Protocol"
    if inspect.isabstract(target_type):
        return "it is abstract"

    try:
        signature = inspect.signature(target_type)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins and extension types)
        return None

    required = [
        name
        for name, param in signature.parameters.items()
        if param.default is inspect.Parameter.empty and param.kind not in _OPTIONAL_PARAMETER_KINDS
    ]
    if required:
        return f"its constructor requires {', '.join(repr(it) for it in required)}"
    return None
