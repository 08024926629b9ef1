"""Folding per-property setters and custom mappings into one transformation.

Every stage has the shape ``(target, source) -> target``. Stages are applied
in order, each receiving the target returned by the previous one, so a later
stage sees (and may overwrite) the values written by earlier ones:

    compose([a, b, c])(target, source) == c(b(a(target, source), source), source)

Matched property setters come first in ascending property name order, then
custom mappings in the order they were supplied.
"""

from collections.abc import Callable, Iterable, Sequence
from functools import reduce, wraps
from typing import Any, TypeVar

from fluentmap.matching import ValuePair
from fluentmap.values import Stage

_T = TypeVar("_T")
_S = TypeVar("_S")
_C = TypeVar("_C")

#: A stage which also receives the mapping context
ContextualStage = Callable[[_T, _S, _C], _T]


def create_setters(pairs: Iterable[ValuePair[_T, _S]]) -> list[Stage[_T, _S]]:
    """Create one setter stage per matched pair, in name order."""
    return [
        pair.target.create_setter(pair.source.create_getter())
        for pair in sorted(pairs, key=lambda it: it.target.name)
    ]


def ensure_returns_target(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a stage so it always yields a target.

    A custom mapping written for its side effect returns None, or whatever
    its last call happened to return (``target.tags.append(...)``,
    ``target.extras.setdefault(...)``). Only a result that is an instance of
    the target's type replaces the target; any other result is discarded
    and the stage yields the target it was given.

    Args:
        fn: A stage taking the target as its first positional argument.

    Returns:
        A stage with the same arguments that always returns a target.
    """

    @wraps(fn)
    def returning_target(target: Any, *args: Any) -> Any:
        result = fn(target, *args)
        return result if isinstance(result, type(target)) else target

    return returning_target


def _identity(target: _T, *_: Any) -> _T:
    return target


def compose(stages: Sequence[Stage[_T, _S]]) -> Stage[_T, _S]:
    """Fold stages into a single ``(target, source) -> target`` transformation.

    Args:
        stages: The stages to apply, in order.

    Returns:
        The composed transformation; the identity when there are no stages.
    """
    if not stages:
        return _identity

    normalized = tuple(ensure_returns_target(it) for it in stages)

    def transform(target: _T, source: _S) -> _T:
        return reduce(lambda acc, stage: stage(acc, source), normalized, target)

    return transform


def compose_contextual(
    setters: Sequence[Stage[_T, _S]],
    custom_mappings: Sequence[ContextualStage[_T, _S, _C]],
) -> ContextualStage[_T, _S, _C]:
    """Fold setters and context-aware custom mappings into one transformation.

    Property setters don't use the context; custom mappings receive it as
    their third argument.

    Returns:
        A ``(target, source, context) -> target`` transformation.
    """
    apply_setters = compose(setters)
    normalized = tuple(ensure_returns_target(it) for it in custom_mappings)

    def transform(target: _T, source: _S, context: _C) -> _T:
        return reduce(
            lambda acc, stage: stage(acc, source, context),
            normalized,
            apply_setters(target, source),
        )

    return transform
