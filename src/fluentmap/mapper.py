"""Compiled mappers.

A mapper holds exactly two callables: the factory for fresh targets and the
composed transformation. It keeps no reference to the specification it was
compiled from and has no mutable state, so one mapper can be shared and
called concurrently.
"""

from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from fluentmap.composition import ContextualStage
from fluentmap.values import Stage

_T = TypeVar("_T")
_S = TypeVar("_S")
_C = TypeVar("_C")
_S_contra = TypeVar("_S_contra", contravariant=True)


class Mapper(Protocol[_T, _S_contra]):
    def map(self, source: _S_contra) -> _T:
        """Create a new target and populate it from ``source``."""
        ...

    def map_into(self, target: _T, source: _S_contra) -> _T:
        """Populate an existing target from ``source``; return the populated target."""
        ...


class SimpleMapper(Generic[_T, _S]):
    """Mapper compiled from a ``TypeMappingSpec``.

    Attributes:
        _constructor: Creates a fresh target instance.
        _transform: Populates a target from a source; returns the populated target.
    """

    __slots__ = ("_constructor", "_transform")

    def __init__(self, constructor: Callable[[], _T], transform: Stage[_T, _S]) -> None:
        self._constructor = constructor
        self._transform = transform

    def map(self, source: _S) -> _T:
        """Create a new target with the factory and populate it from ``source``.

        Exceptions raised by the factory, by property accessors, or by custom
        mappings propagate unchanged.
        """
        return self._transform(self._constructor(), source)

    def map_into(self, target: _T, source: _S) -> _T:
        """Populate an existing target from ``source``.

        Returns:
            The populated target. For mutable targets this is ``target`` itself;
            for immutable targets it is a new instance.
        """
        return self._transform(target, source)


class ContextualMapper(Generic[_T, _S, _C]):
    """Mapper compiled from a ``ContextualTypeMappingSpec``.

    Like ``SimpleMapper``, but every call takes a context value which is
    passed to the specification's custom mappings.
    """

    __slots__ = ("_constructor", "_transform")

    def __init__(
        self, constructor: Callable[[], _T], transform: ContextualStage[_T, _S, _C]
    ) -> None:
        self._constructor = constructor
        self._transform = transform

    def map(self, source: _S, context: _C) -> _T:
        """Create a new target and populate it from ``source`` and ``context``."""
        return self._transform(self._constructor(), source, context)

    def map_into(self, target: _T, source: _S, context: _C) -> _T:
        """Populate an existing target from ``source`` and ``context``."""
        return self._transform(target, source, context)
