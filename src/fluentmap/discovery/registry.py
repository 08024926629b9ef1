"""Default value discovery registry and protocols.

When a mapping specification isn't given explicit descriptor lists, the
readable properties of the source type and the writable properties of the
target type are discovered by a ``ValueProvider``. Different kinds of class
(dataclasses, pydantic models, SQLAlchemy models, protocols, plain annotated
classes) expose their properties differently, so each kind gets its own
provider.

Key concepts:
    - ValueProvider: Enumerates the source and target values of one kind of type
    - ValueProviderRegistry: Resolves the appropriate provider for a type

The registry is queried in order, returning the first matching provider.
"""

from logging import getLogger
from typing import Any, Iterator, Protocol, runtime_checkable

from fluentmap._types.annotations import type_name
from fluentmap.values import SourceValue, TargetValue

logger = getLogger(__name__)


@runtime_checkable
class ValueProvider(Protocol):
    def matches(self, tp: Any) -> bool:
        """Check if this provider can enumerate the properties of the given type.

        Args:
            tp: The source or target type.

        Returns:
            True if this provider understands tp.
        """
        ...

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        """Enumerate the readable properties of a type.

        Args:
            tp: The source type.

        Returns:
            One SourceValue per readable property.
        """
        ...

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        """Enumerate the publicly writable properties of a type.

        Args:
            tp: The target type.

        Returns:
            One TargetValue per writable property.
        """
        ...


class ValueProviderRegistry:
    """Registry that resolves value providers for types.

    The registry holds a sequence of providers. When resolving a type, it
    queries each entry in order and returns the first one that matches, so
    more specific providers must be registered before general ones.

    Attributes:
        _providers: Ordered sequence of providers to query.
    """

    def __init__(self, *providers: ValueProvider) -> None:
        self._providers = providers

    def resolve(self, tp: Any) -> ValueProvider | None:
        """Find a provider for the given type.

        Args:
            tp: The type to enumerate properties of.

        Returns:
            The first matching ValueProvider, or None if no provider matches.
        """
        return next((it for it in self._providers if it.matches(tp)), None)

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        """Discover the readable properties of ``tp``.

        Returns an empty list (rather than raising) when no provider matches;
        the mismatch surfaces as an unmatched-property error when the
        specification is validated.
        """
        provider = self.resolve(tp)
        if provider is None:
            logger.debug("No value provider matches source type %s", type_name(tp))
            return []
        values = provider.source_values(tp)
        logger.debug(
            "Discovered %d source values on %s using %s",
            len(values),
            type_name(tp),
            type(provider).__name__,
        )
        return values

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        """Discover the publicly writable properties of ``tp``.

        Returns an empty list when no provider matches; see ``source_values``.
        """
        provider = self.resolve(tp)
        if provider is None:
            logger.debug("No value provider matches target type %s", type_name(tp))
            return []
        values = provider.target_values(tp)
        logger.debug(
            "Discovered %d target values on %s using %s",
            len(values),
            type_name(tp),
            type(provider).__name__,
        )
        return values

    def __iter__(self) -> Iterator[ValueProvider]:
        return iter(self._providers)
