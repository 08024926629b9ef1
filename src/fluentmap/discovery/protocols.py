"""Value discovery for ``typing.Protocol`` classes.

Protocols play the part of interfaces: a source may be declared as a
protocol and mapped from any object satisfying it. A protocol's members
include those of every protocol it extends, so each protocol base is walked
explicitly (most derived first) and its own annotations and properties are
collected. Where two protocols declare the same name, the most derived
declaration wins.
"""

from typing import Any, Generic, Protocol

from typing_extensions import is_protocol

from fluentmap._types.annotations import TypeAnnotation
from fluentmap._types.forward_refs import own_annotations, return_annotation
from fluentmap.discovery.plain import is_public
from fluentmap.values import AttributeTargetValue, SourceValue, TargetValue

_IGNORED_BASES = (Protocol, Generic, object)


def protocol_bases(tp: type) -> list[type]:
    """``tp`` followed by every protocol it extends, in MRO order."""
    return [
        base
        for base in tp.__mro__
        if base not in _IGNORED_BASES and is_protocol(base)
    ]


class ProtocolValueProvider:
    """Provider for ``typing.Protocol`` classes and their protocol bases."""

    def matches(self, tp: Any) -> bool:
        return isinstance(tp, type) and is_protocol(tp)

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        types: dict[str, Any] = {}
        for base in protocol_bases(tp):
            for name, value_type in self._members(base, writable_only=False).items():
                types.setdefault(name, value_type)
        return [SourceValue.attribute(tp, name, value_type) for name, value_type in types.items()]

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        types: dict[str, Any] = {}
        for base in protocol_bases(tp):
            for name, value_type in self._members(base, writable_only=True).items():
                types.setdefault(name, value_type)
        return [AttributeTargetValue(tp, name, value_type) for name, value_type in types.items()]

    @staticmethod
    def _members(base: type, *, writable_only: bool) -> dict[str, Any]:
        members = {
            name: annotation
            for name, annotation in own_annotations(base).items()
            if is_public(name) and not TypeAnnotation.create(annotation).is_class_level
        }
        for name, attr in vars(base).items():
            if not isinstance(attr, property) or not is_public(name) or attr.fget is None:
                continue
            if writable_only and attr.fset is None:
                members.pop(name, None)
                continue
            members[name] = return_annotation(attr.fget)
        return members
