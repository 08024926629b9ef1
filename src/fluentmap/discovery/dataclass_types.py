"""Value discovery for dataclasses.

Every public dataclass field is readable. On the target side, fields of a
mutable dataclass are written with ``setattr``; fields of a frozen dataclass
are written with ``dataclasses.replace``, so each write yields a new target.
``replace`` can only set fields accepted by ``__init__``, so ``init=False``
fields of frozen dataclasses are not target values.
"""

import dataclasses
from typing import Any

from fluentmap._types.forward_refs import class_annotations, return_annotation
from fluentmap.discovery.plain import is_public, public_properties
from fluentmap.values import AttributeTargetValue, ReplaceTargetValue, SourceValue, TargetValue


def replace_field(target: Any, name: str, value: Any) -> Any:
    return dataclasses.replace(target, **{name: value})


def _is_frozen(tp: type) -> bool:
    params = getattr(tp, "__dataclass_params__", None)
    return bool(params and params.frozen)


class DataclassValueProvider:
    """Provider for dataclass types (not instances)."""

    def matches(self, tp: Any) -> bool:
        return isinstance(tp, type) and dataclasses.is_dataclass(tp)

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        types = {
            **self._field_types(tp, include_non_init=True),
            **{
                name: return_annotation(prop.fget)
                for name, prop in public_properties(tp).items()
                if prop.fget is not None
            },
        }
        return [SourceValue.attribute(tp, name, value_type) for name, value_type in types.items()]

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        if _is_frozen(tp):
            return [
                ReplaceTargetValue(tp, name, value_type, replace_field)
                for name, value_type in self._field_types(tp, include_non_init=False).items()
            ]

        types = {
            **self._field_types(tp, include_non_init=True),
            **{
                name: return_annotation(prop.fget)
                for name, prop in public_properties(tp).items()
                if prop.fget is not None and prop.fset is not None
            },
        }
        return [AttributeTargetValue(tp, name, value_type) for name, value_type in types.items()]

    @staticmethod
    def _field_types(tp: type, *, include_non_init: bool) -> dict[str, Any]:
        # Field.type is the raw annotation, which is a string under
        # `from __future__ import annotations`; prefer the evaluated one
        annotations = class_annotations(tp)
        return {
            field.name: annotations.get(field.name, field.type)
            for field in dataclasses.fields(tp)
            if is_public(field.name) and (include_non_init or field.init)
        }
