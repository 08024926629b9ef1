"""Value discovery for pydantic models.

Sources are the model's fields and computed fields. Targets are its fields:
written with ``setattr`` normally, or with ``model_copy(update=...)`` when the
model (or the individual field) is frozen, in which case each write yields a
new model instance.

Note that ``model_copy`` does not re-run validation, matching the behaviour of
``setattr`` on a model without ``validate_assignment``.
"""

from typing import Any

from pydantic import BaseModel

from fluentmap.values import AttributeTargetValue, ReplaceTargetValue, SourceValue, TargetValue


def copy_with_update(target: BaseModel, name: str, value: Any) -> BaseModel:
    return target.model_copy(update={name: value})


class PydanticValueProvider:
    """Provider for pydantic ``BaseModel`` subclasses."""

    def matches(self, tp: Any) -> bool:
        return isinstance(tp, type) and issubclass(tp, BaseModel)

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        fields = {name: info.annotation for name, info in tp.model_fields.items()}
        computed = {name: info.return_type for name, info in tp.model_computed_fields.items()}
        return [
            SourceValue.attribute(tp, name, value_type)
            for name, value_type in {**fields, **computed}.items()
        ]

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        model_frozen = bool(tp.model_config.get("frozen", False))
        return [
            ReplaceTargetValue(tp, name, info.annotation, copy_with_update)
            if model_frozen or info.frozen
            else AttributeTargetValue(tp, name, info.annotation)
            for name, info in tp.model_fields.items()
        ]
