"""Value discovery for SQLAlchemy mapped classes.

Only column attributes are mapped; relationships hold nested objects or
collections, which mappings don't traverse. A column's value type is read
from the class annotation (with the ``Mapped[]`` wrapper removed) and falls
back to the column type's ``python_type`` for imperatively mapped or
unannotated columns.
"""

from logging import getLogger
from typing import Any, cast

from sqlalchemy import inspect
from sqlalchemy.orm import ColumnProperty, Mapper

from fluentmap._types.forward_refs import class_annotations
from fluentmap.values import AttributeTargetValue, SourceValue, TargetValue

logger = getLogger(__name__)


def _mapper(tp: Any) -> Mapper[Any] | None:
    if not isinstance(tp, type):
        return None
    result = inspect(tp, raiseerr=False)
    return result if isinstance(result, Mapper) else None


def _column_type(tp: type, annotations: dict[str, Any], prop: ColumnProperty[Any]) -> Any:
    if (annotation := annotations.get(prop.key)) is not None:
        return annotation
    try:
        return prop.columns[0].type.python_type
    except NotImplementedError:
        logger.warning(
            "Column %s.%s has no python_type and no annotation; its value type will be treated as Any",
            tp.__name__,
            prop.key,
        )
        return Any


class SQLAlchemyValueProvider:
    """Provider for classes mapped by the SQLAlchemy ORM."""

    def matches(self, tp: Any) -> bool:
        return _mapper(tp) is not None

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        return [
            SourceValue.attribute(tp, name, value_type)
            for name, value_type in self._column_types(tp).items()
        ]

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        return [
            AttributeTargetValue(tp, name, value_type)
            for name, value_type in self._column_types(tp).items()
        ]

    @staticmethod
    def _column_types(tp: type) -> dict[str, Any]:
        mapper = cast(Mapper[Any], _mapper(tp))
        annotations = class_annotations(tp)
        return {
            prop.key: _column_type(tp, annotations, prop)
            for prop in mapper.column_attrs
            if not prop.key.startswith("_")
        }
