"""Value discovery for ordinary annotated classes.

This is the fallback provider: any class matches. Properties are found in
two places:

- Public instance annotations anywhere in the MRO (``name: str``)
- Public ``property`` objects (readable always, writable with a setter)

Constructor parameters are not discovered; an attribute assigned in
``__init__`` must also be annotated at class level to be mapped.

``ClassVar`` and ``Final`` annotations, and names starting with an
underscore, are never mapped.
"""

from typing import Any

from fluentmap._types.annotations import TypeAnnotation
from fluentmap._types.forward_refs import class_annotations, return_annotation
from fluentmap.values import AttributeTargetValue, SourceValue, TargetValue


def is_public(name: str) -> bool:
    return not name.startswith("_")


def instance_annotations(tp: type) -> dict[str, Any]:
    """Public, per-instance annotations of ``tp`` and its bases."""
    return {
        name: annotation
        for name, annotation in class_annotations(tp).items()
        if is_public(name) and not TypeAnnotation.create(annotation).is_class_level
    }


def public_properties(tp: type) -> dict[str, property]:
    """Public properties of ``tp``, with subclasses overriding their bases."""
    result: dict[str, property] = {}
    for base in reversed(tp.__mro__):
        for name, attr in vars(base).items():
            if isinstance(attr, property) and is_public(name):
                result[name] = attr
    return result


class AnnotatedClassValueProvider:
    """Provider for plain classes, matching any class.

    Register this last: it accepts every class, so anything after it in a
    registry is never consulted for classes.
    """

    def matches(self, tp: Any) -> bool:
        return isinstance(tp, type)

    def source_values(self, tp: Any) -> list[SourceValue[Any]]:
        types = {
            **instance_annotations(tp),
            **{name: return_annotation(prop.fget) for name, prop in self._readable(tp).items()},
        }
        return [SourceValue.attribute(tp, name, value_type) for name, value_type in types.items()]

    def target_values(self, tp: Any) -> list[TargetValue[Any]]:
        properties = public_properties(tp)
        # A read-only property shadows any annotation of the same name
        types = {
            name: it for name, it in instance_annotations(tp).items() if name not in properties
        }
        types.update(
            {
                name: return_annotation(prop.fget)
                for name, prop in properties.items()
                if prop.fset is not None and prop.fget is not None
            }
        )
        return [AttributeTargetValue(tp, name, value_type) for name, value_type in types.items()]

    @staticmethod
    def _readable(tp: type) -> dict[str, property]:
        return {name: prop for name, prop in public_properties(tp).items() if prop.fget is not None}
