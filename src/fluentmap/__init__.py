from fluentmap._version import __version__
from fluentmap.discovery import ValueProvider, ValueProviderRegistry, default_provider_registry
from fluentmap.exceptions import (
    DuplicatePropertyError,
    IncompatibleTypesError,
    MappingError,
    NoParameterlessConstructorError,
    UnknownPropertyError,
    UnmatchedSourcePropertyError,
    UnmatchedTargetPropertyError,
)
from fluentmap.mapper import ContextualMapper, Mapper, SimpleMapper
from fluentmap.spec import (
    ContextualSetterSpec,
    ContextualTypeMappingSpec,
    SetterSpec,
    TypeMappingSpec,
    mapping,
)
from fluentmap.values import (
    AttributeTargetValue,
    ReplaceTargetValue,
    SourceValue,
    TargetValue,
)

__all__ = [
    "TypeMappingSpec",
    "ContextualTypeMappingSpec",
    "SetterSpec",
    "ContextualSetterSpec",
    "mapping",
    "Mapper",
    "SimpleMapper",
    "ContextualMapper",
    "SourceValue",
    "TargetValue",
    "AttributeTargetValue",
    "ReplaceTargetValue",
    "ValueProvider",
    "ValueProviderRegistry",
    "default_provider_registry",
    "MappingError",
    "UnmatchedTargetPropertyError",
    "UnmatchedSourcePropertyError",
    "IncompatibleTypesError",
    "NoParameterlessConstructorError",
    "DuplicatePropertyError",
    "UnknownPropertyError",
    "__version__",
]
