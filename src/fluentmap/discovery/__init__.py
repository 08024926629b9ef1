from fluentmap.discovery.dataclass_types import DataclassValueProvider
from fluentmap.discovery.plain import AnnotatedClassValueProvider
from fluentmap.discovery.protocols import ProtocolValueProvider
from fluentmap.discovery.pydantic_models import PydanticValueProvider
from fluentmap.discovery.registry import ValueProvider, ValueProviderRegistry
from fluentmap.discovery.sa_models import SQLAlchemyValueProvider

default_provider_registry = ValueProviderRegistry(
    PydanticValueProvider(),
    SQLAlchemyValueProvider(),
    DataclassValueProvider(),
    ProtocolValueProvider(),
    AnnotatedClassValueProvider(),
)

__all__ = [
    "AnnotatedClassValueProvider",
    "DataclassValueProvider",
    "ProtocolValueProvider",
    "PydanticValueProvider",
    "SQLAlchemyValueProvider",
    "ValueProvider",
    "ValueProviderRegistry",
    "default_provider_registry",
]
