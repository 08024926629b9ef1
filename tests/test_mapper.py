from dataclasses import dataclass

import pytest

from fluentmap.mapper import ContextualMapper, SimpleMapper


@dataclass
class Target:
    value: int = 0


def copy_value(target: Target, source: int) -> Target:
    target.value = source
    return target


def test_map_creates_a_new_target_per_call() -> None:
    mapper = SimpleMapper(Target, copy_value)

    first = mapper.map(1)
    second = mapper.map(2)

    assert first is not second
    assert (first.value, second.value) == (1, 2)


def test_map_into_populates_given_target() -> None:
    mapper = SimpleMapper(Target, copy_value)
    target = Target()

    assert mapper.map_into(target, 5) is target
    assert target.value == 5


def test_mapper_has_no_instance_dict() -> None:
    mapper = SimpleMapper(Target, copy_value)

    with pytest.raises(AttributeError):
        mapper.extra = 1  # type: ignore[attr-defined]


def test_factory_errors_propagate() -> None:
    def failing_factory() -> Target:
        raise RuntimeError("no target for you")

    mapper = SimpleMapper(failing_factory, copy_value)

    with pytest.raises(RuntimeError, match="no target for you"):
        mapper.map(1)


def test_contextual_mapper_passes_context() -> None:
    def transform(target: Target, source: int, context: int) -> Target:
        target.value = source * context
        return target

    mapper = ContextualMapper(Target, transform)

    assert mapper.map(6, 7).value == 42
    assert mapper.map_into(Target(), 2, 3).value == 6
