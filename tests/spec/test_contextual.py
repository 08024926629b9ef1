from dataclasses import dataclass

import pytest

from fluentmap import (
    ContextualMapper,
    IncompatibleTypesError,
    UnknownPropertyError,
    UnmatchedTargetPropertyError,
    mapping,
)


@dataclass
class Price:
    amount: int = 0
    currency: str = ""


@dataclass
class PriceDto:
    amount: int


@dataclass
class Locale:
    currency: str
    multiplier: int = 1


@pytest.fixture
def locale() -> Locale:
    return Locale(currency="EUR", multiplier=2)


def test_that_sets_from_source_and_context(locale) -> None:
    mapper = (
        mapping(Price, PriceDto)
        .using_context(Locale)
        .that_sets("currency")
        .from_(lambda src, ctx: ctx.currency)
        .create()
    )

    assert isinstance(mapper, ContextualMapper)
    assert mapper.map(PriceDto(amount=5), locale) == Price(amount=5, currency="EUR")


def test_contextual_custom_mapping_runs_after_plain_ones(locale) -> None:
    def double(target: Price, source: PriceDto) -> None:
        target.amount *= 2

    def scale(target: Price, source: PriceDto, context: Locale) -> None:
        target.amount *= context.multiplier

    mapper = (
        mapping(Price, PriceDto)
        .ignoring_target_property("currency")
        .with_custom_mapping(double)
        .using_context(Locale)
        .with_custom_mapping(lambda target, source, context: Price(amount=target.amount + 1))
        .with_custom_mapping(scale)
        .create()
    )

    assert mapper.map(PriceDto(amount=5), locale).amount == 22


def test_context_varies_per_call() -> None:
    mapper = (
        mapping(Price, PriceDto)
        .using_context(Locale)
        .that_sets("currency")
        .from_(lambda src, ctx: ctx.currency)
        .create()
    )

    assert mapper.map(PriceDto(amount=1), Locale(currency="EUR")).currency == "EUR"
    assert mapper.map(PriceDto(amount=1), Locale(currency="GBP")).currency == "GBP"


def test_contextual_spec_is_validated() -> None:
    with pytest.raises(UnmatchedTargetPropertyError):
        mapping(Price, PriceDto).using_context(Locale).create()


def test_map_into_existing_target(locale) -> None:
    mapper = (
        mapping(Price, PriceDto)
        .using_context(Locale)
        .ignoring_target_property("currency")
        .with_constructor(lambda: Price(currency="USD"))
        .create()
    )
    target = Price(currency="JPY")

    assert mapper.map_into(target, PriceDto(amount=3), locale) is target
    assert target == Price(amount=3, currency="JPY")
    assert mapper.map(PriceDto(amount=3), locale).currency == "USD"


@pytest.fixture
def contextual_spec(unrefined_spec, greeting):
    return (
        unrefined_spec.ignoring_source_property("first")
        .ignoring_source_property("row_id")
        .using_context(type(greeting))
    )


def test_that_sets_from_source(contextual_spec, record, greeting) -> None:
    mapper = contextual_spec.that_sets("full_name").from_source("last").create()

    assert mapper.map(record, greeting) == contextual_spec.spec.target_type(
        name="ann", age=30, full_name="Lee"
    )


def test_that_sets_from_source_runs_in_call_order(contextual_spec, record, greeting) -> None:
    def prefix(target, source, context) -> None:
        target.full_name = f"{context.salutation} {target.full_name}"

    mapper = (
        contextual_spec.that_sets("full_name")
        .from_source("last")
        .with_custom_mapping(prefix)
        .create()
    )

    assert mapper.map(record, greeting).full_name == "Dr. Lee"


def test_that_sets_from_source_checks_types(contextual_spec) -> None:
    with pytest.raises(IncompatibleTypesError) as exc_info:
        contextual_spec.ignoring_source_property("last").that_sets("full_name").from_source("age")

    assert "str Person.full_name" in str(exc_info.value)


def test_that_sets_from_unknown_source_fails(contextual_spec) -> None:
    with pytest.raises(UnknownPropertyError):
        contextual_spec.that_sets("full_name").from_source("row_id")
