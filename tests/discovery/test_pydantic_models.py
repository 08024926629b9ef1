from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field

from fluentmap.discovery.pydantic_models import PydanticValueProvider
from fluentmap.values import AttributeTargetValue, ReplaceTargetValue


class Album(BaseModel):
    title: str = ""
    year: Annotated[int, Field(ge=1900)] = 2000
    catalogue_number: str = Field(default="", frozen=True)

    @computed_field
    @property
    def label(self) -> str:
        return f"{self.title} ({self.year})"


class FrozenAlbum(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    year: int = 2000


def test_matches_models_only() -> None:
    provider = PydanticValueProvider()

    assert provider.matches(Album)
    assert not provider.matches(Album())
    assert not provider.matches(dict)


def test_source_values_include_computed_fields() -> None:
    values = PydanticValueProvider().source_values(Album)

    assert {it.name: it.value_type for it in values} == {
        "title": str,
        "year": int,
        "catalogue_number": str,
        "label": str,
    }


def test_target_values_exclude_computed_fields() -> None:
    values = {it.name: it for it in PydanticValueProvider().target_values(Album)}

    assert set(values) == {"title", "year", "catalogue_number"}
    assert isinstance(values["title"], AttributeTargetValue)
    assert isinstance(values["catalogue_number"], ReplaceTargetValue)


def test_frozen_model_targets_copy_the_model() -> None:
    values = {it.name: it for it in PydanticValueProvider().target_values(FrozenAlbum)}
    original = FrozenAlbum()

    result = values["title"].create_setter(lambda src: src)(original, "Blue")

    assert isinstance(values["year"], ReplaceTargetValue)
    assert result == FrozenAlbum(title="Blue")
    assert original.title == ""
