"""Pydantic models describing the Bpost track-and-trace payloads.

The carrier response is semi-structured, so decoding is lenient at two levels:

- structural: ``items`` / ``events`` that are absent or not lists decode to ``[]``,
  and anything that should be an object but is not decodes to an empty object
- field: absent, ``null`` or non-scalar text fields decode to ``""``; numbers and
  booleans are rendered as text; flags default to ``False``
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _as_text(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return ""


def _as_flag(value: object) -> object:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    if isinstance(value, int | float):
        return value != 0
    return False


def _as_mapping(value: object) -> object:
    if isinstance(value, Mapping):
        return cast(Mapping[str, object], value)
    return {}


def _as_list(value: object) -> object:
    if isinstance(value, list):
        return cast(list[object], value)
    return []


class BpostBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _objects_only(cls, value: object) -> object:
        return _as_mapping(value)


class PartyPayload(BpostBaseModel):
    name: str = ""
    street: str = ""
    municipality: str = ""
    postcode: str = ""
    country_code: str = Field(default="", alias="countryCode")

    _text = field_validator(
        "name", "street", "municipality", "postcode", "country_code", mode="before"
    )(_as_text)


class LocationPayload(BpostBaseModel):
    location_name: str = Field(default="", alias="locationName")

    _text = field_validator("location_name", mode="before")(_as_text)


class LocalizedTextPayload(BpostBaseModel):
    description: str = ""

    _text = field_validator("description", mode="before")(_as_text)


class EventKeyPayload(BpostBaseModel):
    en: LocalizedTextPayload = Field(default_factory=LocalizedTextPayload, alias="EN")


class EventPayload(BpostBaseModel):
    date: str = ""
    time: str = ""
    location: LocationPayload = Field(default_factory=LocationPayload)
    key: EventKeyPayload = Field(default_factory=EventKeyPayload)
    irregularity: bool = False

    _text = field_validator("date", "time", mode="before")(_as_text)
    _flag = field_validator("irregularity", mode="before")(_as_flag)

    @property
    def description(self) -> str:
        return self.key.en.description


class ItemPayload(BpostBaseModel):
    item_code: str = Field(default="", alias="itemCode")
    receiver: PartyPayload = Field(default_factory=PartyPayload)
    sender: PartyPayload = Field(default_factory=PartyPayload)
    events: list[EventPayload] = Field(default_factory=list["EventPayload"])

    _text = field_validator("item_code", mode="before")(_as_text)
    _events = field_validator("events", mode="before")(_as_list)


class TrackItemsResponse(BpostBaseModel):
    items: list[ItemPayload] = Field(default_factory=list["ItemPayload"])

    _items = field_validator("items", mode="before")(_as_list)
