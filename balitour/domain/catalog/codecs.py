# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Conversion between catalog records and plain JSON-compatible mappings.

The same field table is used for persisted documents and for partial
updates coming from the HTTP layer, so unknown keys are dropped in both
places.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, is_dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, Generic
from uuid import uuid4

from .entities import (
    Availability,
    ContentStatus,
    ItineraryDay,
    Meals,
    MediaItem,
    MediaType,
    Package,
    Testimonial,
    TourType,
)
from .repositories import RecordT

FieldDecoder = Callable[[Any], Any]

META_FIELDS = ("id", "created_at", "updated_at")


def _optional(decoder: FieldDecoder) -> FieldDecoder:
    def decode(value: Any) -> Any:
        if value is None or value == "":
            return None
        return decoder(value)

    return decode


def _datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _tuple_of(decoder: FieldDecoder) -> FieldDecoder:
    def decode(value: Any) -> tuple[Any, ...]:
        return tuple(decoder(item) for item in (value or ()))

    return decode


def _media_item(value: Any) -> MediaItem:
    if isinstance(value, MediaItem):
        return value
    return MediaItem(
        id=str(value.get("id") or uuid4()),
        type=MediaType(value.get("type") or MediaType.IMAGE),
        url=str(value["url"]),
        title=value.get("title"),
        description=value.get("description"),
        thumbnail=value.get("thumbnail"),
    )


def _meals(value: Any) -> Meals:
    if isinstance(value, Meals):
        return value
    value = value or {}
    return Meals(
        breakfast=value.get("breakfast"),
        lunch=value.get("lunch"),
        dinner=value.get("dinner"),
    )


def _itinerary_day(value: Any) -> ItineraryDay:
    if isinstance(value, ItineraryDay):
        return value
    return ItineraryDay(
        id=str(value.get("id") or uuid4()),
        day=int(value["day"]),
        title=str(value["title"]),
        description=str(value.get("description") or ""),
        activities=_tuple_of(str)(value.get("activities")),
        meals=_meals(value.get("meals")),
        accommodation=value.get("accommodation"),
    )


_META_DECODERS: dict[str, FieldDecoder] = {
    "id": str,
    "created_at": _optional(_datetime),
    "updated_at": _optional(_datetime),
}

_PUBLISHING_DECODERS: dict[str, FieldDecoder] = {
    "status": ContentStatus,
    "published": bool,
    "published_at": _optional(_datetime),
    "scheduled_at": _optional(_datetime),
    "featured": bool,
    "language": _optional(str),
}

PACKAGE_FIELDS: dict[str, FieldDecoder] = {
    "name": str,
    "description": str,
    "short_description": _optional(str),
    "price": float,
    "duration": int,
    "location": str,
    "category": str,
    "tour_type": TourType,
    "availability": _optional(Availability),
    "start_date": _optional(_date),
    "end_date": _optional(_date),
    "min_participants": _optional(int),
    "max_participants": _optional(int),
    "image": _optional(str),
    "media_gallery": _tuple_of(_media_item),
    "highlights": _tuple_of(str),
    "included": _tuple_of(str),
    "not_included": _tuple_of(str),
    "itinerary": _tuple_of(_itinerary_day),
    "trending": bool,
    "best_seller": bool,
    "slug": _optional(str),
    **_PUBLISHING_DECODERS,
}

TESTIMONIAL_FIELDS: dict[str, FieldDecoder] = {
    "name": str,
    "role": str,
    "location": str,
    "content": str,
    "rating": int,
    "image": _optional(str),
    **_PUBLISHING_DECODERS,
}


def encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: encode_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (tuple, list)):
        return [encode_value(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class RecordCodec(Generic[RecordT]):
    kind: str
    record_type: type[RecordT]
    field_decoders: Mapping[str, FieldDecoder]

    def decode_changes(
        self, data: Mapping[str, Any], *, include_meta: bool = False
    ) -> dict[str, Any]:
        decoders = dict(self.field_decoders)
        if include_meta:
            decoders.update(_META_DECODERS)
        return {
            name: decoder(data[name])
            for name, decoder in decoders.items()
            if name in data
        }

    def decode(self, data: Mapping[str, Any]) -> RecordT:
        return self.record_type(**self.decode_changes(data, include_meta=True))

    def encode(self, record: RecordT) -> dict[str, Any]:
        return encode_value(record)


PACKAGE_CODEC: RecordCodec[Package] = RecordCodec("package", Package, PACKAGE_FIELDS)
TESTIMONIAL_CODEC: RecordCodec[Testimonial] = RecordCodec(
    "testimonial", Testimonial, TESTIMONIAL_FIELDS
)

__all__ = [
    "META_FIELDS",
    "PACKAGE_CODEC",
    "TESTIMONIAL_CODEC",
    "RecordCodec",
    "encode_value",
]
