# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from balitour.domain.exceptions import InvariantViolation


class TourType(str, Enum):
    FIT = "FIT"
    GIT = "GIT"


class ContentStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Availability(str, Enum):
    AVAILABLE = "available"
    ALMOST_FULL = "almost_full"
    FULL = "full"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


def _require_text(value: str, field_name: str) -> None:
    if not value or not value.strip():
        raise InvariantViolation("must not be empty", field=field_name)


@dataclass(slots=True, frozen=True, kw_only=True)
class MediaItem:
    id: str
    type: MediaType
    url: str
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None

    def __post_init__(self) -> None:
        _require_text(self.url, "media_gallery.url")


@dataclass(slots=True, frozen=True, kw_only=True)
class Meals:
    breakfast: str | None = None
    lunch: str | None = None
    dinner: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ItineraryDay:
    id: str
    day: int
    title: str
    description: str = ""
    activities: tuple[str, ...] = ()
    meals: Meals = field(default_factory=Meals)
    accommodation: str | None = None

    def __post_init__(self) -> None:
        if self.day < 1:
            raise InvariantViolation("day numbers start at 1", field="itinerary.day")
        _require_text(self.title, "itinerary.title")


@dataclass(slots=True, frozen=True, kw_only=True)
class Package:
    """A bookable tour package.

    ``status`` is the publishing lifecycle, ``availability`` the seat
    situation shown to visitors. ``id`` and the timestamps are assigned by
    the catalog store.
    """

    name: str
    description: str
    price: float
    duration: int
    location: str
    category: str
    tour_type: TourType = TourType.FIT
    short_description: str | None = None
    status: ContentStatus = ContentStatus.DRAFT
    availability: Availability | None = None
    published: bool = False
    published_at: datetime | None = None
    scheduled_at: datetime | None = None
    start_date: date | None = None
    end_date: date | None = None
    min_participants: int | None = None
    max_participants: int | None = None
    image: str | None = None
    media_gallery: tuple[MediaItem, ...] = ()
    highlights: tuple[str, ...] = ()
    included: tuple[str, ...] = ()
    not_included: tuple[str, ...] = ()
    itinerary: tuple[ItineraryDay, ...] = ()
    featured: bool = False
    trending: bool = False
    best_seller: bool = False
    language: str | None = None
    slug: str | None = None
    id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        _require_text(self.name, "name")
        if self.price < 0:
            raise InvariantViolation("must not be negative", field="price")
        if self.duration < 1:
            raise InvariantViolation("must be at least one day", field="duration")
        for name in ("min_participants", "max_participants"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise InvariantViolation("must be at least 1", field=name)
        if (
            self.min_participants is not None
            and self.max_participants is not None
            and self.min_participants > self.max_participants
        ):
            raise InvariantViolation(
                "must not exceed max_participants", field="min_participants"
            )
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise InvariantViolation("must not be after end_date", field="start_date")


@dataclass(slots=True, frozen=True, kw_only=True)
class Testimonial:
    name: str
    content: str
    rating: int
    role: str = ""
    location: str = ""
    image: str | None = None
    status: ContentStatus = ContentStatus.DRAFT
    published: bool = False
    published_at: datetime | None = None
    scheduled_at: datetime | None = None
    featured: bool = False
    language: str | None = None
    id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        _require_text(self.name, "name")
        _require_text(self.content, "content")
        if not 1 <= self.rating <= 5:
            raise InvariantViolation("must be between 1 and 5", field="rating")


CatalogRecord = Package | Testimonial
