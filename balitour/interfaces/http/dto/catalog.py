# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request and response bodies for the catalog endpoints.

Update bodies are partial: only keys present in the request reach the
store. Fields annotated without ``None`` reject an explicit ``null``.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from balitour.domain.catalog.entities import (
    Availability,
    ContentStatus,
    MediaType,
    TourType,
)
from balitour.domain.catalog.queries import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        extra="ignore",
    )


class MediaItemDTO(CamelModel):
    id: str | None = None
    type: MediaType = MediaType.IMAGE
    url: str = Field(min_length=1)
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None


class MealsDTO(CamelModel):
    breakfast: str | None = None
    lunch: str | None = None
    dinner: str | None = None


class ItineraryDayDTO(CamelModel):
    id: str | None = None
    day: int = Field(ge=1)
    title: str = Field(min_length=1)
    description: str = ""
    activities: list[str] = Field(default_factory=list)
    meals: MealsDTO = Field(default_factory=MealsDTO)
    accommodation: str | None = None


class PackageUpdateDTO(CamelModel):
    name: str = Field(None, min_length=1, max_length=200)
    description: str = None
    short_description: str | None = None
    price: float = Field(None, ge=0)
    duration: int = Field(None, ge=1)
    location: str = None
    category: str = None
    tour_type: TourType = None
    status: ContentStatus = None
    availability: Availability | None = None
    scheduled_at: datetime | None = None
    start_date: date | None = None
    end_date: date | None = None
    min_participants: int | None = Field(None, ge=1)
    max_participants: int | None = Field(None, ge=1)
    image: str | None = None
    media_gallery: list[MediaItemDTO] = None
    highlights: list[str] = None
    included: list[str] = None
    not_included: list[str] = None
    itinerary: list[ItineraryDayDTO] = None
    featured: bool = None
    trending: bool = None
    best_seller: bool = None
    language: str | None = None
    slug: str | None = None


class PackageCreateDTO(PackageUpdateDTO):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    price: float = Field(ge=0)
    duration: int = Field(ge=1)
    location: str = ""
    category: str = ""
    tour_type: TourType = TourType.FIT
    status: ContentStatus = ContentStatus.DRAFT
    media_gallery: list[MediaItemDTO] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    included: list[str] = Field(default_factory=list)
    not_included: list[str] = Field(default_factory=list)
    itinerary: list[ItineraryDayDTO] = Field(default_factory=list)
    featured: bool = False
    trending: bool = False
    best_seller: bool = False


class PackageDTO(PackageCreateDTO):
    id: str
    published: bool
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TestimonialUpdateDTO(CamelModel):
    name: str = Field(None, min_length=1, max_length=200)
    role: str = None
    location: str = None
    content: str = Field(None, min_length=1)
    rating: int = Field(None, ge=1, le=5)
    image: str | None = None
    status: ContentStatus = None
    scheduled_at: datetime | None = None
    featured: bool = None
    language: str | None = None


class TestimonialCreateDTO(TestimonialUpdateDTO):
    name: str = Field(min_length=1, max_length=200)
    role: str = ""
    location: str = ""
    content: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    status: ContentStatus = ContentStatus.DRAFT
    featured: bool = False


class TestimonialDTO(TestimonialCreateDTO):
    id: str
    published: bool
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ScheduleRequestDTO(CamelModel):
    scheduled_at: datetime


class StatusRequestDTO(CamelModel):
    status: ContentStatus


class CatalogQueryDTO(CamelModel):
    """Query string of a catalog listing; blank parameters count as absent."""

    status: ContentStatus | None = None
    search: str | None = Field(None, max_length=200)
    language: str | None = None
    featured: bool | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _upper_status(cls, value):
        return value.upper() if isinstance(value, str) else value


class TestimonialQueryDTO(CatalogQueryDTO):
    pass


class PackageQueryDTO(CatalogQueryDTO):
    category: str | None = None
    tour_type: TourType | None = None
    trending: bool | None = None
    best_seller: bool | None = None
    location: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    min_duration: int | None = Field(None, ge=1)
    max_duration: int | None = Field(None, ge=1)

    @field_validator("tour_type", mode="before")
    @classmethod
    def _upper_tour_type(cls, value):
        return value.upper() if isinstance(value, str) else value
