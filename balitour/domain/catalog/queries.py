# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic

from balitour.domain.exceptions import InvariantViolation

from .entities import CatalogRecord, ContentStatus, TourType
from .repositories import RecordT

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Text searched by ``CatalogQuery.search``; fields a record type lacks are skipped.
SEARCH_FIELDS = (
    "name",
    "description",
    "short_description",
    "location",
    "category",
    "role",
    "content",
)


def _contains(haystack: object, needle: str) -> bool:
    return isinstance(haystack, str) and needle in haystack.casefold()


def _same_text(value: object, expected: str) -> bool:
    return isinstance(value, str) and value.casefold() == expected.casefold()


@dataclass(slots=True, frozen=True, kw_only=True)
class CatalogQuery:
    """Filters and paging for catalog listings.

    ``None`` means "do not filter". Package-only filters never match a
    record type that lacks the field.
    """

    status: ContentStatus | None = None
    published_only: bool = False
    search: str | None = None
    category: str | None = None
    language: str | None = None
    tour_type: TourType | None = None
    featured: bool | None = None
    trending: bool | None = None
    best_seller: bool | None = None
    location: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_duration: int | None = None
    max_duration: int | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvariantViolation("page must be at least 1", field="page")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise InvariantViolation(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )

    def matches(self, record: CatalogRecord) -> bool:
        if self.published_only and not record.published:
            return False
        if self.status is not None and record.status is not self.status:
            return False
        if self.language and not _same_text(record.language, self.language):
            return False
        if self.featured is not None and record.featured is not self.featured:
            return False

        for name, expected in (
            ("tour_type", self.tour_type),
            ("trending", self.trending),
            ("best_seller", self.best_seller),
        ):
            if expected is not None and getattr(record, name, None) != expected:
                return False

        if self.category and not _same_text(getattr(record, "category", None), self.category):
            return False
        if self.location and not _contains(getattr(record, "location", None), self.location.casefold()):
            return False

        price = getattr(record, "price", None)
        if self.min_price is not None and (price is None or price < self.min_price):
            return False
        if self.max_price is not None and (price is None or price > self.max_price):
            return False
        duration = getattr(record, "duration", None)
        if self.min_duration is not None and (duration is None or duration < self.min_duration):
            return False
        if self.max_duration is not None and (duration is None or duration > self.max_duration):
            return False

        if self.search:
            needle = self.search.strip().casefold()
            if needle and not any(_contains(getattr(record, f, None), needle) for f in SEARCH_FIELDS):
                return False
        return True


@dataclass(slots=True, frozen=True, kw_only=True)
class CatalogPage(Generic[RecordT]):
    items: tuple[RecordT, ...]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.limit))


__all__ = ["CatalogPage", "CatalogQuery", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE"]
