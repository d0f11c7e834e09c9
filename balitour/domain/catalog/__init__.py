# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    Availability,
    CatalogRecord,
    ContentStatus,
    ItineraryDay,
    Meals,
    MediaItem,
    MediaType,
    Package,
    Testimonial,
    TourType,
)
from .queries import CatalogPage, CatalogQuery

__all__ = [
    "Availability",
    "CatalogPage",
    "CatalogQuery",
    "CatalogRecord",
    "ContentStatus",
    "ItineraryDay",
    "Meals",
    "MediaItem",
    "MediaType",
    "Package",
    "Testimonial",
    "TourType",
]
