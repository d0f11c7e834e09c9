# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from balitour.domain.catalog.codecs import PACKAGE_CODEC, TESTIMONIAL_CODEC
from balitour.domain.catalog.entities import Package, Testimonial

from .json_catalog import Clock, JsonCatalogRepository
from .migrations import (
    PACKAGE_MIGRATIONS,
    PACKAGES_NAMESPACE,
    PACKAGES_VERSION,
    TESTIMONIAL_MIGRATIONS,
    TESTIMONIALS_NAMESPACE,
    TESTIMONIALS_VERSION,
)


def package_repository(
    directory: str | Path, *, clock: Clock | None = None
) -> JsonCatalogRepository[Package]:
    return JsonCatalogRepository(
        directory,
        namespace=PACKAGES_NAMESPACE,
        codec=PACKAGE_CODEC,
        version=PACKAGES_VERSION,
        migrations=PACKAGE_MIGRATIONS,
        clock=clock,
    )


def testimonial_repository(
    directory: str | Path, *, clock: Clock | None = None
) -> JsonCatalogRepository[Testimonial]:
    return JsonCatalogRepository(
        directory,
        namespace=TESTIMONIALS_NAMESPACE,
        codec=TESTIMONIAL_CODEC,
        version=TESTIMONIALS_VERSION,
        migrations=TESTIMONIAL_MIGRATIONS,
        clock=clock,
    )


__all__ = ["JsonCatalogRepository", "package_repository", "testimonial_repository"]
