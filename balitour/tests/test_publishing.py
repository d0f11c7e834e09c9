from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from balitour.application.use_cases.catalog.publishing import CatalogPublishingUseCase
from balitour.domain import InvariantViolation
from balitour.domain.catalog import CatalogQuery, ContentStatus, Package, TourType
from balitour.domain.catalog import Testimonial as CatalogTestimonial
from balitour.infrastructure.storage import package_repository, testimonial_repository
from balitour.shared.errors.base import RecordNotFoundError

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture()
def packages(catalog_dir: Path) -> CatalogPublishingUseCase[Package]:
    return CatalogPublishingUseCase(package_repository(catalog_dir), clock=lambda: NOW)


@pytest.fixture()
def testimonials(catalog_dir: Path) -> CatalogPublishingUseCase[CatalogTestimonial]:
    return CatalogPublishingUseCase(testimonial_repository(catalog_dir), clock=lambda: NOW)


def _package(**overrides) -> Package:
    values = dict(
        name="Tanah Lot Sunset & Temple",
        description="Evening tour",
        price=45.0,
        duration=1,
        location="Tabanan",
        category="temple",
    )
    values.update(overrides)
    return Package(**values)


def test_create_derives_slug_from_name(packages: CatalogPublishingUseCase[Package]) -> None:
    created = packages.create(_package())
    assert created.slug == "tanah-lot-sunset-temple"
    assert created.published is False


def test_create_keeps_explicit_slug(packages: CatalogPublishingUseCase[Package]) -> None:
    created = packages.create(_package(slug="custom"))
    assert created.slug == "custom"


def test_create_published_sets_timestamp(packages: CatalogPublishingUseCase[Package]) -> None:
    created = packages.create(_package(status=ContentStatus.PUBLISHED))
    assert created.published is True
    assert created.published_at == NOW


def test_publish_and_unpublish(packages: CatalogPublishingUseCase[Package]) -> None:
    record_id = packages.create(_package()).id

    published = packages.publish(record_id)
    assert published.status is ContentStatus.PUBLISHED
    assert published.published is True
    assert published.published_at == NOW

    unpublished = packages.unpublish(record_id)
    assert unpublished.status is ContentStatus.DRAFT
    assert unpublished.published is False


def test_schedule_keeps_record_as_draft(
    testimonials: CatalogPublishingUseCase[CatalogTestimonial],
) -> None:
    record_id = testimonials.create(CatalogTestimonial(name="Ayu", content="Loved it", rating=5)).id
    at = datetime(2025, 4, 1, 12, 0)

    scheduled = testimonials.schedule(record_id, at)

    assert scheduled.scheduled_at == at.replace(tzinfo=UTC)
    assert scheduled.status is ContentStatus.DRAFT
    assert scheduled.published is False


def test_toggle_featured(testimonials: CatalogPublishingUseCase[CatalogTestimonial]) -> None:
    record_id = testimonials.create(CatalogTestimonial(name="Ayu", content="Loved it", rating=5)).id

    assert testimonials.toggle_featured(record_id).featured is True
    assert testimonials.toggle_featured(record_id).featured is False


def test_archiving_unpublishes(packages: CatalogPublishingUseCase[Package]) -> None:
    record_id = packages.create(_package(status=ContentStatus.PUBLISHED)).id

    archived = packages.set_status(record_id, ContentStatus.ARCHIVED)

    assert archived.published is False


def test_edit_status_keeps_published_flag_in_sync(
    packages: CatalogPublishingUseCase[Package],
) -> None:
    record_id = packages.create(_package()).id

    edited = packages.edit(record_id, {"status": ContentStatus.PUBLISHED, "published": False})

    assert edited.published is True


def test_list_filters(packages: CatalogPublishingUseCase[Package]) -> None:
    draft = packages.create(_package(name="Draft"))
    live = packages.create(_package(name="Live", status=ContentStatus.PUBLISHED))

    assert [p.id for p in packages.list(CatalogQuery(published_only=True))] == [live.id]
    assert [p.id for p in packages.list(CatalogQuery(status=ContentStatus.DRAFT))] == [draft.id]
    assert len(packages.list()) == 2


@pytest.mark.parametrize("action", ["publish", "unpublish", "toggle_featured", "get"])
def test_missing_record_raises_not_found(
    packages: CatalogPublishingUseCase[Package], action: str
) -> None:
    with pytest.raises(RecordNotFoundError) as excinfo:
        getattr(packages, action)("missing")
    assert excinfo.value.code == "package_not_found"


def test_list_applies_package_filters(packages: CatalogPublishingUseCase[Package]) -> None:
    cheap = packages.create(
        _package(name="Ubud Cycling", price=30.0, location="Ubud", category="Adventure")
    )
    long_trip = packages.create(
        _package(
            name="Komodo Expedition",
            price=900.0,
            duration=4,
            location="Labuan Bajo",
            category="island",
            tour_type=TourType.GIT,
            trending=True,
            language="EN",
        )
    )
    seller = packages.create(
        _package(name="Spa Day", description="Balinese massage", best_seller=True)
    )

    def ids(**filters) -> list[str]:
        return [p.id for p in packages.list(CatalogQuery(**filters))]

    assert ids(search="MASSAGE") == [seller.id]
    assert ids(search="bajo") == [long_trip.id]
    assert ids(category="adventure") == [cheap.id]
    assert ids(location="ubu") == [cheap.id]
    assert ids(tour_type=TourType.GIT) == [long_trip.id]
    assert ids(trending=True) == [long_trip.id]
    assert ids(best_seller=True) == [seller.id]
    assert ids(language="en") == [long_trip.id]
    assert sorted(ids(min_price=40, max_price=100)) == [seller.id]
    assert ids(min_duration=2, max_duration=5) == [long_trip.id]
    assert len(ids(featured=False)) == 3


def test_package_only_filters_never_match_testimonials(
    testimonials: CatalogPublishingUseCase[CatalogTestimonial],
) -> None:
    kept = testimonials.create(
        CatalogTestimonial(name="Ayu", content="Wonderful snorkelling", rating=5, featured=True)
    )
    testimonials.create(CatalogTestimonial(name="Made", content="Good food", rating=4))

    assert [t.id for t in testimonials.list(CatalogQuery(search="snorkel"))] == [kept.id]
    assert [t.id for t in testimonials.list(CatalogQuery(featured=True))] == [kept.id]
    assert testimonials.list(CatalogQuery(min_price=1)) == []


def test_page_slices_newest_first(catalog_dir: Path) -> None:
    ticks = iter(NOW + timedelta(minutes=i) for i in range(100))
    use_case = CatalogPublishingUseCase(
        package_repository(catalog_dir, clock=lambda: next(ticks)), clock=lambda: NOW
    )
    created = [use_case.create(_package(name=f"Tour {i}")).id for i in range(5)]

    first = use_case.page(CatalogQuery(page=1, limit=2))
    last = use_case.page(CatalogQuery(page=3, limit=2))
    beyond = use_case.page(CatalogQuery(page=4, limit=2))

    assert [p.id for p in first.items] == [created[4], created[3]]
    assert [p.id for p in last.items] == [created[0]]
    assert beyond.items == ()
    assert first.total == 5 and first.total_pages == 3


@pytest.mark.parametrize("paging", [{"page": 0}, {"limit": 0}, {"limit": 101}])
def test_query_rejects_bad_paging(paging: dict) -> None:
    with pytest.raises(InvariantViolation):
        CatalogQuery(**paging)
