from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from balitour.domain.catalog import Availability, ContentStatus, Package
from balitour.domain.catalog import Testimonial as CatalogTestimonial
from balitour.infrastructure.storage import (
    json_catalog,
    package_repository,
    testimonial_repository,
)
from balitour.shared.errors.base import InfrastructureError


class TickingClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def _package(**overrides) -> Package:
    values = dict(
        name="Nusa Penida Day Trip",
        description="Snorkel and cliffs",
        price=85.0,
        duration=1,
        location="Nusa Penida",
        category="island",
    )
    values.update(overrides)
    return Package(**values)


def _write(path: Path, document: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")


def test_add_assigns_id_and_timestamps(catalog_dir: Path) -> None:
    repo = package_repository(catalog_dir, clock=TickingClock())
    record = _package()

    record_id = repo.add(record)
    stored = repo.get(record_id)

    assert stored is not None
    assert stored.id == record_id
    assert stored.created_at == stored.updated_at
    assert stored.name == record.name and stored.price == record.price


def test_add_always_generates_fresh_ids(catalog_dir: Path) -> None:
    repo = package_repository(catalog_dir)
    ids = {repo.add(_package()) for _ in range(5)}
    assert len(ids) == 5


def test_update_changes_only_given_field(catalog_dir: Path) -> None:
    repo = package_repository(catalog_dir, clock=TickingClock())
    record_id = repo.add(_package())
    before = repo.get(record_id)

    assert repo.update(record_id, {"price": 99.0, "id": "other", "bogus": 1}) is True
    after = repo.get(record_id)

    assert after is not None and before is not None
    assert after.price == 99.0
    assert after.id == record_id
    assert after.created_at == before.created_at
    assert after.updated_at > before.updated_at
    assert after.name == before.name


def test_update_missing_record_returns_false(catalog_dir: Path) -> None:
    repo = package_repository(catalog_dir)
    assert repo.update("missing", {"price": 1.0}) is False


def test_delete_is_idempotent(catalog_dir: Path) -> None:
    repo = testimonial_repository(catalog_dir)
    record_id = repo.add(CatalogTestimonial(name="Ayu", content="Great guides", rating=5))

    repo.delete(record_id)
    repo.delete(record_id)

    assert repo.get(record_id) is None
    assert repo.list() == []


def test_records_survive_a_new_store_instance(catalog_dir: Path) -> None:
    first = package_repository(catalog_dir)
    record_id = first.add(_package(highlights=("Manta point",)))

    second = package_repository(catalog_dir)

    assert second.get(record_id) == first.get(record_id)
    document = json.loads((catalog_dir / "packages-store.json").read_text(encoding="utf-8"))
    assert document["version"] == 2
    assert document["state"]["records"][0]["id"] == record_id


def test_reload_picks_up_writes_from_another_instance(catalog_dir: Path) -> None:
    reader = testimonial_repository(catalog_dir)
    writer = testimonial_repository(catalog_dir)
    record_id = writer.add(CatalogTestimonial(name="Made", content="Perfect", rating=4))

    assert reader.get(record_id) is None
    reader.reload()
    assert reader.get(record_id) is not None


def test_version_one_packages_are_migrated(catalog_dir: Path) -> None:
    _write(
        catalog_dir / "packages-store.json",
        {
            "version": 1,
            "state": {
                "records": [
                    {
                        "id": "legacy-1",
                        "name": "Kintamani Sunrise",
                        "description": "",
                        "price": 60,
                        "duration": 1,
                        "location": "Kintamani",
                        "category": "trek",
                        "tour_type": "GIT",
                        "status": "almost_full",
                        "published": True,
                        "created_at": "2024-05-01T08:00:00Z",
                        "updated_at": "2024-05-01T08:00:00Z",
                    }
                ]
            },
        },
    )

    record = package_repository(catalog_dir).get("legacy-1")

    assert record is not None
    assert record.availability is Availability.ALMOST_FULL
    assert record.status is ContentStatus.PUBLISHED
    assert record.created_at == datetime(2024, 5, 1, 8, tzinfo=UTC)


@pytest.mark.parametrize(
    "document",
    [
        {"version": 99, "state": {"records": [{"id": "x"}]}},
        {"state": {"records": []}},
        ["not", "an", "object"],
        {"version": 0, "state": {"records": []}},
    ],
)
def test_unknown_documents_are_discarded(catalog_dir: Path, document: object) -> None:
    _write(catalog_dir / "testimonials-store.json", document)

    repo = testimonial_repository(catalog_dir)

    assert repo.list() == []


def test_corrupt_json_is_discarded(catalog_dir: Path) -> None:
    path = catalog_dir / "packages-store.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    repo = package_repository(catalog_dir)
    assert repo.list() == []

    repo.add(_package())
    assert len(package_repository(catalog_dir).list()) == 1


def test_bad_records_are_skipped(catalog_dir: Path) -> None:
    _write(
        catalog_dir / "testimonials-store.json",
        {
            "version": 1,
            "state": {
                "records": [
                    {"id": "ok", "name": "Ayu", "content": "Nice", "rating": 5},
                    {"id": "bad", "name": "Wayan", "content": "Hmm", "rating": 9},
                ]
            },
        },
    )

    repo = testimonial_repository(catalog_dir)

    assert [r.id for r in repo.list()] == ["ok"]


def test_failed_migration_discards_document(catalog_dir: Path) -> None:
    _write(catalog_dir / "packages-store.json", {"version": 1, "state": {"records": 5}})

    repo = package_repository(catalog_dir)

    assert repo.list() == []
    assert repo.discarded is True


def test_missing_document_is_not_reported_as_discarded(catalog_dir: Path) -> None:
    assert package_repository(catalog_dir).discarded is False


def _fail_writes(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_write(path, data) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(json_catalog, "write_json_atomic", broken_write)


def test_failed_add_leaves_store_unchanged(
    catalog_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    repo = testimonial_repository(catalog_dir)
    _fail_writes(monkeypatch)

    with pytest.raises(InfrastructureError):
        repo.add(CatalogTestimonial(name="Ayu", content="Great guides", rating=5))

    assert repo.list() == []


def test_failed_update_and_delete_keep_previous_record(
    catalog_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    repo = package_repository(catalog_dir)
    record_id = repo.add(_package())
    before = repo.get(record_id)
    _fail_writes(monkeypatch)

    with pytest.raises(InfrastructureError):
        repo.update(record_id, {"price": 10.0})
    assert repo.get(record_id) == before

    with pytest.raises(InfrastructureError):
        repo.delete(record_id)
    assert repo.get(record_id) == before
    assert package_repository(catalog_dir).get(record_id) == before
