# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any, Generic

from balitour.domain.catalog.entities import ContentStatus, Package
from balitour.domain.catalog.queries import CatalogPage, CatalogQuery
from balitour.domain.catalog.repositories import CatalogRepository, RecordT
from balitour.shared.errors.base import RecordNotFoundError
from balitour.shared.logging import logger
from balitour.utils.slug import slugify


_EPOCH = datetime.min.replace(tzinfo=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CatalogPublishingUseCase(Generic[RecordT]):
    """CRUD and publishing workflow over one catalog repository.

    ``published`` always mirrors ``status == PUBLISHED``.
    """

    def __init__(
        self,
        repository: CatalogRepository[RecordT],
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or _utcnow

    @property
    def kind(self) -> str:
        return self._repository.kind

    def list(self, query: CatalogQuery | None = None) -> list[RecordT]:
        """Matching records, newest first."""
        query = query or CatalogQuery()
        records = [r for r in self._repository.list() if query.matches(r)]
        return sorted(records, key=lambda r: r.created_at or _EPOCH, reverse=True)

    def page(self, query: CatalogQuery) -> CatalogPage[RecordT]:
        records = self.list(query)
        start = (query.page - 1) * query.limit
        return CatalogPage(
            items=tuple(records[start : start + query.limit]),
            page=query.page,
            limit=query.limit,
            total=len(records),
        )

    def get(self, record_id: str) -> RecordT:
        record = self._repository.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.kind, record_id)
        return record

    def create(self, record: RecordT) -> RecordT:
        published = record.status is ContentStatus.PUBLISHED
        record = replace(
            record,
            published=published,
            published_at=(record.published_at or self._clock()) if published else None,
        )
        if isinstance(record, Package) and not record.slug:
            record = replace(record, slug=slugify(record.name) or None)
        return self.get(self._repository.add(record))

    def edit(self, record_id: str, changes: Mapping[str, Any]) -> RecordT:
        changes = dict(changes)
        changes.pop("published", None)
        status = changes.get("status")
        if status is not None:
            changes.update(self._status_changes(self.get(record_id), status))
        return self._apply(record_id, changes)

    def remove(self, record_id: str) -> None:
        self._repository.delete(record_id)

    def publish(self, record_id: str) -> RecordT:
        return self.set_status(record_id, ContentStatus.PUBLISHED)

    def unpublish(self, record_id: str) -> RecordT:
        return self.set_status(record_id, ContentStatus.DRAFT)

    def schedule(self, record_id: str, at: datetime) -> RecordT:
        if at.tzinfo is None:
            at = at.replace(tzinfo=UTC)
        record = self._apply(
            record_id,
            {"scheduled_at": at, "status": ContentStatus.DRAFT, "published": False},
        )
        logger.info(f"catalog.{self.kind}.schedule: id={record_id} at={at.isoformat()}")
        return record

    def toggle_featured(self, record_id: str) -> RecordT:
        current = self.get(record_id)
        return self._apply(record_id, {"featured": not current.featured})

    def set_status(self, record_id: str, status: ContentStatus) -> RecordT:
        current = self.get(record_id)
        record = self._apply(record_id, self._status_changes(current, status))
        logger.info(f"catalog.{self.kind}.status: id={record_id} status={status.value}")
        return record

    def _status_changes(self, current: RecordT, status: ContentStatus) -> dict[str, Any]:
        changes: dict[str, Any] = {
            "status": status,
            "published": status is ContentStatus.PUBLISHED,
        }
        if status is ContentStatus.PUBLISHED:
            changes["published_at"] = current.published_at or self._clock()
            changes["scheduled_at"] = None
        return changes

    def _apply(self, record_id: str, changes: Mapping[str, Any]) -> RecordT:
        if not self._repository.update(record_id, changes):
            raise RecordNotFoundError(self.kind, record_id)
        return self.get(record_id)
