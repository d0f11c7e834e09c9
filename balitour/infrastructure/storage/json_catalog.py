# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from threading import RLock
from typing import Any, Generic
from uuid import uuid4

from balitour.domain.catalog.codecs import META_FIELDS, RecordCodec
from balitour.domain.catalog.repositories import RecordT
from balitour.shared.errors.base import InfrastructureError
from balitour.shared.logging import logger
from balitour.utils.fs import write_json_atomic
from balitour.utils.jsonio import read_json_object

Migration = Callable[[dict[str, Any]], dict[str, Any]]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JsonCatalogRepository(Generic[RecordT]):
    """Catalog records kept in memory and mirrored to one JSON document.

    The document lives at ``<directory>/<namespace>.json`` and has the shape
    ``{"version": N, "state": {"records": [...]}}``. ``migrations[n]`` turns a
    version ``n`` state into a version ``n + 1`` state.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        namespace: str,
        codec: RecordCodec[RecordT],
        version: int = 1,
        migrations: Mapping[int, Migration] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.kind = codec.kind
        self._path = Path(directory) / f"{namespace}.json"
        self._namespace = namespace
        self._codec = codec
        self._version = version
        self._migrations = dict(migrations or {})
        self._clock = clock or _utcnow
        self._lock = RLock()
        self._records: dict[str, RecordT] = {}
        self._discarded = False
        self.reload()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def discarded(self) -> bool:
        """True when the last load threw away an existing document."""
        return self._discarded

    def add(self, record: RecordT) -> str:
        now = self._clock()
        with self._lock:
            record_id = str(uuid4())
            while record_id in self._records:
                record_id = str(uuid4())
            stored = replace(record, id=record_id, created_at=now, updated_at=now)
            with self._committing():
                self._records[record_id] = stored
        logger.info(f"catalog.{self.kind}.add: ok id={record_id}")
        return record_id

    def update(self, record_id: str, changes: Mapping[str, Any]) -> bool:
        known = {
            name: value
            for name, value in changes.items()
            if name in self._codec.field_decoders and name not in META_FIELDS
        }
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return False
            with self._committing():
                self._records[record_id] = replace(current, **known, updated_at=self._clock())
        logger.info(f"catalog.{self.kind}.update: ok id={record_id} fields={sorted(known)}")
        return True

    def delete(self, record_id: str) -> None:
        with self._lock:
            if record_id not in self._records:
                return
            with self._committing():
                del self._records[record_id]
        logger.info(f"catalog.{self.kind}.delete: ok id={record_id}")

    def get(self, record_id: str) -> RecordT | None:
        with self._lock:
            return self._records.get(record_id)

    def list(self) -> list[RecordT]:
        with self._lock:
            return list(self._records.values())

    def save(self) -> None:
        with self._lock:
            self._persist()

    def reload(self) -> None:
        with self._lock:
            self._discarded = False
            self._records = {record.id: record for record in self._load()}

    @contextmanager
    def _committing(self) -> Iterator[None]:
        # Memory mirrors the last successful write.
        snapshot = dict(self._records)
        try:
            yield
            self._persist()
        except Exception:
            self._records = snapshot
            raise

    def _discard(self, reason: str) -> list[RecordT]:
        self._discarded = True
        logger.warning(f"catalog.{self.kind}.load: discarding {self._path.name}, {reason}")
        return []

    def _load(self) -> list[RecordT]:
        try:
            document = read_json_object(self._path)
        except (OSError, ValueError) as exc:
            return self._discard(f"unreadable: {exc}")
        if document is None:
            return []

        version = document.get("version")
        state = document.get("state")
        if not isinstance(version, int) or not isinstance(state, dict):
            return self._discard("bad envelope")
        if version > self._version:
            return self._discard(f"version {version} is newer than {self._version}")

        while version < self._version:
            step = self._migrations.get(version)
            if step is None:
                return self._discard(f"no migration from version {version}")
            try:
                state = step(state)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                return self._discard(f"migration from version {version} failed: {exc}")
            version += 1
            logger.info(f"catalog.{self.kind}.load: migrated {self._namespace} to version {version}")

        raw_records = state.get("records") if isinstance(state, dict) else None
        if not isinstance(raw_records, list):
            return self._discard("no records list")

        records: list[RecordT] = []
        for raw in raw_records:
            try:
                record = self._codec.decode(raw)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(f"catalog.{self.kind}.load: skipping bad record: {exc}")
                continue
            if record.id:
                records.append(record)
        logger.debug(f"catalog.{self.kind}.load: {len(records)} records from {self._path.name}")
        return records

    def _persist(self) -> None:
        document = {
            "version": self._version,
            "state": {"records": [self._codec.encode(r) for r in self._records.values()]},
        }
        try:
            write_json_atomic(self._path, document)
        except OSError as exc:
            logger.opt(exception=exc).error(f"catalog.{self.kind}.persist: failed path={self._path}")
            raise InfrastructureError(
                code="catalog_persist_failed", context={"kind": self.kind}
            ) from exc
