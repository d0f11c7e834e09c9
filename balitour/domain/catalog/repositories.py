# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from .entities import Package, Testimonial

RecordT = TypeVar("RecordT", Package, Testimonial)


class CatalogRepository(Protocol[RecordT]):
    kind: str

    def add(self, record: RecordT) -> str: ...
    def update(self, record_id: str, changes: Mapping[str, Any]) -> bool: ...
    def delete(self, record_id: str) -> None: ...
    def get(self, record_id: str) -> RecordT | None: ...
    def list(self) -> list[RecordT]: ...
    def reload(self) -> None: ...
