# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

_AVAILABILITY_VALUES = {"available", "almost_full", "full"}


def _package_v1_to_v2(state: dict[str, Any]) -> dict[str, Any]:
    """Version 1 mixed seat availability into ``status``; split it out."""
    records = []
    for raw in state.get("records") or []:
        if not isinstance(raw, dict):
            continue
        record = dict(raw)
        status = record.get("status")
        if status in _AVAILABILITY_VALUES:
            record["availability"] = status
            record["status"] = "PUBLISHED" if record.get("published") else "DRAFT"
        records.append(record)
    return {**state, "records": records}


PACKAGES_NAMESPACE = "packages-store"
PACKAGES_VERSION = 2
PACKAGE_MIGRATIONS = {1: _package_v1_to_v2}

TESTIMONIALS_NAMESPACE = "testimonials-store"
TESTIMONIALS_VERSION = 1
TESTIMONIAL_MIGRATIONS: dict[int, Any] = {}
