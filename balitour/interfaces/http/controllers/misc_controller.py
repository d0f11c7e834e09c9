# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, jsonify

from balitour.infrastructure.health import check_catalog_storage
from balitour.shared.logging import logger


class MiscController:
    def __init__(self, catalog_dir: Path) -> None:
        self._catalog_dir = catalog_dir

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"status": "ok"}
        try:
            check_catalog_storage(self._catalog_dir)
            status["catalog"] = "ok"
        except OSError as exc:
            logger.warning(f"health: catalog storage check failed: {exc}")
            status["status"] = "degraded"
            status["catalog"] = "error"
        return jsonify(status)
