# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Generic

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from balitour.application.use_cases.catalog.publishing import CatalogPublishingUseCase
from balitour.domain.catalog.codecs import RecordCodec
from balitour.domain.catalog.queries import CatalogQuery
from balitour.domain.catalog.repositories import RecordT
from balitour.domain.users.entities import Role
from balitour.interfaces.http.dto.catalog import ScheduleRequestDTO, StatusRequestDTO
from balitour.interfaces.http.guards import SessionGuard
from balitour.shared.errors.base import RecordNotFoundError
from balitour.shared.errors.validation import raise_validation_error
from balitour.shared.logging import logger


def _parse(model: type[BaseModel], payload: Any) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc)


class CatalogController(Generic[RecordT]):
    """Public reads and admin-only writes for one kind of catalog record.

    Visitors only ever see published records; admins see everything and may
    also filter by ``?status=``. Listings are paged with ``?page=&limit=``.
    """

    def __init__(
        self,
        *,
        collection: str,
        use_case: CatalogPublishingUseCase[RecordT],
        codec: RecordCodec[RecordT],
        guard: SessionGuard,
        create_dto: type[BaseModel],
        update_dto: type[BaseModel],
        response_dto: type[BaseModel],
        query_dto: type[BaseModel],
    ) -> None:
        self._collection = collection
        self._use_case = use_case
        self._codec = codec
        self._guard = guard
        self._create_dto = create_dto
        self._update_dto = update_dto
        self._response_dto = response_dto
        self._query_dto = query_dto

    def _serialize(self, record: RecordT) -> dict[str, Any]:
        dto = self._response_dto.model_validate(self._codec.encode(record))
        return dto.model_dump(mode="json", by_alias=True)

    def _is_admin(self) -> bool:
        user = self._guard.current_user()
        return user is not None and user.is_admin

    def list_records(self) -> tuple[Response, int]:
        params = _parse(self._query_dto, request.args.to_dict())
        filters = params.model_dump(exclude={"status"})
        is_admin = self._is_admin()
        query = CatalogQuery(
            **filters,
            status=params.status if is_admin else None,
            published_only=not is_admin,
        )

        result = self._use_case.page(query)
        return jsonify(
            {
                self._collection: [self._serialize(r) for r in result.items],
                "totalCount": result.total,
                "totalPages": result.total_pages,
                "pagination": {
                    "page": result.page,
                    "limit": result.limit,
                    "total": result.total,
                    "totalPages": result.total_pages,
                },
            }
        ), HTTPStatus.OK

    def get_record(self, record_id: str) -> tuple[Response, int]:
        record = self._use_case.get(record_id)
        if not record.published and not self._is_admin():
            raise RecordNotFoundError(self._use_case.kind, record_id)
        return jsonify(self._serialize(record)), HTTPStatus.OK

    def create(self) -> tuple[Response, int]:
        dto = _parse(self._create_dto, request.get_json(silent=True) or {})
        record = self._codec.record_type(**self._codec.decode_changes(dto.model_dump()))
        created = self._use_case.create(record)
        logger.info(f"catalog.{self._use_case.kind}.create: ok id={created.id}")
        return jsonify({"id": created.id, "record": self._serialize(created)}), HTTPStatus.CREATED

    def update(self, record_id: str) -> tuple[Response, int]:
        dto = _parse(self._update_dto, request.get_json(silent=True) or {})
        changes = self._codec.decode_changes(dto.model_dump(exclude_unset=True))
        record = self._use_case.edit(record_id, changes)
        return jsonify(self._serialize(record)), HTTPStatus.OK

    def delete(self, record_id: str) -> tuple[Response, int]:
        self._use_case.remove(record_id)
        return jsonify({"success": True}), HTTPStatus.OK

    def publish(self, record_id: str) -> tuple[Response, int]:
        return jsonify(self._serialize(self._use_case.publish(record_id))), HTTPStatus.OK

    def unpublish(self, record_id: str) -> tuple[Response, int]:
        return jsonify(self._serialize(self._use_case.unpublish(record_id))), HTTPStatus.OK

    def toggle_featured(self, record_id: str) -> tuple[Response, int]:
        return jsonify(self._serialize(self._use_case.toggle_featured(record_id))), HTTPStatus.OK

    def schedule(self, record_id: str) -> tuple[Response, int]:
        dto = _parse(ScheduleRequestDTO, request.get_json(silent=True) or {})
        record = self._use_case.schedule(record_id, dto.scheduled_at)
        return jsonify(self._serialize(record)), HTTPStatus.OK

    def set_status(self, record_id: str) -> tuple[Response, int]:
        dto = _parse(StatusRequestDTO, request.get_json(silent=True) or {})
        record = self._use_case.set_status(record_id, dto.status)
        return jsonify(self._serialize(record)), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        admin = self._guard.require(Role.ADMIN)
        bp = Blueprint(self._collection, __name__, url_prefix=f"/api/{self._collection}")
        bp.add_url_rule("", view_func=self.list_records, methods=["GET"])
        bp.add_url_rule("", view_func=admin(self.create), methods=["POST"])
        bp.add_url_rule("/<record_id>", view_func=self.get_record, methods=["GET"])
        bp.add_url_rule("/<record_id>", view_func=admin(self.update), methods=["PUT", "PATCH"])
        bp.add_url_rule("/<record_id>", view_func=admin(self.delete), methods=["DELETE"])
        for action, view in (
            ("publish", self.publish),
            ("unpublish", self.unpublish),
            ("feature", self.toggle_featured),
            ("schedule", self.schedule),
            ("status", self.set_status),
        ):
            bp.add_url_rule(f"/<record_id>/{action}", view_func=admin(view), methods=["POST"])
        return bp
