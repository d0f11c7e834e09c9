# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from balitour.domain.exceptions import InvariantViolation
from balitour.shared.logging import logger

from .base import AppError, RateLimitError


def _client_ip() -> str:
    return request.remote_addr or "unknown"


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    if isinstance(error, RateLimitError) and error.retry_after:
        response.headers["Retry-After"] = str(error.retry_after)
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(
            f"Handled application error {exc.code} on {request.method} {request.path}"
        )
        return handle_app_error(exc)

    @app.errorhandler(InvariantViolation)
    def _handle_invariant(exc: InvariantViolation):
        payload = {"error": "validation_error", "message": str(exc)}
        if exc.field:
            payload["context"] = {"fields": [exc.field]}
        return jsonify(payload), HTTPStatus.BAD_REQUEST

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user = getattr(g, "user", None)
        user_id = user.user_id if user else None

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {_client_ip()}, user={user_id}, "
                f"query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.opt(exception=exc).error(
                f"Error: {type(exc).__name__} on {request.method} {request.path}"
            )

        response = jsonify({"error": "internal_error", "message": "Internal server error"})
        return response, default_status
