# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from balitour.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-api-key"})
_SENSITIVE_PARAMS = ("password", "token", "secret")
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _get_client_ip() -> str:
    return request.remote_addr or "unknown"


def _get_user_id() -> str | None:
    user = getattr(g, "user", None)
    return user.user_id if user is not None else None


def _fingerprint(value: str) -> str:
    return f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def _sanitize_query_params(params: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(p in key.lower() for p in _SENSITIVE_PARAMS) else value
        for key, value in params.items()
    }


def _incoming_request_id() -> str:
    # Client-supplied ids end up in log lines, so only plain tokens are kept.
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.match(supplied):
        return supplied
    return secrets.token_urlsafe(8)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        set_correlation_id(_incoming_request_id())
        g.request_started_at = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"Request started: {request.method} {request.path} "
                f"from {_get_client_ip()}, query={_sanitize_query_params(request.args)}, "
                f"headers={_sanitize_headers(request.headers)}, "
                f"body_size={request.content_length or 0}"
            )
        else:
            logger.info(f"Request: {request.method} {request.path} from {_get_client_ip()}")

    @app.after_request
    def _after_request(response: Response) -> Response:
        started = g.get("request_started_at", time.perf_counter())
        duration_ms = (time.perf_counter() - started) * 1000
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())

        level = "WARNING" if response.status_code >= 500 else "INFO"
        logger.log(
            level,
            f"Response: {request.method} {request.path} status={response.status_code} "
            f"duration={duration_ms:.1f}ms user={_get_user_id()}",
        )
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on "
                f"{request.method} {request.path}, user={_get_user_id()}"
            )
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
