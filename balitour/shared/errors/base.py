# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(type(self), "default_code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(type(self), "default_status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or getattr(type(self), "default_message", None)
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            context=context,
            message=resolved_message,
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
        message: str | None = "Invalid request",
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            context=context,
            message=message,
        )


class AuthenticationError(DomainError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(DomainError):
    default_code = "forbidden"
    default_status = HTTPStatus.FORBIDDEN
    default_message = "Insufficient permissions"


class RateLimitError(AppError):
    def __init__(self, retry_after: int = 0) -> None:
        super().__init__(
            code="too_many_attempts",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context={"retry_after_seconds": retry_after},
            message="Too many login attempts. Please try again later.",
        )

    @property
    def retry_after(self) -> int:
        return int((self.context or {}).get("retry_after_seconds", 0))


class RecordNotFoundError(AppError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(
            code=f"{kind}_not_found",
            status=HTTPStatus.NOT_FOUND,
            context={"id": record_id},
            message="Record not found",
        )


class ConfigurationError(AppError):
    """Raised while loading configuration; aborts startup instead of serving."""

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(
            code="configuration_error",
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            context={"setting": setting} if setting else None,
            message=message,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)
