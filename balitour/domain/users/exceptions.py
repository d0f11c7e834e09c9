# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from balitour.shared.errors.base import AuthenticationError


class InvalidCredentialsError(AuthenticationError):
    default_code = "invalid_credentials"
    default_message = "Invalid email or password"


class InvalidSessionError(AuthenticationError):
    default_code = "invalid_session"
    default_message = "Invalid or expired session"


class AuthServiceUnavailableError(AuthenticationError):
    default_code = "auth_unavailable"
    default_status = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = "Authentication service unavailable"
