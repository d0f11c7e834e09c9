# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from balitour.application.use_cases.users.verify_session import VerifySessionUseCase
from balitour.domain.users.entities import Role, SessionUser
from balitour.domain.users.exceptions import InvalidSessionError
from balitour.shared.errors.base import AuthenticationError, ForbiddenError
from balitour.shared.logging import logger

from .cookies import AUTH_COOKIE

F = TypeVar("F", bound=Callable[..., Any])

_ANONYMOUS = object()


def extract_token() -> str | None:
    token = request.cookies.get(AUTH_COOKIE)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


class SessionGuard:
    """Resolves the request's session and gates views by role.

    The resolved user is stored on ``flask.g.user`` for the rest of the
    request.
    """

    def __init__(self, verify_session: VerifySessionUseCase) -> None:
        self._verify_session = verify_session

    def authenticate(self) -> SessionUser:
        token = extract_token()
        if not token:
            raise AuthenticationError()
        user = self._verify_session.execute(token)
        g.user = user
        return user

    def current_user(self) -> SessionUser | None:
        cached = g.get("_session_user", None)
        if cached is not None:
            return None if cached is _ANONYMOUS else cast(SessionUser, cached)
        try:
            user: SessionUser | None = self.authenticate()
        except AuthenticationError:
            user = None
        g._session_user = user if user is not None else _ANONYMOUS
        return user

    def require(self, role: Role | None = None) -> Callable[[F], F]:
        def decorator(view: F) -> F:
            @wraps(view)
            def inner(*args: Any, **kwargs: Any) -> Any:
                try:
                    user = self.authenticate()
                except InvalidSessionError:
                    logger.info(f"guard: invalid session on {request.method} {request.path}")
                    raise
                if role is not None and user.role is not role:
                    logger.warning(
                        f"guard: denied user_id={user.user_id} role={user.role.value} "
                        f"on {request.method} {request.path}"
                    )
                    raise ForbiddenError()
                return view(*args, **kwargs)

            return cast(F, inner)

        return decorator
