# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from balitour.domain.users.entities import Credential, Role, SessionClaims
from balitour.domain.users.exceptions import InvalidSessionError
from balitour.shared.logging import logger

ALGORITHM = "HS256"


class JwtSessionSigner:
    """HS256 session tokens carrying ``userId``, ``email``, ``role``, ``iat`` and ``exp``."""

    def __init__(self, secret: str, *, ttl: timedelta = timedelta(days=7)) -> None:
        if not secret:
            raise ValueError("signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(
        self, credential: Credential, now: datetime | None = None
    ) -> tuple[str, SessionClaims]:
        issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
        claims = SessionClaims(
            user_id=credential.id,
            email=credential.email,
            role=credential.role,
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
        )
        payload: dict[str, Any] = {
            "userId": claims.user_id,
            "email": claims.email,
            "role": claims.role.value,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        return token, claims

    def decode(self, token: str) -> SessionClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
            return SessionClaims(
                user_id=str(payload["userId"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except jwt.ExpiredSignatureError as exc:
            logger.debug("tokens: session token expired")
            raise InvalidSessionError() from exc
        except (jwt.PyJWTError, KeyError, ValueError, TypeError) as exc:
            logger.debug(f"tokens: rejected session token ({type(exc).__name__})")
            raise InvalidSessionError() from exc
