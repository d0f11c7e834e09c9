# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from balitour.domain.users.entities import LoginResult, SessionUser
from balitour.domain.users.exceptions import (
    AuthServiceUnavailableError,
    InvalidCredentialsError,
)
from balitour.domain.users.repositories import (
    AttemptLimiter,
    CredentialStore,
    PasswordHasher,
    SessionTokenSigner,
)
from balitour.shared.errors.base import RateLimitError, ValidationError
from balitour.shared.logging import logger

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        password_hasher: PasswordHasher,
        signer: SessionTokenSigner,
        limiter: AttemptLimiter,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher
        self._signer = signer
        self._limiter = limiter

    def execute(self, email: str | None, password: str | None, client_key: str) -> LoginResult:
        email = (email or "").strip()
        if not email or not password:
            missing = [name for name, value in (("email", email), ("password", password)) if not value]
            raise ValidationError(
                "missing_credentials",
                context={"fields": missing},
                message="Email and password are required",
            )
        if not EMAIL_PATTERN.match(email):
            raise ValidationError(
                "invalid_email",
                context={"fields": ["email"]},
                message="Invalid email format",
            )

        if not self._limiter.check_and_record_attempt(client_key):
            raise RateLimitError(retry_after=self._limiter.retry_after(client_key))

        if self._credentials.is_empty():
            logger.error("auth.login: no credentials configured")
            raise AuthServiceUnavailableError()

        credential = self._credentials.find_by_email(email)
        if credential is None or not self._password_hasher.verify(password, credential.password_hash):
            logger.info(f"auth.login: rejected client={client_key}")
            raise InvalidCredentialsError()

        self._limiter.reset(client_key)
        token, claims = self._signer.issue(credential)
        logger.info(f"auth.login: ok user_id={credential.id} role={credential.role.value}")
        return LoginResult(
            token=token,
            user=SessionUser(
                user_id=credential.id,
                email=credential.email,
                role=credential.role,
                display_name=credential.display_name,
            ),
            expires_at=claims.expires_at,
        )
