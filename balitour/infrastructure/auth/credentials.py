# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable

from balitour.domain.users.entities import Credential, Role
from balitour.shared.config import AppConfig
from balitour.shared.logging import logger

ADMIN_ID = "2"
USER_ID = "1"

# bcrypt hash of "password", accepted only outside production
DEV_PASSWORD_HASH = "$2a$10$92IXUNpkjO0rOQ5byMi.Ye4oKoEa3Ro9llC/.og/at2.uheWG/igi"


class EnvCredentialStore:
    """Login identities derived from configuration at startup."""

    def __init__(self, credentials: Iterable[Credential]) -> None:
        self._by_email = {c.email.lower(): c for c in credentials}
        self._by_id = {c.id: c for c in self._by_email.values()}

    @classmethod
    def from_config(cls, config: AppConfig) -> EnvCredentialStore:
        credentials: list[Credential] = []
        if config.admin_password_hash:
            credentials.append(
                Credential(
                    id=ADMIN_ID,
                    email=config.admin_email,
                    password_hash=config.admin_password_hash,
                    role=Role.ADMIN,
                    display_name="Admin User",
                )
            )
        if config.user_password_hash:
            credentials.append(
                Credential(
                    id=USER_ID,
                    email=config.user_email,
                    password_hash=config.user_password_hash,
                    role=Role.USER,
                    display_name="John Doe",
                )
            )

        if not credentials and not config.is_production():
            logger.warning(
                "credentials: ADMIN_PASSWORD_HASH and USER_PASSWORD_HASH are not set, "
                "using default development credentials. Never run like this in production!"
            )
            credentials = [
                Credential(
                    id=USER_ID,
                    email=config.user_email,
                    password_hash=DEV_PASSWORD_HASH,
                    role=Role.USER,
                    display_name="John Doe",
                ),
                Credential(
                    id=ADMIN_ID,
                    email=config.admin_email,
                    password_hash=DEV_PASSWORD_HASH,
                    role=Role.ADMIN,
                    display_name="Admin User",
                ),
            ]
        elif not credentials:
            logger.error("credentials: no password hashes configured, logins will be refused")

        return cls(credentials)

    def find_by_email(self, email: str) -> Credential | None:
        return self._by_email.get(email.strip().lower())

    def find_by_id(self, user_id: str) -> Credential | None:
        return self._by_id.get(user_id)

    def is_empty(self) -> bool:
        return not self._by_email
