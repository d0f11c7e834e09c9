# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(slots=True, frozen=True)
class Credential:
    """A configured account. Credentials are read-only at runtime."""

    id: str
    email: str
    password_hash: str
    role: Role
    display_name: str = ""


@dataclass(slots=True, frozen=True)
class SessionUser:
    user_id: str
    email: str
    role: Role
    display_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(slots=True, frozen=True)
class SessionClaims:
    user_id: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime

    def to_session_user(self) -> SessionUser:
        return SessionUser(user_id=self.user_id, email=self.email, role=self.role)


@dataclass(slots=True, frozen=True)
class LoginResult:
    token: str
    user: SessionUser
    expires_at: datetime
