# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Credential, SessionClaims


class CredentialStore(Protocol):
    def find_by_email(self, email: str) -> Credential | None: ...
    def find_by_id(self, user_id: str) -> Credential | None: ...
    def is_empty(self) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class SessionTokenSigner(Protocol):
    def issue(self, credential: Credential, now: datetime | None = None) -> tuple[str, SessionClaims]: ...
    def decode(self, token: str) -> SessionClaims: ...


class AttemptLimiter(Protocol):
    def check_and_record_attempt(self, client_key: str) -> bool: ...
    def reset(self, client_key: str) -> None: ...
    def retry_after(self, client_key: str) -> int: ...
