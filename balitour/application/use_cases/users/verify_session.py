# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from balitour.domain.users.entities import SessionUser
from balitour.domain.users.exceptions import InvalidSessionError
from balitour.domain.users.repositories import SessionTokenSigner


class VerifySessionUseCase:
    """Resolve a session token to the identity it was issued for.

    The identity comes from the token claims alone, so a credential removed
    after issuance stays valid until the token expires.
    """

    def __init__(self, *, signer: SessionTokenSigner) -> None:
        self._signer = signer

    def execute(self, token: str | None) -> SessionUser:
        if not token:
            raise InvalidSessionError()
        return self._signer.decode(token).to_session_user()
