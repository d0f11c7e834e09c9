# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from flask import Response

AUTH_COOKIE = "auth-token"


@dataclass(slots=True, frozen=True)
class SessionCookiePolicy:
    secure: bool
    max_age: int = 7 * 24 * 60 * 60
    path: str = "/"
    samesite: str = "Strict"

    def attach(self, response: Response, token: str) -> None:
        response.set_cookie(
            AUTH_COOKIE,
            token,
            max_age=self.max_age,
            path=self.path,
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            AUTH_COOKIE,
            path=self.path,
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )
