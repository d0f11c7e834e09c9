# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask_bcrypt import Bcrypt
from werkzeug.security import check_password_hash

from balitour.shared.logging import logger

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

bcrypt = Bcrypt()


class BcryptPasswordHasher:
    """Hashes with bcrypt and also verifies werkzeug-style hashes."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.generate_password_hash(password, self._rounds).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        if hashed.startswith(_BCRYPT_PREFIXES):
            try:
                return bool(bcrypt.check_password_hash(hashed, password))
            except ValueError:
                # bcrypt rejects malformed hashes and over-long passwords
                logger.debug("password_hashing: bcrypt rejected input")
                return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            logger.debug("password_hashing: unsupported hash format")
            return False
