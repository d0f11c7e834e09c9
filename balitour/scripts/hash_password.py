# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Print a bcrypt hash for ADMIN_PASSWORD_HASH or USER_PASSWORD_HASH."""

from __future__ import annotations

import argparse
from getpass import getpass

from balitour.application.services.password_hashing import BcryptPasswordHasher


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a login password hash")
    parser.add_argument("--rounds", type=int, default=12, help="bcrypt cost factor")
    args = parser.parse_args()

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")
    if not pw1:
        raise SystemExit("Password must not be empty")

    print(BcryptPasswordHasher(rounds=args.rounds).hash(pw1))


if __name__ == "__main__":
    main()
