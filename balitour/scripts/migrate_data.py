# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Rewrite the catalog documents at the current schema version."""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path

from balitour.infrastructure.storage import package_repository, testimonial_repository
from balitour.shared.config import load_config


def backup_document(path: Path) -> Path:
    backup_path = path.with_suffix(path.suffix + ".bak")
    shutil.copy2(path, backup_path)
    return backup_path


def migrate_directory(directory: Path) -> list[Path]:
    """Rewrite each catalog document; returns the documents left untouched.

    A document the store could not load is kept as it is on disk so the
    operator can repair it from the backup.
    """
    skipped: list[Path] = []
    for factory in (package_repository, testimonial_repository):
        repository = factory(directory)
        if repository.path.exists():
            backup_path = backup_document(repository.path)
            print(f"Backup created at {backup_path}")
        if repository.discarded:
            print(f"Skipped {repository.path}: document could not be loaded, left unchanged")
            skipped.append(repository.path)
            continue
        repository.save()
        print(f"Wrote {len(repository.list())} {repository.kind} records to {repository.path}")
    return skipped


def main() -> None:
    parser = argparse.ArgumentParser(description="Migrate catalog documents safely")
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=None,
        help="Catalog directory (defaults to CATALOG_DIR)",
    )
    args = parser.parse_args()
    directory = args.directory or load_config().catalog.directory

    if migrate_directory(directory):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
