# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os
from pathlib import Path


def check_catalog_storage(directory: str | Path) -> bool:
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    if not os.access(path, os.W_OK):
        raise PermissionError(f"catalog directory is not writable: {path}")
    return True


__all__ = ["check_catalog_storage"]
