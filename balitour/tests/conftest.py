from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from balitour.shared.config import AppConfig, CatalogConfig
from balitour.shared.config.settings import load_config
from balitour.infrastructure.storage import testimonial_repository

# The storage factory's name matches pytest's ``test*`` pattern; keep pytest
# from collecting it as a test where test modules import it.
testimonial_repository.__test__ = False

TEST_SECRET = "test-signing-secret-0123456789abcdef"

_ENV_VARS = (
    "APP_ENV",
    "JWT_SECRET",
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD_HASH",
    "USER_EMAIL",
    "USER_PASSWORD_HASH",
    "DEBUG_LOGGING",
    "LOGIN_MAX_ATTEMPTS",
    "LOGIN_LOCKOUT_MINUTES",
    "SESSION_TTL_DAYS",
    "COOKIE_SECURE",
    "ALLOWED_ORIGINS",
    "ENABLE_HSTS",
    "TRUSTED_PROXIES",
    "CATALOG_DIR",
    "LOG_LEVEL",
    "LOG_JSON",
    "LOG_ROTATION",
    "LOG_RETENTION",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "app.log"))
    load_config.cache_clear()


@pytest.fixture()
def catalog_dir(tmp_path: Path) -> Path:
    return tmp_path / "catalog"


@pytest.fixture()
def make_config(catalog_dir: Path) -> Callable[..., AppConfig]:
    def factory(**overrides: Any) -> AppConfig:
        values: dict[str, Any] = {
            "app_env": "test",
            "jwt_secret": TEST_SECRET,
            "catalog": CatalogConfig(directory=catalog_dir),
        }
        values.update(overrides)
        return AppConfig(_env_file=None, **values)  # type: ignore[call-arg]

    return factory
