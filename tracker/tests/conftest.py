from __future__ import annotations

from pathlib import Path

import pytest

from tracker.shared.config import AppConfig, DatabaseConfig, JwtConfig, SecurityConfig

TEST_JWT_SECRET = "test-signing-secret-0123456789abcdef"


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test-secret-key",
        log_level="WARNING",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'tracker.db'}"),
        jwt=JwtConfig(secret=TEST_JWT_SECRET, expires_seconds=3600),
        security=SecurityConfig(
            password_hash_method="pbkdf2:sha256:1000",
            enable_rate_limit=False,
        ),
    )
