"""Unit tests that do not require a running API or external services."""
import pytest
from pydantic import ValidationError

from app.config import Settings, settings
from app.stores import build_stores


def test_settings_load():
    """Settings load from environment (e.g. CI env vars)."""
    assert settings.API_V1_PREFIX == "/api/v1"
    assert settings.APP_NAME == "School Admin Backend"
    assert settings.STORE_BACKEND == "memory"


def test_environment_flag():
    """Environment flags reflect ENVIRONMENT value."""
    # In CI we set ENVIRONMENT=test
    assert settings.ENVIRONMENT.lower() in ("development", "test", "production")
    assert settings.is_development == (settings.ENVIRONMENT.lower() == "development")
    assert settings.is_production == (settings.ENVIRONMENT.lower() == "production")


def test_list_settings_are_split():
    custom = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test", ALLOWED_METHODS="get,post")
    assert custom.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]
    assert custom.ALLOWED_METHODS == ["GET", "POST"]


def test_unknown_store_backend_rejected():
    with pytest.raises(ValidationError):
        Settings(STORE_BACKEND="spreadsheet")


def test_default_database_is_local_sqlite():
    assert Settings.model_fields["DATABASE_URL"].default.startswith("sqlite+aiosqlite:///")


def test_build_stores_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_stores("spreadsheet")
