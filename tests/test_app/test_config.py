"""
Test configuration management
"""
import pytest
from pydantic import ValidationError

from intake_gateway.config import Settings, get_settings


def test_settings_singleton():
    """Test settings returns same instance"""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2


def test_settings_defaults():
    """Test default values"""
    settings = Settings(_env_file=None)
    assert settings.fastapi_env in ["development", "production", "test"]
    assert settings.fastapi_port == 8000
    assert settings.servicenow_auth_mode == "basic"
    assert settings.retry_max_attempts == 5
    assert settings.intake_source_key == "bbp"
    assert settings.resolution_close_code == "Solution provided"


def test_table_url_strips_trailing_slash():
    settings = Settings(_env_file=None, servicenow_instance="https://dev1.service-now.com/")
    assert settings.SERVICENOW_TABLE_URL == "https://dev1.service-now.com/api/now/table"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("SERVICENOW_AUTH_MODE", "api_key")

    settings = Settings(_env_file=None)

    assert settings.retry_max_attempts == 3
    assert settings.servicenow_auth_mode == "api_key"


@pytest.mark.parametrize("overrides", [
    {"retry_max_attempts": 0},
    {"retry_jitter": 1.5},
    {"retry_factor": -1},
    {"resolution_close_code": "  "},
    {"servicenow_auth_mode": "kerberos"},
])
def test_invalid_settings_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_is_production():
    assert Settings(_env_file=None, fastapi_env="production").is_production
    assert not Settings(_env_file=None, fastapi_env="test").is_production
