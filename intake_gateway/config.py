"""
Support Intake Gateway - Configuration Management
"""
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from intake_gateway.models.retry import RetryPolicy


class Settings(BaseSettings):
    """Application settings"""

    # FastAPI
    fastapi_env: Literal["development", "production", "test"] = "development"
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 8000

    # ServiceNow
    servicenow_instance: str = "https://example.service-now.com"
    servicenow_user: str = ""
    servicenow_password: str = ""
    servicenow_auth_mode: Literal["basic", "oauth", "api_key"] = "basic"
    servicenow_oauth_token: str = ""
    servicenow_api_key: str = ""
    servicenow_timeout_seconds: float = 30.0
    servicenow_user_agent: str = "support-intake-gateway/1.0.0"

    # Retry policy
    retry_base_delay_seconds: float = 0.5
    retry_factor: float = 2.0
    retry_max_attempts: int = 5
    retry_jitter: float = 0.15

    # Intake
    intake_source_label: str = "BBP Support Counter"
    intake_source_key: str = "bbp"
    request_timeout_seconds: float = 60.0

    # Resolution (close code must exist in the instance's close_code choice list)
    resolution_close_code: str = "Solution provided"
    resolution_default_note: str = "Resolved via knowledge deflection."

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("servicenow_instance")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("retry_max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_max_attempts must be at least 1")
        return v

    @field_validator("retry_jitter")
    @classmethod
    def validate_jitter(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("retry_jitter must be between 0 and 1")
        return v

    @field_validator("retry_base_delay_seconds", "retry_factor")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry delays must not be negative")
        return v

    @field_validator("resolution_close_code")
    @classmethod
    def validate_close_code(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("resolution_close_code must not be empty")
        return v

    @property
    def is_production(self) -> bool:
        return self.fastapi_env == "production"

    @property
    def SERVICENOW_TABLE_URL(self) -> str:
        """Base URL of the Table API"""
        return f"{self.servicenow_instance}/api/now/table"

    @property
    def retry_policy(self) -> RetryPolicy:
        """Immutable retry policy built from the retry_* fields"""
        return RetryPolicy(
            base_delay=self.retry_base_delay_seconds,
            factor=self.retry_factor,
            max_attempts=self.retry_max_attempts,
            jitter=self.retry_jitter
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
