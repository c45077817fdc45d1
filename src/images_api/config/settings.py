# src/images_api/config/settings.py
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "aws-mock", "aws-prod"]
LOCAL_MODES = ["local-dev", "aws-mock"]

DEFAULT_CORS_ALLOWED_ORIGINS = [
    "http://localhost:8080",
    "https://localhost:8080",
    "http://localhost:3000",
    "https://localhost:3000",
]


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from images_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="images-api",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="tprofiletest",
        description="S3 bucket that receives uploaded images"
    )

    # HTTP Surface
    api_prefix: str = Field(
        default="/api/files",
        description="Route prefix for the upload and health endpoints"
    )

    cors_allowed_origins: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ALLOWED_ORIGINS),
        description="Origins allowed to call the API (JSON list in the environment)"
    )

    show_detailed_errors: bool = Field(
        default=False,
        description="Echo internal error messages back to API clients"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local-mock": "local-dev",
                "cloud": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator('api_prefix')
    @classmethod
    def normalize_api_prefix(cls, v):
        """Ensure the prefix starts with a slash and has no trailing slash."""
        v = "/" + v.strip("/")
        return "" if v == "/" else v

    @model_validator(mode='after')
    def apply_local_mode_defaults(self) -> "Settings":
        """Point local modes at a moto server with mock credentials unless told otherwise."""
        if self.deployment_mode in LOCAL_MODES:
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = "http://localhost:5000"
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        return self

    def get_environment_dict(self) -> Dict[str, Any]:
        """Get configuration as a dictionary, with secrets masked, for display."""
        return {
            'APP_NAME': self.app_name,
            'DEPLOYMENT_MODE': self.deployment_mode,
            'AWS_DEFAULT_REGION': self.aws_region,
            'AWS_ENDPOINT_URL': self.aws_endpoint_url or '',
            'AWS_ACCESS_KEY_ID': _mask(self.aws_access_key_id),
            'AWS_SECRET_ACCESS_KEY': _mask(self.aws_secret_access_key),
            'S3_BUCKET_NAME': self.s3_bucket_name,
            'API_PREFIX': self.api_prefix,
            'CORS_ALLOWED_ORIGINS': ",".join(self.cors_allowed_origins),
            'SHOW_DETAILED_ERRORS': str(self.show_detailed_errors).lower(),
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


def _mask(secret: Optional[str]) -> str:
    if not secret:
        return ''
    return secret[:2] + '*' * max(len(secret) - 2, 0)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
