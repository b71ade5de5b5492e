"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Service endpoints come from the environment, never hard-coded per deployment
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BACKEND_URL = "https://smart-disease-predictor-backend.onrender.com"


class ServiceConfig(BaseModel):
    """Endpoints and limits for the extraction and prediction services."""

    backend_url: str = Field(
        default=DEFAULT_BACKEND_URL, description="Base URL serving /extract and /predict"
    )
    extract_timeout_seconds: float = Field(
        default=10.0, gt=0.0, description="Timeout for document extraction requests"
    )
    predict_timeout_seconds: float = Field(
        default=30.0, gt=0.0, description="Timeout for prediction requests"
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, gt=0, description="Largest document accepted for extraction"
    )

    @field_validator("backend_url")
    def validate_backend_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("backend URL must start with http:// or https://")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    service: ServiceConfig
    logging: LoggingConfig

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    # Service endpoints with environment overrides
    service_config = ServiceConfig(
        backend_url=os.getenv("BACKEND_URL", DEFAULT_BACKEND_URL),
        extract_timeout_seconds=float(os.getenv("EXTRACT_TIMEOUT_SECONDS", "10.0")),
        predict_timeout_seconds=float(os.getenv("PREDICT_TIMEOUT_SECONDS", "30.0")),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
    )

    # Logging config
    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    # Application config
    return AppConfig(
        environment=environment,
        debug=debug,
        service=service_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


# Configuration validation and helpers
def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"✅ Configuration loaded for {config.environment} environment")
        print(f"✅ Backend URL: {config.service.backend_url}")

    except Exception as e:
        print(f"❌ Configuration validation failed: {e}")
        raise


# Development helpers
def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\n🔧 CONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")

    print("\n🌐 SERVICE CONFIGURATION")
    print(f"Backend: {config.service.backend_url}")
    print(f"Extract Timeout: {config.service.extract_timeout_seconds}s")
    print(f"Predict Timeout: {config.service.predict_timeout_seconds}s")
    print(f"Max Upload: {config.service.max_upload_bytes} bytes")


if __name__ == "__main__":
    # Test configuration loading
    validate_config()
    print_config_summary()
