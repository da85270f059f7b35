from __future__ import annotations

import logging
import os
from typing import Dict, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator

from .infrastructure.http.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


def _validate_http_url(v: str, label: str) -> str:
    if not v:
        raise ValueError(f"{label} cannot be empty")
    parsed = urlparse(v)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"{label} must start with http:// or https://")
    if not parsed.netloc:
        raise ValueError(f"{label} must include a host")
    return v


class Settings(BaseModel):
    """Typed harness settings built from environment variables."""

    # Remote APIs under test
    catalog_base_url: str = "https://fakestoreapi.com/"
    ratelimit_base_url: str = "https://api.github.com"
    ratelimit_token: Optional[str] = None

    # HTTP settings
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = DEFAULT_TIMEOUT

    # Scenario tuning
    response_time_budget_ms: int = 2000
    burst_size: int = 10
    sample_delay_seconds: float = 0.2
    reset_wait_max_seconds: float = 10.0

    log_level: str = "INFO"

    @field_validator("catalog_base_url")
    @classmethod
    def validate_catalog_base_url(cls, v: str) -> str:
        return _validate_http_url(v, "Catalog base URL")

    @field_validator("ratelimit_base_url")
    @classmethod
    def validate_ratelimit_base_url(cls, v: str) -> str:
        return _validate_http_url(v, "Rate-limit base URL")

    @field_validator(
        "http_timeout", "response_time_budget_ms", "burst_size", "reset_wait_max_seconds"
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("sample_delay_seconds")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def ratelimit_headers(self) -> Dict[str, str]:
        """Default headers for the rate-limited API."""
        headers = {"Accept": "application/vnd.github+json"}
        if self.ratelimit_token:
            headers["Authorization"] = f"Bearer {self.ratelimit_token}"
        return headers


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        catalog_base_url=os.environ.get("CATALOG_BASE_URL", "https://fakestoreapi.com/"),
        ratelimit_base_url=os.environ.get("RATELIMIT_BASE_URL", "https://api.github.com"),
        ratelimit_token=os.environ.get("RATELIMIT_TOKEN") or None,
        user_agent=os.environ.get("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        http_timeout=float(os.environ.get("HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))),
        response_time_budget_ms=int(os.environ.get("RESPONSE_TIME_BUDGET_MS", "2000")),
        burst_size=int(os.environ.get("BURST_SIZE", "10")),
        sample_delay_seconds=float(os.environ.get("SAMPLE_DELAY_SECONDS", "0.2")),
        reset_wait_max_seconds=float(os.environ.get("RESET_WAIT_MAX_SECONDS", "10")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
