"""Shared fixtures for stress tests."""

from __future__ import annotations

# Reuse the E2E request contexts; stress tests hit the same live API.
from tests.e2e.conftest import (  # noqa: F401
    ratelimit_http,
    ratelimit_probe,
    require_ratelimit_api,
)
