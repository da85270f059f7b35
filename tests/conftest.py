"""Shared pytest fixtures for harness tests."""

from __future__ import annotations

import logging

import pytest

from apiprobe.env import Settings, get_settings


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add command-line options for rate-limit stress tests."""
    parser.addoption(
        "--burst-size",
        type=int,
        default=None,
        help="Number of concurrent requests in a burst (default: BURST_SIZE or 10)",
    )


@pytest.fixture(scope="session")
def settings() -> Settings:
    """Harness settings, read once per session from the environment."""
    settings = get_settings()
    logging.getLogger("apiprobe").setLevel(settings.log_level)
    return settings


@pytest.fixture(scope="session")
def catalog_base_url(settings: Settings) -> str:
    """
    Base URL for the product catalog API used by E2E tests.

    Centralized here so helper clients don't reach into environment variables directly.
    """
    return settings.catalog_base_url


@pytest.fixture(scope="session")
def ratelimit_base_url(settings: Settings) -> str:
    """Base URL for the rate-limited API used by E2E/stress tests."""
    return settings.ratelimit_base_url


@pytest.fixture(scope="session")
def burst_size(request: pytest.FixtureRequest, settings: Settings) -> int:
    """Burst size from ``--burst-size`` if given, else from settings."""
    size = request.config.getoption("--burst-size")
    return size if size is not None else settings.burst_size
