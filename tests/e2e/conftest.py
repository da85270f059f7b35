"""Shared pytest fixtures for E2E tests against the live remote APIs."""

from __future__ import annotations

from collections.abc import Generator
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from apiprobe.env import Settings
from apiprobe.infrastructure.catalog.catalog_client import CatalogClient
from apiprobe.infrastructure.http.http_client import AsyncHttpClient, HttpClient
from apiprobe.infrastructure.ratelimit.probe import RateLimitProbe


def is_reachable(url: str, timeout: float = 5.0) -> bool:
    """Return True when the host answers at all (any HTTP status)."""
    try:
        with httpx.Client(timeout=timeout) as client:
            client.get(url)
        return True
    except (httpx.RequestError, httpx.TimeoutException):
        return False


@pytest.fixture(scope="session")
def require_catalog(catalog_base_url: str) -> None:
    """Skip catalog scenarios when the catalog API cannot be reached."""
    if not is_reachable(catalog_base_url):
        pytest.skip(f"Catalog API not reachable at {catalog_base_url}")


@pytest.fixture(scope="session")
def require_ratelimit_api(ratelimit_base_url: str) -> None:
    """Skip rate-limit scenarios when the rate-limited API cannot be reached."""
    if not is_reachable(ratelimit_base_url):
        pytest.skip(f"Rate-limited API not reachable at {ratelimit_base_url}")


@pytest.fixture(scope="module")
def catalog_http(
    require_catalog: None,  # pytest fixture
    settings: Settings,
) -> Generator[HttpClient, None, None]:
    """
    Module-scoped request context for the catalog.

    Shared across the scenarios of one module on purpose: the catalog is
    stateless for reads, so reusing the connection is safe. Released when
    the module finishes, whether its tests passed or failed.
    """
    with HttpClient(settings.http_timeout, user_agent=settings.user_agent).init(
        settings.catalog_base_url
    ) as client:
        yield client


@pytest.fixture(scope="module")
def catalog_client(catalog_http: HttpClient) -> CatalogClient:
    """Provide a CatalogClient over the shared catalog context."""
    return CatalogClient(catalog_http)


@pytest_asyncio.fixture
async def ratelimit_http(
    require_ratelimit_api: None,  # pytest fixture
    settings: Settings,
) -> AsyncGenerator[AsyncHttpClient, None]:
    """
    Fresh request context for the rate-limited API, per test.

    Each scenario gets its own context so one test's connection state
    never leaks into the next. The remote quota itself is still shared.
    """
    async with AsyncHttpClient(
        settings.http_timeout, user_agent=settings.user_agent
    ).init(settings.ratelimit_base_url, settings.ratelimit_headers()) as client:
        yield client


@pytest.fixture
def ratelimit_probe(ratelimit_http: AsyncHttpClient) -> RateLimitProbe:
    """Provide a RateLimitProbe over the per-test context."""
    return RateLimitProbe(ratelimit_http)
