from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Type
from types import TracebackType
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from ...domain.errors import (
    ClientAlreadyInitializedError,
    ClientNotInitializedError,
    InvalidBaseURLError,
    UnexpectedStatusError,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "apiprobe/0.1.0"
DEFAULT_TIMEOUT = 10.0


def _validate_base_url(base_url: str) -> str:
    parsed = urlparse(base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InvalidBaseURLError(
            f"Base URL must be an absolute http(s) URL, got {base_url!r}"
        )
    return base_url


def _merge_headers(
    user_agent: str, headers: Optional[Mapping[str, str]]
) -> Dict[str, str]:
    merged = {"User-Agent": user_agent}
    merged.update(headers or {})
    return merged


def _body_kwargs(data: Any) -> Dict[str, Any]:
    """Map an optional request body onto the matching httpx keyword."""
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return {"json": data.model_dump(mode="json")}
    if isinstance(data, (str, bytes)):
        return {"content": data}
    return {"json": data}


def _log_response(resp: httpx.Response, elapsed_ms: float) -> None:
    logger.debug(
        "%s %s -> %d (%.0f ms)",
        resp.request.method,
        resp.request.url,
        resp.status_code,
        elapsed_ms,
    )


def _require_ok(resp: httpx.Response) -> httpx.Response:
    # Exactly 200; redirects and other 2xx codes fail the caller.
    if resp.status_code != 200:
        logger.warning(
            "Strict GET %s returned %d", resp.request.url, resp.status_code
        )
        raise UnexpectedStatusError(resp, expected=200)
    return resp


class HttpClient:
    """Thin synchronous request context around httpx.

    - Binds a base URL and default headers once, via ``init``.
    - ``get`` fails the caller unless the status is exactly 200;
      every other verb leaves status inspection to the caller.
    - Usable as a context manager so the context is always released.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._closed = False

    def init(
        self, base_url: str, headers: Optional[Mapping[str, str]] = None
    ) -> "HttpClient":
        if self._closed:
            raise ClientAlreadyInitializedError(
                "HttpClient has been closed; create a new client instead"
            )
        if self._client is not None:
            raise ClientAlreadyInitializedError(
                "HttpClient context is already bound; create a new client instead"
            )
        self._client = httpx.Client(
            base_url=_validate_base_url(base_url),
            headers=_merge_headers(self._user_agent, headers),
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    @property
    def context(self) -> httpx.Client:
        if self._client is None:
            raise ClientNotInitializedError("HttpClient.init() has not been called")
        return self._client

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        start = time.perf_counter()
        resp = self.context.request(method, path, **kwargs)
        _log_response(resp, (time.perf_counter() - start) * 1000)
        return resp

    def get(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> httpx.Response:
        return _require_ok(self._send("GET", path, params=params))

    def get_raw(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> httpx.Response:
        return self._send("GET", path, params=params)

    def post(self, path: str, data: Any = None) -> httpx.Response:
        return self._send("POST", path, **_body_kwargs(data))

    def put(self, path: str, data: Any = None) -> httpx.Response:
        return self._send("PUT", path, **_body_kwargs(data))

    def patch(self, path: str, data: Any = None) -> httpx.Response:
        return self._send("PATCH", path, **_body_kwargs(data))

    def delete(self, path: str) -> httpx.Response:
        return self._send("DELETE", path)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
        self._closed = True

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


class AsyncHttpClient:
    """Thin asynchronous request context around httpx.AsyncClient.

    Same contract as ``HttpClient``. One initialized instance may serve
    many concurrent requests; the context is never mutated after ``init``.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._closed = False

    def init(
        self, base_url: str, headers: Optional[Mapping[str, str]] = None
    ) -> "AsyncHttpClient":
        if self._closed:
            raise ClientAlreadyInitializedError(
                "AsyncHttpClient has been closed; create a new client instead"
            )
        if self._client is not None:
            raise ClientAlreadyInitializedError(
                "AsyncHttpClient context is already bound; create a new client instead"
            )
        self._client = httpx.AsyncClient(
            base_url=_validate_base_url(base_url),
            headers=_merge_headers(self._user_agent, headers),
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    @property
    def context(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ClientNotInitializedError(
                "AsyncHttpClient.init() has not been called"
            )
        return self._client

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        start = time.perf_counter()
        resp = await self.context.request(method, path, **kwargs)
        _log_response(resp, (time.perf_counter() - start) * 1000)
        return resp

    async def get(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> httpx.Response:
        return _require_ok(await self._send("GET", path, params=params))

    async def get_raw(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> httpx.Response:
        return await self._send("GET", path, params=params)

    async def post(self, path: str, data: Any = None) -> httpx.Response:
        return await self._send("POST", path, **_body_kwargs(data))

    async def put(self, path: str, data: Any = None) -> httpx.Response:
        return await self._send("PUT", path, **_body_kwargs(data))

    async def patch(self, path: str, data: Any = None) -> httpx.Response:
        return await self._send("PATCH", path, **_body_kwargs(data))

    async def delete(self, path: str) -> httpx.Response:
        return await self._send("DELETE", path)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._closed = True

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
