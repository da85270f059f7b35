from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from ...domain.ratelimit.entities import RateLimitObservation, RateLimitSnapshot
from ..http.http_client import AsyncHttpClient

logger = logging.getLogger(__name__)


class RateLimitProbe:
    """Observes a remote API's rate-limit headers.

    The probe only reads the headers a third party reports; it never
    throttles or retries on its own.
    """

    def __init__(self, http: AsyncHttpClient, path: str = "/") -> None:
        self._http = http
        self._path = path

    async def observe(self) -> RateLimitObservation:
        resp = await self._http.get_raw(self._path)
        return RateLimitObservation(
            status_code=resp.status_code,
            snapshot=RateLimitSnapshot.from_headers(resp.headers),
        )

    async def sample(self, count: int, delay: float = 0.0) -> List[RateLimitObservation]:
        """Issue ``count`` sequential requests, sleeping ``delay`` between them."""
        observations: List[RateLimitObservation] = []
        for i in range(count):
            if i and delay > 0:
                await asyncio.sleep(delay)
            observations.append(await self.observe())
        return observations

    async def burst(self, size: int) -> List[RateLimitObservation]:
        """Issue ``size`` requests concurrently and wait for all of them.

        Results are returned in issue order, not arrival order.
        """
        logger.info("Sending burst of %d requests to %s", size, self._path)
        observations = await asyncio.gather(*[self.observe() for _ in range(size)])
        limited = sum(1 for o in observations if o.rate_limited)
        logger.info("%d out of %d burst requests were rate limited", limited, size)
        return list(observations)

    async def wait_for_reset(
        self, initial: RateLimitSnapshot, max_wait: float
    ) -> Optional[RateLimitObservation]:
        """Sleep past the window reset and observe again.

        Returns None without sleeping when the reset is already past or
        further away than ``max_wait`` seconds.
        """
        until_reset = initial.seconds_until_reset()
        if until_reset <= 0 or until_reset > max_wait:
            logger.info(
                "Reset is %ds away (max wait %.0fs), not waiting",
                until_reset,
                max_wait,
            )
            return None
        logger.info("Waiting %ds for rate limit reset", until_reset + 1)
        await asyncio.sleep(until_reset + 1)
        return await self.observe()
