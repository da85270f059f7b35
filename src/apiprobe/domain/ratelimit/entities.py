"""Rate-limit snapshot parsed from response headers."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import RateLimitHeaderError

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"
USED_HEADER = "x-ratelimit-used"
RESOURCE_HEADER = "x-ratelimit-resource"

# GitHub answers 403 (not only 429) once the quota is spent.
RATE_LIMITED_STATUSES = frozenset({403, 429})
ACCEPTABLE_BURST_STATUSES = frozenset({200}) | RATE_LIMITED_STATUSES


def _int_header(
    headers: Mapping[str, str], name: str, default: Optional[int]
) -> Optional[int]:
    value = headers.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise RateLimitHeaderError(name, value) from e


def _now() -> int:
    return int(time.time())


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Quota window as described by one response.

    Attributes:
        limit: Requests allowed per window
        remaining: Requests left in the current window
        reset: Epoch seconds at which the window resets
        used: Requests consumed so far, when the API reports it
        resource: Quota bucket name, when the API reports it
    """

    limit: int
    remaining: int
    reset: int
    used: Optional[int] = None
    resource: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitSnapshot":
        """Parse the snapshot from a header mapping.

        Lookups go through ``headers.get`` so an ``httpx.Headers`` instance
        matches case-insensitively. Missing core headers read as 0.
        """
        return cls(
            limit=_int_header(headers, LIMIT_HEADER, 0),
            remaining=_int_header(headers, REMAINING_HEADER, 0),
            reset=_int_header(headers, RESET_HEADER, 0),
            used=_int_header(headers, USED_HEADER, None),
            resource=headers.get(RESOURCE_HEADER) or None,
        )

    def is_within_bounds(self) -> bool:
        return 0 <= self.remaining <= self.limit

    def seconds_until_reset(self, now: Optional[int] = None) -> int:
        return self.reset - (_now() if now is None else now)

    def resets_after(self, now: Optional[int] = None) -> bool:
        return self.seconds_until_reset(now) > 0

    def same_window(self, other: "RateLimitSnapshot") -> bool:
        return self.reset == other.reset


@dataclass(frozen=True)
class RateLimitObservation:
    """One response status paired with its rate-limit snapshot."""

    status_code: int
    snapshot: RateLimitSnapshot

    @property
    def rate_limited(self) -> bool:
        return self.status_code in RATE_LIMITED_STATUSES
