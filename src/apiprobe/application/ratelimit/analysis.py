"""Pure functions over ordered sequences of rate-limit snapshots.

Pairs are only compared when both snapshots belong to the same reset
window; a reset between two requests legitimately restores the quota.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ...domain.ratelimit.entities import RateLimitObservation, RateLimitSnapshot


def _same_window_pairs(
    snapshots: Sequence[RateLimitSnapshot],
) -> List[Tuple[RateLimitSnapshot, RateLimitSnapshot]]:
    return [
        (prev, current)
        for prev, current in zip(snapshots, snapshots[1:])
        if prev.same_window(current)
    ]


def limits_consistent(snapshots: Sequence[RateLimitSnapshot]) -> bool:
    return len({s.limit for s in snapshots}) <= 1


def remaining_non_increasing(snapshots: Sequence[RateLimitSnapshot]) -> bool:
    return all(
        current.remaining <= prev.remaining
        for prev, current in _same_window_pairs(snapshots)
    )


def decreases(snapshots: Sequence[RateLimitSnapshot]) -> List[int]:
    """Per-pair drop in ``remaining`` for consecutive same-window snapshots."""
    return [
        prev.remaining - current.remaining
        for prev, current in _same_window_pairs(snapshots)
    ]


def total_decrease(snapshots: Sequence[RateLimitSnapshot]) -> int:
    return sum(d for d in decreases(snapshots) if d > 0)


def max_decrease(snapshots: Sequence[RateLimitSnapshot]) -> int:
    return max([0, *decreases(snapshots)])


def is_counting(snapshots: Sequence[RateLimitSnapshot]) -> bool:
    """True when at least one request visibly consumed quota."""
    return any(d > 0 for d in decreases(snapshots))


def reset_drift(first: RateLimitSnapshot, second: RateLimitSnapshot) -> int:
    return abs(second.reset - first.reset)


def count_rate_limited(observations: Iterable[RateLimitObservation]) -> int:
    return sum(1 for o in observations if o.rate_limited)
