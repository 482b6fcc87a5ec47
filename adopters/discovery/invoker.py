"""Rate-limit aware invocation of single provider calls."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .errors import RateLimited, Throttled

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compute_wait(error: Exception, now: float) -> float:
    """Seconds to block before repeating a call that failed with ``error``."""
    if isinstance(error, RateLimited):
        return max(0.0, error.reset_at - now)
    if isinstance(error, Throttled):
        return max(0.0, error.retry_after)
    raise TypeError(f"not a rate-limit error: {error!r}")


@dataclass(frozen=True)
class RetryPolicy:
    """How rate-limited calls are repeated.

    ``max_attempts=None`` retries forever, which is what a batch run wants:
    GitHub always tells us when the quota resets.
    """

    max_attempts: Optional[int] = None
    backoff: Callable[[Exception, float], float] = compute_wait

    def allows(self, attempt: int) -> bool:
        return self.max_attempts is None or attempt < self.max_attempts


class RateLimitInvoker:
    """Run a zero-argument provider call, sleeping through rate limits.

    Any error other than :class:`RateLimited` or :class:`Throttled` is
    propagated unchanged on the first occurrence.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self.clock = clock
        self.sleep = sleep

    def invoke(self, thunk: Callable[[], T]) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return thunk()
            except (RateLimited, Throttled) as exc:
                if not self.policy.allows(attempt):
                    raise
                wait = self.policy.backoff(exc, self.clock())
                if isinstance(exc, RateLimited):
                    logger.warning("[rate-limit] quota exhausted, sleeping %.0fs", wait)
                else:
                    logger.warning("[rate-limit] secondary limit hit, sleeping %.0fs", wait)
                self.sleep(wait)

    __call__ = invoke


__all__ = ["RateLimitInvoker", "RetryPolicy", "compute_wait"]
