"""Per-invocation wall-clock budgets."""

import time
from typing import Any, Callable, Optional

from modules.org_directory.errors import InvocationTimeoutError


class Deadline:
    """A point in time after which the current invocation must give up.

    Args:
        seconds: Budget from now; None means unbounded
        clock: Monotonic clock, injectable for tests
    """

    def __init__(
        self,
        seconds: Optional[float],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._expires_at = None if seconds is None else clock() + seconds

    @classmethod
    def for_invocation(cls, budget_seconds: float, context: Any = None) -> "Deadline":
        """Budget bounded by both the configured value and the Lambda context.

        A small safety margin is kept so the handler can still report before
        the runtime kills it.
        """
        seconds = float(budget_seconds)
        remaining_ms = getattr(context, "get_remaining_time_in_millis", None)
        if callable(remaining_ms):
            seconds = min(seconds, max(remaining_ms() / 1000.0 - 1.0, 0.0))
        return cls(seconds)

    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return max(self._expires_at - self._clock(), 0.0)

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at

    def check(self, stage: str) -> None:
        """Raise InvocationTimeoutError if the budget is spent."""
        if self.expired:
            raise InvocationTimeoutError(f"invocation budget exhausted during {stage}")
