"""Absolute deadline shared by every outbound call of one operation."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Deadline:
    """Monotonic-clock expiry bounding the total time of one invocation."""

    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, compare=False, repr=False)

    @classmethod
    def after(
        cls,
        seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> Deadline:
        """Return a deadline expiring `seconds` from now."""

        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> float:
        """Return seconds left before expiry, never negative."""

        return max(0.0, self.expires_at - self.clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0
