"""Delay between failed development push checks."""
from __future__ import annotations

from dataclasses import dataclass, field
import random

# factor ** 32 is far past any useful cap
_MAX_EXPONENT = 32


@dataclass
class Backoff:
    base_delay: float = 5.0
    factor: float = 2.0
    max_delay: float = 60.0
    jitter: float = 0.1
    failures: int = field(default=0, init=False)

    def reset(self) -> None:
        self.failures = 0

    def next_delay(self) -> float:
        """Return the wait after one more failed check, capped at ``max_delay``."""

        delay = min(self.max_delay, self.base_delay * self.factor ** min(self.failures, _MAX_EXPONENT))
        self.failures += 1
        if self.jitter:
            delay += delay * self.jitter * random.uniform(-1.0, 1.0)
        return max(0.0, delay)
