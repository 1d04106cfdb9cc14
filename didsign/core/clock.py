"""
Timestamp sources for signature records.

Signing stamps wall-clock milliseconds; tests pin time with FixedClock so
payloads are reproducible.
"""

import time
from dataclasses import dataclass


class SystemClock:
    """Wall-clock time source (milliseconds since the Unix epoch)."""

    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class FixedClock:
    """
    Pinned time source.

    Since FixedClock is immutable, tick() returns a new instance.
    """
    current: int = 0

    def now_millis(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    def tick(self, step: int = 1) -> "FixedClock":
        return FixedClock(self.current + step)
