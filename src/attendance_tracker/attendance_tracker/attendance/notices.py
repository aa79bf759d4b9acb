from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimedNotice:
    """A transient acknowledgment that stops being shown after its deadline.

    Times are clock readings in seconds (``time.monotonic`` by default).
    """

    message: str
    expires_at: float

    @classmethod
    def start(cls, message: str, *, duration_ms: int, now: float) -> "TimedNotice":
        return cls(message=message, expires_at=now + duration_ms / 1000.0)

    def is_active(self, now: float) -> bool:
        return now < self.expires_at

    def remaining_ms(self, now: float) -> int:
        return max(0, int((self.expires_at - now) * 1000))
