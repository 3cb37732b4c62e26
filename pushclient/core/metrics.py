"""Counters describing registration attempts and delivered notifications."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class PushMetrics:
    registrations: int = 0
    registration_failures: int = 0
    last_registration_ms: Optional[int] = None
    notifications: int = 0

    def registration_finished(self, *, ok: bool, duration_ms: int) -> None:
        self.registrations += 1
        if not ok:
            self.registration_failures += 1
        self.last_registration_ms = duration_ms

    def notification_processed(self) -> None:
        self.notifications += 1

    def snapshot(self) -> dict:
        return asdict(self)
