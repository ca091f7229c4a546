"""Countdown to the hemp ban effective date."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class TimeRemaining:
    days: int
    hours: int
    minutes: int
    seconds: int
    total_seconds: int

    @property
    def expired(self) -> bool:
        return self.total_seconds <= 0


def time_remaining(target: datetime, now: Optional[datetime] = None) -> TimeRemaining:
    """Time left until ``target``, always computed from the wall clock."""
    now = now or datetime.now(timezone.utc)
    total = int((target - now).total_seconds())
    if total <= 0:
        return TimeRemaining(0, 0, 0, 0, 0)

    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(days, hours, minutes, seconds, total)


def urgency(days: int) -> str:
    """'calm', 'warning' or 'critical' depending on how close the deadline is."""
    if days > 300:
        return "calm"
    if days > 100:
        return "warning"
    return "critical"


def format_countdown(remaining: TimeRemaining) -> str:
    return (
        f"{remaining.days:03d} : {remaining.hours:02d} : "
        f"{remaining.minutes:02d} : {remaining.seconds:02d}"
    )
