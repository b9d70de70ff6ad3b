"""Gating predicates that suppress an alert before evaluation."""

from collections.abc import Callable
from datetime import date, datetime, timedelta, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from alerts.models import Alert, QuietHours
from gate.models import GateCheckResult, GateStatus


UTC = ZoneInfo("UTC")

# Returns how many times the alert with the given id fired on the given day
TriggerCounter = Callable[[str, date], int]


def to_zone(value: datetime, tz: tzinfo = UTC) -> datetime:
    """Express ``value`` in ``tz``. Naive datetimes are taken to already be in ``tz``."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def weekday_number(value: datetime) -> int:
    """Weekday with 0 = Sunday through 6 = Saturday."""
    return (value.weekday() + 1) % 7


def is_expired(alert: Alert, now: datetime, tz: tzinfo = UTC) -> bool:
    """Check if the alert's expiry time has passed."""
    if alert.expires_at is None:
        return False
    return to_zone(now, tz) > to_zone(alert.expires_at, tz)


def is_in_quiet_hours(quiet_hours: QuietHours, now: datetime, tz: tzinfo = UTC) -> bool:
    """Check if ``now`` falls inside the quiet-hours window.

    Times compare as "HH:MM" strings. A window whose start is after its end
    wraps midnight (e.g. 22:00-08:00). Day membership uses the day of ``now``.
    """
    if not quiet_hours.enabled:
        return False

    local = to_zone(now, tz)
    if weekday_number(local) not in quiet_hours.days:
        return False

    current = local.strftime("%H:%M")
    start, end = quiet_hours.start_time, quiet_hours.end_time

    if start > end:
        return current >= start or current <= end

    return start <= current <= end


def is_in_cooldown(alert: Alert, now: datetime, tz: tzinfo = UTC) -> bool:
    """Check if less than ``cooldown_minutes`` passed since the last trigger."""
    if alert.last_triggered_at is None:
        return False

    elapsed = to_zone(now, tz) - to_zone(alert.last_triggered_at, tz)
    return elapsed < timedelta(minutes=alert.frequency.cooldown_minutes)


def has_reached_daily_limit(
    alert: Alert,
    now: datetime,
    count_triggers: TriggerCounter | None = None,
    tz: tzinfo = UTC,
) -> bool:
    """Check if the alert already fired ``max_per_day`` times on the day of ``now``.

    Trigger history is owned by the caller. Without a counter the limit
    cannot be known and the check never blocks.
    """
    if count_triggers is None:
        return False

    today = to_zone(now, tz).date()
    return count_triggers(alert.id, today) >= alert.frequency.max_per_day


class AlertGate:
    """Runs the gating predicates in order for one alert."""

    def __init__(
        self,
        timezone: str = "UTC",
        count_triggers: TriggerCounter | None = None,
    ):
        """Initialize the gate.

        Args:
            timezone: Zone used for quiet hours and for naive datetimes.
            count_triggers: Trigger-history lookup for the daily limit.
        """
        self._tz = ZoneInfo(timezone)
        self._count_triggers = count_triggers

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        """Current time in the gate's timezone."""
        return datetime.now(self._tz)

    def check(self, alert: Alert, now: datetime | None = None) -> GateStatus:
        """Run expiry, quiet hours, cooldown and daily limit, stopping at the first failure.

        Args:
            alert: Alert to check.
            now: Evaluation time. Defaults to the current time.

        Returns:
            GateStatus; ``is_open`` is False if any check suppressed the alert.
        """
        if now is None:
            now = self.now()
        now = to_zone(now, self._tz)

        checks: list[GateCheckResult] = []
        for check in (
            self._check_expiry,
            self._check_quiet_hours,
            self._check_cooldown,
            self._check_daily_limit,
        ):
            result = check(alert, now)
            checks.append(result)
            if not result.passed:
                return GateStatus(timestamp=now, is_open=False, checks=checks)

        return GateStatus(timestamp=now, is_open=True, checks=checks)

    def _check_expiry(self, alert: Alert, now: datetime) -> GateCheckResult:
        data: dict[str, Any] = {
            "expires_at": alert.expires_at.isoformat() if alert.expires_at else None,
        }
        if is_expired(alert, now, self._tz):
            return GateCheckResult(
                name="expiry",
                passed=False,
                reason=f"Alert expired at {alert.expires_at.isoformat()}",
                data=data,
            )
        return GateCheckResult(name="expiry", passed=True, reason=None, data=data)

    def _check_quiet_hours(self, alert: Alert, now: datetime) -> GateCheckResult:
        quiet_hours = alert.quiet_hours
        data: dict[str, Any] = {
            "enabled": quiet_hours.enabled,
            "current_time": now.strftime("%H:%M"),
            "start_time": quiet_hours.start_time,
            "end_time": quiet_hours.end_time,
        }
        if is_in_quiet_hours(quiet_hours, now, self._tz):
            return GateCheckResult(
                name="quiet_hours",
                passed=False,
                reason=f"In quiet hours ({quiet_hours.start_time}-{quiet_hours.end_time})",
                data=data,
            )
        return GateCheckResult(name="quiet_hours", passed=True, reason=None, data=data)

    def _check_cooldown(self, alert: Alert, now: datetime) -> GateCheckResult:
        data: dict[str, Any] = {
            "cooldown_minutes": alert.frequency.cooldown_minutes,
            "last_triggered_at": alert.last_triggered_at.isoformat() if alert.last_triggered_at else None,
        }
        if is_in_cooldown(alert, now, self._tz):
            return GateCheckResult(
                name="cooldown",
                passed=False,
                reason=f"In cooldown ({alert.frequency.cooldown_minutes:g} min)",
                data=data,
            )
        return GateCheckResult(name="cooldown", passed=True, reason=None, data=data)

    def _check_daily_limit(self, alert: Alert, now: datetime) -> GateCheckResult:
        data: dict[str, Any] = {
            "max_per_day": alert.frequency.max_per_day,
            "history_available": self._count_triggers is not None,
        }
        if has_reached_daily_limit(alert, now, self._count_triggers, self._tz):
            return GateCheckResult(
                name="daily_limit",
                passed=False,
                reason=f"Daily limit reached ({alert.frequency.max_per_day} per day)",
                data=data,
            )
        return GateCheckResult(name="daily_limit", passed=True, reason=None, data=data)
