"""Data models for the alert gate."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class GateCheckResult:
    """Result of a single gate check.

    Attributes:
        name: Check identifier ("expiry", "quiet_hours", "cooldown", "daily_limit").
        passed: Whether the check passed, i.e. does not suppress the alert.
        reason: Explanation if check failed, None if passed.
        data: Observed data values used in the check.
    """

    name: str
    passed: bool
    reason: str | None
    data: dict[str, Any]


@dataclass
class GateStatus:
    """Combined result of the gate checks for one alert.

    Checks run in order and stop at the first failure, so ``checks`` holds
    every passed check plus at most one failed check at the end.

    Attributes:
        timestamp: Evaluation time the checks used.
        is_open: Whether all checks passed and the alert may be evaluated.
        checks: Individual check results in the order they ran.
    """

    timestamp: datetime
    is_open: bool
    checks: list[GateCheckResult]

    def get_failed_checks(self) -> list[GateCheckResult]:
        """Return checks that did not pass.

        Returns:
            List of GateCheckResult where passed is False.
        """
        return [check for check in self.checks if not check.passed]

    @property
    def blocking_check(self) -> GateCheckResult | None:
        """The check that closed the gate, if any."""
        failed = self.get_failed_checks()
        return failed[0] if failed else None
