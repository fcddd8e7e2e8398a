"""Recoverable-error ledger for pipeline runs."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Deque, Dict, List, Optional

from .logging import get_logger, level_for_severity

SEVERITIES = ("low", "medium", "high", "critical")

_RECOVERABLE_TYPES = (OSError, UnicodeDecodeError, SyntaxError, ValueError, TimeoutError)
_RECOVERABLE_MESSAGES = re.compile(
    r"ENOENT|no such file|permission denied|syntax error|parse error|timed? ?out",
    re.IGNORECASE,
)


class ComponentNotFoundError(LookupError):
    """Raised when a query names a component that was not discovered."""


@dataclass
class ErrorReport:
    """One failure observed while scanning or analyzing."""

    error: BaseException
    operation: str
    severity: str
    recoverable: bool
    file_path: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


class ErrorTracker:
    """Keeps the most recent failures and logs them at a severity-mapped level."""

    def __init__(self, max_errors: int = 100) -> None:
        self._reports: Deque[ErrorReport] = deque(maxlen=max_errors)
        self._logger = get_logger("errors")

    def record(
        self,
        error: BaseException,
        operation: str,
        *,
        file_path: str | None = None,
        severity: str = "medium",
    ) -> ErrorReport:
        """Store and log ``error``; critical unrecoverable errors are re-raised."""
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity}")
        report = ErrorReport(
            error=error,
            operation=operation,
            severity=severity,
            recoverable=self._is_recoverable(error, severity),
            file_path=file_path,
        )
        self._reports.append(report)

        location = f" ({file_path})" if file_path else ""
        self._logger.log(
            level_for_severity(severity),
            "[%s] %s%s: %s",
            severity.upper(),
            operation,
            location,
            report.message,
        )

        if severity == "critical" and not report.recoverable:
            raise error
        return report

    def reports(self, severity: str | None = None) -> List[ErrorReport]:
        if severity is None:
            return list(self._reports)
        return [report for report in self._reports if report.severity == severity]

    def has_errors(self, severity: str | None = None) -> bool:
        return bool(self.reports(severity))

    def summary(self) -> Dict[str, int]:
        counts: Dict[str, int] = {"total": len(self._reports)}
        counts.update({severity: 0 for severity in SEVERITIES})
        counts["recoverable"] = 0
        counts["unrecoverable"] = 0
        for report in self._reports:
            counts[report.severity] += 1
            counts["recoverable" if report.recoverable else "unrecoverable"] += 1
        return counts

    def clear(self) -> None:
        self._reports.clear()

    @staticmethod
    def _is_recoverable(error: BaseException, severity: str) -> bool:
        if severity == "critical":
            return False
        if isinstance(error, _RECOVERABLE_TYPES):
            return True
        return bool(_RECOVERABLE_MESSAGES.search(str(error)))


__all__ = ["ComponentNotFoundError", "ErrorReport", "ErrorTracker", "SEVERITIES"]
