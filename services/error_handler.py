"""System error signaling service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from core.errors import ErrorKind

logger = logging.getLogger("wb.errors")


@dataclass(frozen=True)
class ErrorReport:
    """One signaled error condition."""

    kind: ErrorKind
    subject: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class ErrorHandler:
    """Signals error conditions to the log stream. Never raises into the caller."""

    def __init__(self) -> None:
        self.reports: list[ErrorReport] = []

    def _signal(self, kind: ErrorKind, subject: str, message: str) -> None:
        self.reports.append(ErrorReport(kind=kind, subject=subject))
        logger.error(message, subject, extra={"error_kind": kind.value})

    def application_not_available(self, name: str) -> None:
        self._signal(
            ErrorKind.APPLICATION_NOT_AVAILABLE,
            name,
            'Application "%s" is not available!',
        )

    def method_not_implemented(self, component: str) -> None:
        self._signal(
            ErrorKind.UNIMPLEMENTED_CAPABILITY,
            component,
            "%s: method not implemented!",
        )

    def reports_of(self, kind: ErrorKind) -> list[ErrorReport]:
        return [report for report in self.reports if report.kind is kind]
