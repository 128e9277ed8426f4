"""Exception hierarchy for reportmux."""

from __future__ import annotations


class ReportmuxError(Exception):
    """Base exception for all reportmux errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(ReportmuxError):
    """Configuration validation or asset resolution failed."""


class ResultError(ReportmuxError):
    """A Result document is malformed."""


class PreconditionError(ReportmuxError):
    """A required category, group, element, or collaborator output is missing.

    These are never retried: the enclosing bundle or build is aborted.
    """


class AuditRunError(ReportmuxError):
    """The audit-only executor failed to produce a Result.

    Carries the executor's exit status and captured stderr so callers can
    surface them without re-running.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode = returncode
        self.stderr = stderr
