"""Exception hierarchy for ``budget_dashboard``.

Library code raises these; only the CLI converts them into exit codes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class BudgetDashboardError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(BudgetDashboardError):
    """The configuration document is missing, unreadable, or invalid."""


class IngestError(BudgetDashboardError):
    """The build step could not produce a complete ledger.

    ``failures`` holds the per-file errors when several files failed.
    """

    def __init__(self, message: str, failures: Sequence[Exception] = ()) -> None:
        super().__init__(message)
        self.failures = tuple(failures)


class MissingSourceError(IngestError):
    """A configured source file does not exist or is not a regular file."""

    def __init__(self, account: str, path: Path) -> None:
        super().__init__(f"account {account!r}: source file not found: {path}")
        self.account = account
        self.path = path


class ParseError(IngestError):
    """A source file could not be parsed (bad header or non-numeric amount)."""

    def __init__(self, path: Path, message: str, *, line: int | None = None) -> None:
        where = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"{where}: {message}")
        self.path = path
        self.line = line


class LedgerError(BudgetDashboardError):
    """The materialized ledger artifact is missing or malformed."""


__all__ = [
    "BudgetDashboardError",
    "ConfigError",
    "IngestError",
    "LedgerError",
    "MissingSourceError",
    "ParseError",
]
