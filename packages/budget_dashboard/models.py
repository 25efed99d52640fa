"""Data models for ``budget_dashboard``.

Configuration documents are validated with pydantic models; ledger records
and the period selection are frozen dataclasses so they can be shared freely
between the build step, the query layer and the renderers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

# Groups whose name starts with this marker are excluded from active totals.
EXCLUDED_GROUP_MARKER = "-"

DEFAULT_CURRENCY = "USD"


class AccountConfig(BaseModel):
    """One account: sign convention, currency, and the exports it is built from."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    type: Literal["debit", "credit"]
    currency: str = DEFAULT_CURRENCY
    files: tuple[Path, ...] = ()

    @field_validator("currency")
    @classmethod
    def _currency_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("currency must be non-empty")
        return v.upper()


class CategoryMeta(BaseModel):
    """Display metadata for a single category."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    icon: str = ""
    income: bool = False


class BudgetConfig(BaseModel):
    """Default currency plus the ordered group -> category taxonomy."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    currency: str = DEFAULT_CURRENCY
    groups: dict[str, dict[str, CategoryMeta]] = Field(default_factory=dict)

    @field_validator("currency")
    @classmethod
    def _currency_upper(cls, v: str) -> str:
        if not v:
            raise ValueError("currency must be non-empty")
        return v.upper()


class Config(BaseModel):
    """Top-level configuration document.

    Account and group ordering follows the JSON document; both orders are
    significant (ledger concatenation order and dashboard layout).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    accounts: dict[str, AccountConfig] = Field(default_factory=dict)
    budget: BudgetConfig = Field(default_factory=BudgetConfig)


# ---------------------------------------------------------------------------
# Ledger records
# ---------------------------------------------------------------------------

# Field names of the materialized ledger artifact, in serialization order.
LEDGER_FIELDS = ("Account", "Date", "Payee", "Category", "Amount")


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single normalized ledger entry.

    ``amount`` already carries the account's sign convention (negative means
    money spent). ``date`` is kept as the raw ``YYYY-MM-DD`` string from the
    export; it is compared lexically and never parsed. ``extra`` holds any
    additional export columns, in file order.
    """

    account: str
    date: str
    payee: str
    category: str
    amount: Decimal
    extra: Mapping[str, str] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "Account": self.account,
            "Date": self.date,
            "Payee": self.payee,
            "Category": self.category,
            "Amount": self.amount,
        }
        for key, value in self.extra.items():
            record.setdefault(key, value)
        return record


# ---------------------------------------------------------------------------
# View state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Period:
    """The selected year/month. Navigation returns new values."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if isinstance(self.month, bool) or not 1 <= self.month <= 12:
            raise ValueError(f"month must be within 1..12, got {self.month!r}")
        if isinstance(self.year, bool) or not 1 <= self.year <= 9999:
            raise ValueError(f"year must be within 1..9999, got {self.year!r}")

    @classmethod
    def current(cls, today: date | None = None) -> Period:
        d = today or date.today()
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, text: str) -> Period:
        """Parse ``YYYY-MM`` (a trailing ``-`` is tolerated)."""

        parts = text.strip().rstrip("-").split("-")
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"expected YYYY-MM, got {text!r}")
        return cls(int(parts[0]), int(parts[1]))

    @property
    def prefix(self) -> str:
        """Literal ``YYYY-MM-`` prefix matched against transaction dates."""

        return f"{self.year:04d}-{self.month:02d}-"

    def next(self) -> Period:
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def previous(self) -> Period:
        if self.month == 1:
            return Period(self.year - 1, 12)
        return Period(self.year, self.month - 1)

    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%B %Y")


__all__ = [
    "AccountConfig",
    "BudgetConfig",
    "CategoryMeta",
    "Config",
    "DEFAULT_CURRENCY",
    "EXCLUDED_GROUP_MARKER",
    "LEDGER_FIELDS",
    "Period",
    "Transaction",
]
