"""Period-scoped queries over the ledger.

Every function here is pure: it reads the transaction sequence, the
configuration and the taxonomy, and the period prefix is always passed in by
the caller. Dates are matched with a literal ``str.startswith`` on the
``YYYY-MM-`` prefix, which relies on zero-padded ISO dates.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from .models import AccountConfig, Config, Transaction
from .taxonomy import Taxonomy, display_group_name, is_excluded_group

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    category: str
    icon: str
    total: Decimal
    excluded: bool
    income: bool

    @property
    def active(self) -> bool:
        """False when nothing was booked to the category in the period."""

        return self.total != 0


@dataclass(frozen=True, slots=True)
class GroupSummary:
    group: str
    label: str
    excluded: bool
    categories: tuple[CategoryTotal, ...]

    @property
    def total(self) -> Decimal:
        return sum((c.total for c in self.categories), ZERO)


@dataclass(frozen=True, slots=True)
class PeriodSummary:
    """Income and spending over non-excluded transactions of one period."""

    income: Decimal
    spending: Decimal

    @property
    def net(self) -> Decimal:
        return self.income + self.spending


def period_total(
    transactions: Iterable[Transaction], category: str, period_prefix: str
) -> Decimal:
    """Sum of ``amount`` for ``category`` within the period; ``0`` when empty."""

    return sum(
        (
            tx.amount
            for tx in transactions
            if tx.category == category and tx.date.startswith(period_prefix)
        ),
        ZERO,
    )


def account_of(config: Config, account_name: str) -> AccountConfig | None:
    """Configured account, or ``None`` when it is no longer configured."""

    return config.accounts.get(account_name)


def currency_of(config: Config, account_name: str) -> str:
    """Account currency, falling back to the budget currency for unknown accounts."""

    account = account_of(config, account_name)
    return account.currency if account is not None else config.budget.currency


def transactions_in_period(
    transactions: Iterable[Transaction], period_prefix: str
) -> list[Transaction]:
    return [tx for tx in transactions if tx.date.startswith(period_prefix)]


def transactions_by_date(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """Group by date string, newest date first; ledger order within a date."""

    by_date: dict[str, list[Transaction]] = defaultdict(list)
    for tx in transactions:
        by_date[tx.date].append(tx)
    return {d: by_date[d] for d in sorted(by_date, reverse=True)}


def _totals_by_category(
    transactions: Iterable[Transaction], period_prefix: str
) -> dict[str, Decimal]:
    # One pass instead of one period_total() scan per category.
    totals: dict[str, Decimal] = {}
    for tx in transactions:
        if tx.date.startswith(period_prefix):
            totals[tx.category] = totals.get(tx.category, ZERO) + tx.amount
    return totals


def group_summaries(
    transactions: Sequence[Transaction], taxonomy: Taxonomy, period_prefix: str
) -> list[GroupSummary]:
    """Per-group category totals in taxonomy order, zero totals included."""

    totals = _totals_by_category(transactions, period_prefix)
    out: list[GroupSummary] = []
    for group in taxonomy.groups():
        excluded = is_excluded_group(group)
        cats = tuple(
            CategoryTotal(
                category=c,
                icon=taxonomy.icon(c),
                total=totals.get(c, ZERO),
                excluded=excluded,
                income=taxonomy.is_income(c),
            )
            for c in taxonomy.categories(group)
        )
        out.append(
            GroupSummary(
                group=group,
                label=display_group_name(group),
                excluded=excluded,
                categories=cats,
            )
        )
    return out


def uncategorized_totals(
    transactions: Sequence[Transaction], taxonomy: Taxonomy, period_prefix: str
) -> list[CategoryTotal]:
    """Totals for categories seen in the period but absent from the taxonomy."""

    totals = _totals_by_category(transactions, period_prefix)
    return [
        CategoryTotal(
            category=c,
            icon=taxonomy.icon(c),
            total=total,
            excluded=False,
            income=False,
        )
        for c, total in totals.items()
        if c not in taxonomy
    ]


def period_summary(
    transactions: Iterable[Transaction], taxonomy: Taxonomy, period_prefix: str
) -> PeriodSummary:
    """Split active period activity into income and spending.

    Excluded categories are ignored. Transactions in income categories count
    as income; everything else counts as spending, so refunds in a spending
    category reduce spending rather than adding to income.
    """

    income = ZERO
    spending = ZERO
    for tx in transactions:
        if not tx.date.startswith(period_prefix) or taxonomy.is_excluded(tx.category):
            continue
        if taxonomy.is_income(tx.category):
            income += tx.amount
        else:
            spending += tx.amount
    return PeriodSummary(income=income, spending=spending)


def period_summary_by_currency(
    transactions: Iterable[Transaction],
    taxonomy: Taxonomy,
    config: Config,
    period_prefix: str,
) -> dict[str, PeriodSummary]:
    """:func:`period_summary` split by account currency; amounts are never converted.

    The budget currency always comes first, even with no activity; other
    currencies with activity in the period follow in ledger order.
    """

    by_currency: dict[str, list[Transaction]] = {config.budget.currency: []}
    for tx in transactions_in_period(transactions, period_prefix):
        by_currency.setdefault(currency_of(config, tx.account), []).append(tx)
    return {
        cur: period_summary(txs, taxonomy, period_prefix) for cur, txs in by_currency.items()
    }


__all__ = [
    "CategoryTotal",
    "GroupSummary",
    "PeriodSummary",
    "account_of",
    "currency_of",
    "group_summaries",
    "period_summary",
    "period_summary_by_currency",
    "period_total",
    "transactions_by_date",
    "transactions_in_period",
    "uncategorized_totals",
]
