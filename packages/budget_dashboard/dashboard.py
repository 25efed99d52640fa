"""Terminal rendering of the budget dashboard (rich).

Rendering only consumes the query layer in :mod:`budget_dashboard.aggregate`
and :mod:`budget_dashboard.taxonomy`; all formatting (currency, dates,
payees) lives here.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .aggregate import (
    CategoryTotal,
    currency_of,
    group_summaries,
    period_summary_by_currency,
    transactions_by_date,
    transactions_in_period,
    uncategorized_totals,
)
from .models import Config, Period, Transaction
from .taxonomy import Taxonomy

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def display_payee(payee: str) -> str:
    """Lowercase, replace non-alphanumerics with spaces, then capitalize words."""

    cleaned = _NON_ALNUM_RE.sub(" ", payee.lower())
    return " ".join(w.capitalize() for w in cleaned.split())


def display_date(value: str) -> str:
    try:
        d = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return value
    return f"{d:%B} {d.day}, {d.year}"


def format_amount(amount: Decimal, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


def _amount_style(amount: Decimal) -> str:
    if amount > 0:
        return "green"
    if amount < 0:
        return "red"
    return "dim"


def _category_row(table: Table, item: CategoryTotal, currency: str) -> None:
    dim = item.excluded or not item.active
    table.add_row(
        Text(item.icon),
        Text(item.category + (" (income)" if item.income else "")),
        Text(format_amount(item.total, currency), style=_amount_style(item.total)),
        style="dim" if dim else None,
    )


def _category_table(title: str, items: Sequence[CategoryTotal], currency: str, *, dim: bool) -> Table:
    table = Table(title=Text(title), title_justify="left", expand=True, show_header=False, box=None)
    table.add_column("icon", width=3)
    table.add_column("category", ratio=1)
    table.add_column("total", justify="right")
    for item in items:
        _category_row(table, item, currency)
    if dim:
        table.style = "dim"
    return table


def build_dashboard(
    transactions: Sequence[Transaction],
    config: Config,
    taxonomy: Taxonomy,
    period: Period,
) -> Group:
    """Assemble the renderables for one period.

    The income/spending/net panel has one block per currency. Category and
    group totals add amounts from every account as-is and are labelled with
    the budget currency; no conversion is performed.
    """

    prefix = period.prefix
    currency = config.budget.currency
    parts: list = []

    header = Table.grid(padding=(0, 2))
    header.add_column()
    header.add_column(justify="right")
    for cur, summary in period_summary_by_currency(transactions, taxonomy, config, prefix).items():
        header.add_row("Income", format_amount(summary.income, cur))
        header.add_row("Spending", format_amount(summary.spending, cur))
        header.add_row(Text("Net", style="bold"), Text(format_amount(summary.net, cur), style="bold"))
    parts.append(Panel(header, title=f"Budget · {period.label()}", border_style="cyan"))

    for group in group_summaries(transactions, taxonomy, prefix):
        if not group.categories:
            continue
        title = group.label if not group.excluded else f"{group.label} (excluded)"
        parts.append(_category_table(title, group.categories, currency, dim=group.excluded))

    unknown = uncategorized_totals(transactions, taxonomy, prefix)
    if unknown:
        parts.append(_category_table("Uncategorized", unknown, currency, dim=False))

    in_period = transactions_in_period(transactions, prefix)
    tx_table = Table(title="Transactions", expand=True, show_header=False, box=None)
    tx_table.add_column("icon", width=3)
    tx_table.add_column("payee", ratio=1)
    tx_table.add_column("amount", justify="right")
    if not in_period:
        tx_table.add_row("", Text("No transactions this month", style="dim"), "")
    for day, txs in transactions_by_date(in_period).items():
        tx_table.add_section()
        tx_table.add_row("", Text(display_date(day).upper(), style="bold grey50"), "")
        for tx in txs:
            payee = Text(display_payee(tx.payee) or tx.payee)
            payee.append(f"\n{tx.category}", style="grey50")
            tx_table.add_row(
                Text(taxonomy.icon(tx.category)),
                payee,
                Text(
                    format_amount(tx.amount, currency_of(config, tx.account)),
                    style=_amount_style(tx.amount),
                ),
                style="dim" if taxonomy.is_excluded(tx.category) else None,
            )
    parts.append(tx_table)
    return Group(*parts)


def render_dashboard(
    console: Console,
    transactions: Sequence[Transaction],
    config: Config,
    taxonomy: Taxonomy,
    period: Period,
) -> None:
    console.print(build_dashboard(transactions, config, taxonomy, period))


__all__ = [
    "build_dashboard",
    "display_date",
    "display_payee",
    "format_amount",
    "render_dashboard",
]
