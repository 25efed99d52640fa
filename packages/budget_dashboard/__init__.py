"""Public interface for the ``budget_dashboard`` package.

Symbol re-exports only; there is no runtime logic here.
"""

from .aggregate import (
    CategoryTotal,
    GroupSummary,
    PeriodSummary,
    account_of,
    currency_of,
    group_summaries,
    period_summary,
    period_summary_by_currency,
    period_total,
    transactions_by_date,
    transactions_in_period,
    uncategorized_totals,
)
from .config import load_config, parse_config
from .errors import (
    BudgetDashboardError,
    ConfigError,
    IngestError,
    LedgerError,
    MissingSourceError,
    ParseError,
)
from .ingest import build_ledger, read_account_file, read_ledger, write_ledger
from .models import AccountConfig, BudgetConfig, CategoryMeta, Config, Period, Transaction
from .taxonomy import Taxonomy

__all__ = [
    # Ingestion
    "build_ledger",
    "read_account_file",
    "read_ledger",
    "write_ledger",
    # Queries
    "account_of",
    "currency_of",
    "group_summaries",
    "period_summary",
    "period_summary_by_currency",
    "period_total",
    "transactions_by_date",
    "transactions_in_period",
    "uncategorized_totals",
    "Taxonomy",
    # Configuration
    "load_config",
    "parse_config",
    # Models / types
    "AccountConfig",
    "BudgetConfig",
    "CategoryMeta",
    "CategoryTotal",
    "Config",
    "GroupSummary",
    "Period",
    "PeriodSummary",
    "Transaction",
    # Errors
    "BudgetDashboardError",
    "ConfigError",
    "IngestError",
    "LedgerError",
    "MissingSourceError",
    "ParseError",
]
