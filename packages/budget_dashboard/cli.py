"""CLI for the ``budget_dashboard`` package.

Typer-based console interface. Environment variables (the default config and
ledger locations) are loaded from a local ``.env`` via ``python-dotenv``
before any command runs. Business logic lives in ``budget_dashboard.ingest``
and ``budget_dashboard.aggregate``; this module only wires it to the terminal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .errors import BudgetDashboardError
from .logging_setup import configure_logging, get_logger
from .models import Config, Period, Transaction
from .taxonomy import Taxonomy

logger = get_logger(__name__)
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="budget",
    no_args_is_help=True,
    add_completion=False,
    help="Merge bank and credit-card exports into one ledger and show a monthly budget.",
)

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        envvar="BUDGET_DASHBOARD_CONFIG",
        help="Path to the JSON configuration (accounts and budget groups).",
    ),
]
LedgerOption = Annotated[
    Path,
    typer.Option(
        "--ledger",
        "-l",
        envvar="BUDGET_DASHBOARD_LEDGER",
        help="Path of the ledger artifact produced by `build`.",
    ),
]


def _fail(exc: Exception) -> typer.Exit:
    err_console.print("[red]Error:[/red]", escape(str(exc)))
    return typer.Exit(1)


def _load_inputs(config_path: Path, ledger_path: Path) -> tuple[Config, Taxonomy, list[Transaction]]:
    from .config import load_config
    from .ingest import read_ledger

    try:
        config = load_config(config_path)
        transactions = read_ledger(ledger_path)
    except BudgetDashboardError as e:
        raise _fail(e) from e
    return config, Taxonomy.from_budget(config.budget), transactions


def _resolve_period(year: int | None, month: int | None) -> Period:
    current = Period.current()
    try:
        return Period(year if year is not None else current.year, month if month is not None else current.month)
    except ValueError as e:
        raise _fail(e) from e


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (DEBUG, INFO, ...). Defaults to BUDGET_DASHBOARD_LOG_LEVEL or INFO."),
    ] = None,
) -> None:
    load_dotenv()
    # Central logging setup so child loggers inherit configuration
    configure_logging(log_level)


@app.command("build")
def build_cmd(
    config_path: ConfigOption = Path("config.json"),
    output: Annotated[
        Path,
        typer.Option("--output", "-o", envvar="BUDGET_DASHBOARD_LEDGER", help="Where to write the ledger."),
    ] = Path("transactions.json"),
    concurrency: Annotated[
        int | None, typer.Option(min=1, help="Maximum number of files parsed at once.")
    ] = None,
) -> None:
    """Parse every configured export and write the merged ledger."""

    from .config import load_config
    from .ingest import build_ledger, write_ledger

    try:
        config = load_config(config_path)
        ledger = build_ledger(config, concurrency=concurrency)
        target = write_ledger(output, ledger)
    except BudgetDashboardError as e:
        raise _fail(e) from e

    console.print(
        f"[green]Wrote[/green] {len(ledger)} transactions from "
        f"{len(config.accounts)} accounts to {escape(str(target))}"
    )


@app.command("dashboard")
def dashboard_cmd(
    config_path: ConfigOption = Path("config.json"),
    ledger_path: LedgerOption = Path("transactions.json"),
    year: Annotated[int | None, typer.Option(help="Year to show (default: current).")] = None,
    month: Annotated[
        int | None, typer.Option(min=1, max=12, help="Month to show (default: current).")
    ] = None,
) -> None:
    """Show category totals and transactions for one month."""

    from .dashboard import render_dashboard

    config, taxonomy, transactions = _load_inputs(config_path, ledger_path)
    period = _resolve_period(year, month)
    render_dashboard(console, transactions, config, taxonomy, period)


@app.command("browse")
def browse_cmd(
    config_path: ConfigOption = Path("config.json"),
    ledger_path: LedgerOption = Path("transactions.json"),
) -> None:
    """Interactively step through months, redrawing the dashboard each time."""

    from .dashboard import render_dashboard
    from .term_ui import prompt_period

    config, taxonomy, transactions = _load_inputs(config_path, ledger_path)
    period: Period | None = Period.current()
    while period is not None:
        console.clear()
        render_dashboard(console, transactions, config, taxonomy, period)
        period = prompt_period(period)


def main() -> None:  # pragma: no cover - console entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
