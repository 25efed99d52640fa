import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from budget_dashboard import read_ledger
from budget_dashboard.cli import app

from tests.helpers.ledger import HEADER

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, write_csv, write_config) -> Path:
    write_csv("checking.csv", [HEADER, ["2024-03-01", "EMPLOYER", "Salary", "1500"]])
    write_csv("visa.csv", [HEADER, ["2024-03-02", "CORNER SHOP", "Groceries", "12.30"]], delimiter=";")
    return write_config(
        {
            "accounts": {
                "Checking": {"type": "debit", "currency": "USD", "files": ["checking.csv"]},
                "Visa": {"type": "credit", "currency": "USD", "files": ["visa.csv"]},
            },
            "budget": {
                "currency": "USD",
                "groups": {
                    "Income": {"Salary": {"icon": "$", "income": True}},
                    "Food": {"Groceries": {"icon": "G"}},
                },
            },
        }
    )


def test_build_then_dashboard(project: Path, tmp_path: Path):
    out = tmp_path / "transactions.json"

    result = runner.invoke(app, ["build", "--config", str(project), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert "Wrote 2 transactions" in result.output

    ledger = read_ledger(out)
    assert [(t.account, str(t.amount)) for t in ledger] == [("Checking", "1500.0"), ("Visa", "-12.3")]

    result = runner.invoke(
        app,
        ["dashboard", "--config", str(project), "--ledger", str(out), "--year", "2024", "--month", "3"],
    )
    assert result.exit_code == 0, result.output
    assert "Corner Shop" in result.output
    assert "1,487.70 USD" in result.output


def test_defaults_come_from_environment(project: Path, tmp_path: Path, monkeypatch):
    out = tmp_path / "ledger.json"
    monkeypatch.setenv("BUDGET_DASHBOARD_CONFIG", str(project))
    monkeypatch.setenv("BUDGET_DASHBOARD_LEDGER", str(out))

    assert runner.invoke(app, ["build"]).exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))[1]["Payee"] == "CORNER SHOP"

    result = runner.invoke(app, ["dashboard", "--year", "2024", "--month", "2"])
    assert result.exit_code == 0
    assert "No transactions this month" in result.output


def test_build_with_missing_source_writes_nothing(tmp_path: Path, write_config):
    config = write_config({"accounts": {"Checking": {"type": "debit", "files": ["gone.csv"]}}})
    out = tmp_path / "transactions.json"

    result = runner.invoke(app, ["build", "--config", str(config), "--output", str(out)])

    assert result.exit_code == 1
    assert not out.exists()


def test_dashboard_without_ledger_fails_cleanly(project: Path, tmp_path: Path):
    result = runner.invoke(
        app, ["dashboard", "--config", str(project), "--ledger", str(tmp_path / "none.json")]
    )

    assert result.exit_code == 1


def test_dashboard_rejects_out_of_range_month(project: Path):
    result = runner.invoke(app, ["dashboard", "--config", str(project), "--month", "13"])

    assert result.exit_code != 0


def test_error_messages_are_printed_literally():
    # Relative to the per-test working directory, so the message fits one line.
    result = runner.invoke(app, ["dashboard", "--config", "conf[/]ig.json", "--ledger", "x.json"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "conf[/]ig.json" in result.output
