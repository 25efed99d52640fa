import json
from datetime import date
from pathlib import Path

import pytest

from budget_dashboard import ConfigError, Period, load_config, parse_config

DOC = {
    "accounts": {
        "Checking": {"type": "debit", "currency": "USD", "files": ["exports/checking.csv"]},
        "Visa": {"type": "credit", "currency": "usd", "files": ["/abs/visa.csv"]},
    },
    "budget": {
        "currency": "USD",
        "groups": {
            "Income": {"Salary": {"icon": "$", "income": True}},
            "-Internal": {"Transfer": {"icon": "⇄"}},
        },
    },
}


def test_load_config_resolves_relative_paths(write_config, tmp_path: Path):
    config = load_config(write_config(DOC))

    assert list(config.accounts) == ["Checking", "Visa"]
    assert config.accounts["Checking"].files == (tmp_path / "exports" / "checking.csv",)
    assert config.accounts["Visa"].files == (Path("/abs/visa.csv"),)
    assert config.accounts["Visa"].currency == "USD"
    assert list(config.budget.groups) == ["Income", "-Internal"]
    assert config.budget.groups["Income"]["Salary"].income is True
    assert config.budget.groups["-Internal"]["Transfer"].income is False


@pytest.mark.parametrize(
    "doc",
    [
        {"accounts": {"A": {"type": "savings"}}},
        {"accounts": {"A": {"type": "debit", "colour": "red"}}},
        {"budget": {"groups": {"Food": {"Groceries": {"icon": "G", "income": "maybe"}}}}},
        {"budget": {"currency": ""}},
        {"unexpected": True},
    ],
)
def test_invalid_documents_raise_config_error(doc):
    with pytest.raises(ConfigError):
        parse_config(doc)


def test_load_config_errors_name_the_file(tmp_path: Path):
    missing = tmp_path / "missing.json"
    with pytest.raises(ConfigError, match="not found"):
        load_config(missing)

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="bad.json"):
        load_config(bad)

    wrong = tmp_path / "wrong.json"
    wrong.write_text(json.dumps({"accounts": []}), encoding="utf-8")
    with pytest.raises(ConfigError, match="wrong.json"):
        load_config(wrong)


def test_period_prefix_and_navigation():
    p = Period(2024, 3)

    assert p.prefix == "2024-03-"
    assert p.next() == Period(2024, 4)
    assert Period(2024, 12).next() == Period(2025, 1)
    assert Period(2024, 1).previous() == Period(2023, 12)
    assert p.label() == "March 2024"
    assert Period.current(date(2026, 10, 19)) == Period(2026, 10)


@pytest.mark.parametrize("text, expected", [("2024-03", Period(2024, 3)), ("2024-3-", Period(2024, 3))])
def test_period_parse(text, expected):
    assert Period.parse(text) == expected


@pytest.mark.parametrize("text", ["2024", "2024-13", "march", "2024-00", ""])
def test_period_parse_rejects_invalid(text):
    with pytest.raises(ValueError):
        Period.parse(text)
