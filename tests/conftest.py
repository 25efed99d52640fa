"""Pytest configuration for test isolation.

The CLI reads default paths and the log level from ``BUDGET_DASHBOARD_*``
environment variables (optionally via a local ``.env``). Tests must not pick
up a developer's settings, so those variables are cleared for every test and
each test runs from its own temporary working directory.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from budget_dashboard import logging_setup


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BUDGET_DASHBOARD_CONFIG", "BUDGET_DASHBOARD_LEDGER", "BUDGET_DASHBOARD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI installs; they point at CliRunner streams that get closed."""

    yield
    logger = logging.getLogger("budget_dashboard")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logging_setup._handler = None


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write ``rows`` (list of cell lists, header first) with ``delimiter``."""

    def _write(name: str, rows: list[list[str]], delimiter: str = ",") -> Path:
        p = tmp_path / name
        p.write_text("\n".join(delimiter.join(r) for r in rows) + "\n", encoding="utf-8")
        return p

    return _write


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    def _write(doc: dict[str, Any], name: str = "config.json") -> Path:
        p = tmp_path / name
        p.write_text(json.dumps(doc), encoding="utf-8")
        return p

    return _write
