"""Loading and validating the JSON configuration document.

The document shape is::

    {
      "accounts": {"<name>": {"type": "debit"|"credit", "currency": "...",
                              "files": ["path", ...]}},
      "budget": {"currency": "...",
                 "groups": {"<group>": {"<category>": {"icon": "...",
                                                       "income": true}}}}
    }

The loaded :class:`~budget_dashboard.models.Config` is returned to the caller
and passed explicitly to every operation that needs it.
"""

from __future__ import annotations

import json
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigError
from .logging_setup import get_logger
from .models import Config

logger = get_logger(__name__)


def parse_config(data: Any, *, base_dir: str | PathLike[str] | None = None) -> Config:
    """Validate an already-decoded document.

    Relative source paths are resolved against ``base_dir`` when given.
    """

    try:
        config = Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc

    if base_dir is None:
        return config

    base = Path(base_dir)
    accounts = {
        name: account.model_copy(
            update={"files": tuple(p if p.is_absolute() else base / p for p in account.files)}
        )
        for name, account in config.accounts.items()
    }
    return config.model_copy(update={"accounts": accounts})


def load_config(path: str | PathLike[str]) -> Config:
    """Read and validate the configuration file at ``path``."""

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"configuration file not found: {p}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {p}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{p}: invalid JSON: {exc}") from exc

    try:
        config = parse_config(data, base_dir=p.parent)
    except ConfigError as exc:
        raise ConfigError(f"{p}: {exc}") from exc

    logger.debug(
        "loaded config %s: %d accounts, %d groups",
        p,
        len(config.accounts),
        len(config.budget.groups),
    )
    return config


__all__ = ["load_config", "parse_config"]
