"""The build step: configured account exports -> one ledger artifact.

The build is all-or-nothing. Every source is checked before any parsing
starts, every file is parsed (in parallel) before anything is written, and
the artifact is replaced atomically, so a failed run leaves the previous
ledger untouched.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable, Sequence
from decimal import Decimal
from os import PathLike
from pathlib import Path
from typing import Any, Literal

from ..errors import IngestError, LedgerError, MissingSourceError
from ..logging_setup import get_logger
from ..models import LEDGER_FIELDS, Config, Transaction
from ..pmap import p_map
from .account_csv import read_account_file

logger = get_logger(__name__)

_MAX_WORKERS = 8


class _Source:
    __slots__ = ("account", "kind", "path")

    def __init__(self, account: str, kind: Literal["debit", "credit"], path: Path) -> None:
        self.account = account
        self.kind = kind
        self.path = path

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"_Source(account={self.account!r}, path={str(self.path)!r})"


def _sources(config: Config) -> list[_Source]:
    # Account declaration order, then file declaration order.
    return [
        _Source(name, account.type, Path(path))
        for name, account in config.accounts.items()
        for path in account.files
    ]


def _resolve_concurrency(n_sources: int, concurrency: int | None) -> int:
    if concurrency is not None:
        if concurrency < 1:
            raise ValueError("concurrency must be a positive integer")
        return min(concurrency, max(1, n_sources))
    return max(1, min(_MAX_WORKERS, n_sources))


def _parse_source(source: _Source) -> list[Transaction]:
    rows = read_account_file(source.path, account=source.account, kind=source.kind)
    logger.debug("parsed %s (%s): %d rows", source.path, source.account, len(rows))
    return rows


def build_ledger(config: Config, *, concurrency: int | None = None) -> list[Transaction]:
    """Parse every configured export and return the merged ledger.

    Order is account declaration order, then file order, then row order,
    independent of which file finishes parsing first.

    Raises :class:`MissingSourceError` before parsing anything when a source
    is missing, and :class:`IngestError` (listing each failing file) when any
    file fails to parse.
    """

    sources = _sources(config)
    for src in sources:
        if not src.path.is_file():
            raise MissingSourceError(src.account, src.path)

    workers = _resolve_concurrency(len(sources), concurrency)
    try:
        per_file = p_map(sources, _parse_source, concurrency=workers, stop_on_error=False)
    except ExceptionGroup as group:
        failures = list(group.exceptions)
        for err in failures:
            logger.error("%s", err)
        if len(failures) == 1 and isinstance(failures[0], IngestError):
            raise failures[0] from None
        raise IngestError(
            f"{len(failures)} source file(s) failed to parse:\n"
            + "\n".join(f"  {err}" for err in failures),
            failures,
        ) from None

    ledger = [tx for rows in per_file for tx in rows]
    logger.info(
        "built ledger: %d transactions from %d files across %d accounts",
        len(ledger),
        len(sources),
        len(config.accounts),
    )
    return ledger


# ---------------------------------------------------------------------------
# Artifact I/O
# ---------------------------------------------------------------------------


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_ledger(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions as a JSON array, two-space indented."""

    records = [tx.to_record() for tx in transactions]
    return json.dumps(records, indent=2, ensure_ascii=False, default=_json_default) + "\n"


def write_ledger(path: str | PathLike[str], transactions: Sequence[Transaction]) -> Path:
    """Atomically replace the ledger artifact at ``path``."""

    target = Path(path)
    payload = dumps_ledger(transactions)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(payload)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("wrote %d transactions to %s", len(transactions), target)
    return target


def _record_to_transaction(record: Any, index: int) -> Transaction:
    if not isinstance(record, dict):
        raise LedgerError(f"record {index} is not an object")
    missing = [k for k in LEDGER_FIELDS if k not in record]
    if missing:
        raise LedgerError(f"record {index} is missing fields: {', '.join(missing)}")
    amount = record["Amount"]
    if isinstance(amount, bool) or not isinstance(amount, (int, Decimal)):
        raise LedgerError(f"record {index}: Amount must be a number, got {amount!r}")
    return Transaction(
        account=str(record["Account"]),
        date=str(record["Date"]),
        payee=str(record["Payee"]),
        category=str(record["Category"]),
        amount=Decimal(amount),
        extra={k: v for k, v in record.items() if k not in LEDGER_FIELDS},
    )


def read_ledger(path: str | PathLike[str]) -> list[Transaction]:
    """Load a ledger artifact written by :func:`write_ledger`."""

    p = Path(path)
    try:
        with p.open(encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
    except FileNotFoundError as exc:
        raise LedgerError(f"ledger not found: {p} (run the build step first)") from exc
    except json.JSONDecodeError as exc:
        raise LedgerError(f"{p}: invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise LedgerError(f"{p}: expected a JSON array of transactions")
    try:
        return [_record_to_transaction(r, i) for i, r in enumerate(data)]
    except LedgerError as exc:
        raise LedgerError(f"{p}: {exc}") from exc


__all__ = ["build_ledger", "dumps_ledger", "read_ledger", "write_ledger"]
