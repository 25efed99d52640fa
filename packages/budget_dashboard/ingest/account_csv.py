"""Adapter for reading one account export into normalized transactions.

Expected header (exact, case-sensitive keys; order does not matter)::

    Date, Payee, Category, Amount

Any other columns are carried through untouched. The delimiter is sniffed
from the first few KiB of the file (comma, semicolon, tab or pipe) and falls
back to a comma when the sample is inconclusive.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator, Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from os import PathLike
from pathlib import Path
from typing import Literal

from ..errors import ParseError
from ..models import Transaction

REQUIRED_COLUMNS = ("Date", "Payee", "Category", "Amount")
CANDIDATE_DELIMITERS = ",;\t|"
_SNIFF_BYTES = 8192
_CENTS = Decimal("0.01")
_CURRENCY_SYMBOLS = "$€£¥"


def parse_amount(raw: str | None) -> Decimal:
    """Parse an export amount into a ``Decimal`` with two fraction digits.

    Accepts a leading ``+``/``-``, a currency symbol, surrounding parentheses
    (negative) and ``,`` thousands separators. Raises ``ValueError`` for
    anything else, including blank values.
    """

    if raw is None:
        raise ValueError("amount is required")
    s = raw.strip()
    if not s:
        raise ValueError("amount is empty")

    negative = False
    # Strip sign, currency symbol and parentheses in any order until stable.
    while True:
        changed = False
        if s[:1] in ("+", "-"):
            negative = negative or s[0] == "-"
            s = s[1:].lstrip()
            changed = True
        if s[:1] and s[0] in _CURRENCY_SYMBOLS:
            s = s[1:].lstrip()
            changed = True
        if len(s) >= 2 and s.startswith("(") and s.endswith(")"):
            negative = True
            s = s[1:-1].strip()
            changed = True
        if not changed:
            break

    s = s.replace(",", "")
    try:
        d = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc
    if not d.is_finite():
        raise ValueError(f"invalid amount: {raw!r}")

    d = d.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return -d if negative else d


def apply_sign(amount: Decimal, kind: Literal["debit", "credit"]) -> Decimal:
    """Apply an account's sign convention; credit statements are negated."""

    signed = -amount if kind == "credit" else amount
    # Keep "-0.00" out of the ledger.
    return signed if signed != 0 else Decimal("0.00")


def sniff_delimiter(sample: str) -> str:
    if not sample.strip():
        return ","
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def to_transactions(
    rows: Iterable[Mapping[str | None, str | list[str] | None]],
    *,
    account: str,
    kind: Literal["debit", "credit"],
    path: Path,
    first_line: int = 2,
) -> Iterator[Transaction]:
    """Convert ``csv.DictReader`` rows into :class:`Transaction` records.

    ``first_line`` is the 1-based line number of the first data row and is
    only used in error messages (multi-line quoted cells shift it).
    """

    for offset, row in enumerate(rows):
        # DictReader files surplus cells under a ``None`` key; drop them.
        cells = {k: (v if isinstance(v, str) else "") for k, v in row.items() if k is not None}
        if all(not v.strip() for v in cells.values()):
            continue

        line = getattr(rows, "line_num", None) or first_line + offset
        try:
            raw_amount = parse_amount(cells.get("Amount"))
        except ValueError as exc:
            raise ParseError(path, str(exc), line=line) from exc

        yield Transaction(
            account=account,
            date=cells.get("Date", "").strip(),
            payee=cells.get("Payee", ""),
            category=cells.get("Category", "").strip(),
            amount=apply_sign(raw_amount, kind),
            extra={k: v for k, v in cells.items() if k not in REQUIRED_COLUMNS},
        )


def read_account_file(
    csv_path: str | PathLike[str],
    *,
    account: str,
    kind: Literal["debit", "credit"],
) -> list[Transaction]:
    """Read one export file and return its normalized transactions in row order.

    Raises ``FileNotFoundError`` for a missing file and :class:`ParseError`
    for a missing header, missing required columns or a non-numeric amount.
    """

    p = Path(csv_path)
    with p.open(encoding="utf-8-sig", newline="") as f:
        sample = f.read(_SNIFF_BYTES)
        f.seek(0)
        reader = csv.DictReader(f, delimiter=sniff_delimiter(sample))
        try:
            headers = [h.strip() for h in reader.fieldnames or []]
        except csv.Error as exc:
            raise ParseError(p, f"malformed header: {exc}", line=1) from exc
        if not headers:
            raise ParseError(p, "file appears to have no header row")
        missing = [c for c in REQUIRED_COLUMNS if c not in headers]
        if missing:
            raise ParseError(
                p,
                "header is missing required columns: " + ", ".join(missing),
                line=1,
            )
        reader.fieldnames = headers
        try:
            return list(to_transactions(reader, account=account, kind=kind, path=p))
        except csv.Error as exc:
            raise ParseError(p, f"malformed CSV: {exc}", line=reader.line_num) from exc


__all__ = [
    "CANDIDATE_DELIMITERS",
    "REQUIRED_COLUMNS",
    "apply_sign",
    "parse_amount",
    "read_account_file",
    "sniff_delimiter",
    "to_transactions",
]
