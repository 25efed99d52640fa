"""Ingestion: account exports -> normalized ledger artifact."""

from .account_csv import parse_amount, read_account_file
from .build import build_ledger, dumps_ledger, read_ledger, write_ledger

__all__ = [
    "build_ledger",
    "dumps_ledger",
    "parse_amount",
    "read_account_file",
    "read_ledger",
    "write_ledger",
]
