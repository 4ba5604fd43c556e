"""Parse an uploaded debt spreadsheet (Excel or CSV) into a DebtSheet.

Column matching is flexible (partial, case-insensitive): the first pattern
that matches any header wins, so more specific patterns come first. Every
parsed row goes through the normalizer, so sheet imports and form entry
produce identical Debt values.

APRs are taken as percentages. Only xlsx cells with a percent number format
are read as fractions and scaled by 100; CSV values are never rescaled here.
"""
from __future__ import annotations

import logging
import re
import zipfile
from datetime import date, datetime
from io import BytesIO
from typing import Any, BinaryIO

import pandas as pd
from openpyxl import load_workbook

from debtplan.engine.normalizer import normalize_debts
from debtplan.models.debt import DebtInput, DebtSheet, parse_number

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Column matching helpers
# ---------------------------------------------------------------------------
_COLUMN_PATTERNS: dict[str, list[str]] = {
    "balance": ["current balance", "balance", "amount owed", "owed", "principal"],
    "apr": ["apr", "interest rate", "rate"],
    "min_payment": ["minimum payment", "min payment", "min. payment", "min.*pay", "minimum", "min"],
    "due_day": ["due day", "due date", "due"],
    "name": ["creditor", "debt name", "account name", "lender", "name"],
    "category": ["category", "debt type", "type"],
    "included": ["include", "active"],
}

_EXCEL_SUFFIXES = ("xlsx", "xls")
_FALSE_WORDS = {"no", "n", "false", "0", "off", "exclude", "excluded"}


def _find_column(columns: list[str], key: str) -> str | None:
    """Find a column name by partial case-insensitive match.

    A pattern containing regex metacharacters is treated as a regex;
    otherwise plain substring matching is used.
    """
    patterns = _COLUMN_PATTERNS.get(key, [key])
    col_lower = {c: c.lower().strip() for c in columns}
    for pattern in patterns:
        pat = pattern.lower()
        if any(ch in pat for ch in ("*", "+", "?", "\\", "^", "$", "|")):
            rx = re.compile(pat)
            for orig, low in col_lower.items():
                if rx.search(low):
                    return orig
        else:
            for orig, low in col_lower.items():
                if pat in low:
                    return orig
    return None


def _map_columns(columns: list[str]) -> dict[str, str | None]:
    """Assign each key its own column; a header is never claimed twice."""
    col_map: dict[str, str | None] = {}
    taken: set[str] = set()
    for key in _COLUMN_PATTERNS:
        found = _find_column([c for c in columns if c not in taken], key)
        col_map[key] = found
        if found is not None:
            taken.add(found)
    return col_map


def _percent_headers(data: bytes) -> set[str]:
    """Headers of xlsx columns holding a cell with a percent number format.

    Such cells store fractions (0.1999 is shown as 19.99%).
    """
    wb = load_workbook(BytesIO(data), data_only=True)
    try:
        rows = wb.worksheets[0].iter_rows()
        header = next(rows, ())
        names = [str(c.value).strip() if c.value is not None else None for c in header]
        found: set[str] = set()
        for row in rows:
            for name, cell in zip(names, row):
                if name and "%" in (cell.number_format or ""):
                    found.add(name)
        return found
    finally:
        wb.close()


def _read_frame(data: bytes, filename: str) -> tuple[pd.DataFrame, set[str]]:
    """Read the sheet and, for xlsx, the headers of percent-formatted columns."""
    suffix = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    try:
        if suffix in _EXCEL_SUFFIXES:
            df = pd.read_excel(BytesIO(data))
            percent = _percent_headers(data) if suffix == "xlsx" else set()
            return df, percent
        return pd.read_csv(BytesIO(data)), set()
    except (ValueError, ImportError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise ValueError(f"Could not read {filename}: {e}") from e


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def parse_debt_sheet(file: BinaryIO, filename: str) -> DebtSheet:
    """Parse a debt spreadsheet into a DebtSheet.

    Raises ValueError on invalid / empty data.
    """
    data = file.read()
    if not data:
        raise ValueError("Uploaded file is empty")

    df, percent_headers = _read_frame(data, filename)
    df.columns = [str(c).strip() for c in df.columns]

    if df.empty:
        raise ValueError("Spreadsheet contains no data rows")

    col_map = _map_columns(list(df.columns))
    logger.info("Sheet columns: %s", list(df.columns))
    logger.info("Column mapping: %s", col_map)

    balance_col = col_map.get("balance")
    if not balance_col:
        raise ValueError(
            f"Cannot find a balance column. Available columns: {list(df.columns)}"
        )

    apr_col = col_map.get("apr")
    rows: list[DebtInput] = []
    for _, row in df.iterrows():
        balance = parse_number(_cell(row, balance_col))
        if balance is None:
            continue
        rows.append(DebtInput(
            id=f"sheet-{len(rows) + 1}",
            name=_text(row, col_map.get("name")) or "",
            balance=balance,
            apr=_rate(row, apr_col, apr_col in percent_headers),
            min_payment=parse_number(_cell(row, col_map.get("min_payment"))),
            included=_flag(row, col_map.get("included")),
            due_day=_day(row, col_map.get("due_day")),
            category=_text(row, col_map.get("category")),
        ))

    if not rows:
        raise ValueError("No valid debt rows after filtering")

    debts = normalize_debts(rows)
    name = re.sub(r"\.(xlsx?|csv)$", "", filename, flags=re.IGNORECASE)
    name = name.replace("_", " ").replace("-", " ").strip()

    return DebtSheet(
        name=name,
        debt_count=len(debts),
        total_balance=round(sum(d.balance for d in debts if d.included), 2),
        debts=debts,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _cell(row, col: str | None) -> Any:
    if col is None:
        return None
    value = row.get(col)
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return value


def _text(row, col: str | None) -> str | None:
    value = _cell(row, col)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _rate(row, col: str | None, percent_format: bool = False) -> float | None:
    rate = parse_number(_cell(row, col))
    if percent_format and rate is not None:
        rate = rate * 100.0
    return rate


def _day(row, col: str | None) -> int | None:
    value = _cell(row, col)
    if isinstance(value, (datetime, date)):
        return value.day
    number = parse_number(value)
    return int(number) if number is not None else None


def _flag(row, col: str | None) -> bool:
    value = _cell(row, col)
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSE_WORDS
