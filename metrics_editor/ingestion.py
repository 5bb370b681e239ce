"""Spreadsheet file reading and cell parsing, Polars for CSV and openpyxl for Excel."""

from __future__ import annotations

import io
import logging
import math
import re
from pathlib import Path
from typing import Any, List, Sequence

import polars as pl

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES: tuple[str, ...] = (".xlsx", ".xlsm")
CURRENCY_MARKER = "R$"
PERCENT_MARKER = "%"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

Grid = List[List[Any]]


def parse_number(value: Any) -> float:
    """Parse a ``R$ 1.234,56`` / ``12,5%`` style cell; anything unusable is 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        if math.isnan(number) or math.isinf(number):
            return 0.0
        return number

    text = str(value).replace(CURRENCY_MARKER, "").replace(PERCENT_MARKER, "").strip()
    text = text.replace(THOUSANDS_SEPARATOR, "").replace(DECIMAL_SEPARATOR, ".")
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return 0.0
    number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def normalize_label(value: Any) -> str:
    if value is None:
        return ""
    return str(value).replace("\r\n", " ").replace("\n", " ").replace("\r", " ").strip()


def _import_openpyxl() -> Any:
    try:
        from openpyxl import load_workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required to read Excel uploads.") from exc
    return load_workbook


def _drop_blank_lines(data: bytes) -> bytes:
    """Remove empty lines, leaving line breaks inside quoted fields alone."""
    kept: list[bytes] = []
    in_quotes = False
    for line in data.splitlines(keepends=True):
        if not in_quotes and not line.strip(b"\r\n"):
            continue
        kept.append(line)
        # "" escapes keep the parity, so an odd count flips the quoted state.
        if line.count(b'"') % 2:
            in_quotes = not in_quotes
    return b"".join(kept)


def _read_csv_grid(path: Path) -> Grid:
    data = _drop_blank_lines(path.read_bytes())
    if not data:
        return []
    frame = pl.read_csv(
        io.BytesIO(data),
        has_header=False,
        infer_schema=False,
        truncate_ragged_lines=True,
        encoding="utf8-lossy",
    )
    return [list(row) for row in frame.rows()]


def _read_excel_grid(path: Path) -> Grid:
    load_workbook = _import_openpyxl()
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        worksheet = workbook[workbook.sheetnames[0]]
        rows: Grid = []
        for values in worksheet.iter_rows(values_only=True):
            if values is None or all(value in (None, "") for value in values):
                continue
            rows.append(list(values))
    finally:
        workbook.close()
    return rows


def read_grid(path: str | Path) -> Grid:
    """Read an uploaded export into rows of raw cells, header row included."""
    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Input spreadsheet not found: {source}")

    if source.suffix.lower() in EXCEL_SUFFIXES:
        grid = _read_excel_grid(source)
    else:
        grid = _read_csv_grid(source)
    logger.info("Read %d rows from %s", len(grid), source)
    return grid


def cell(row: Sequence[Any] | None, index: int) -> Any:
    if row is None or index < 0 or index >= len(row):
        return None
    return row[index]
