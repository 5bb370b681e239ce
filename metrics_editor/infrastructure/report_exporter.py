"""Infrastructure adapter for record set export targets."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import polars as pl

from metrics_editor.domain.models import CHANNELS, DERIVED_FIELDS, RAW_FIELDS, RecordSet
from metrics_editor.reporting import write_html_report

logger = logging.getLogger(__name__)

EXPORT_COLUMNS: list[str] = ["month", "channel", *RAW_FIELDS, *DERIVED_FIELDS]


def _import_openpyxl() -> Any:
    try:
        from openpyxl import Workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback output.") from exc
    return Workbook


def record_set_frame(record_set: RecordSet) -> pl.DataFrame:
    """One row per month and channel, raw counters then derived fields."""
    rows: list[dict[str, Any]] = []
    for month in record_set:
        for channel in CHANNELS:
            metrics = month.channel(channel)
            rows.append({"month": month.name, "channel": channel, **metrics.raw(), **metrics.derived()})
    if not rows:
        return pl.DataFrame(
            schema={column: (pl.Utf8 if column in ("month", "channel") else pl.Float64) for column in EXPORT_COLUMNS},
        )
    return pl.DataFrame(rows).select(EXPORT_COLUMNS)


def _write_with_polars(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    # DataFrame.write_excel writes one worksheet per workbook.
    if len(sheets) != 1:
        return False
    sheet_name, frame = next(iter(sheets.items()))
    try:
        frame.write_excel(path, worksheet=sheet_name)
        return True
    except Exception as exc:
        logger.warning("Polars Excel writer unavailable, using openpyxl: %s", exc)
        return False


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    Workbook = _import_openpyxl()
    workbook = Workbook()
    default_sheet = workbook.active
    workbook.remove(default_sheet)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:31])
        worksheet.append(frame.columns)
        for row in frame.iter_rows(named=False):
            worksheet.append(list(row))

    workbook.save(path)


def write_output_excel(path: str | Path, sheets: Dict[str, pl.DataFrame]) -> None:
    """Write output Excel with Polars-first and openpyxl fallback."""
    excel_path = Path(path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    if _write_with_polars(excel_path, sheets):
        return
    _write_with_openpyxl(excel_path, sheets)


def save_record_set_excel(path: Path, record_set: RecordSet) -> tuple[bool, str]:
    try:
        write_output_excel(path, {"metrics": record_set_frame(record_set)})
    except PermissionError as exc:
        return False, str(exc)
    logger.info("Exported %d months to %s", len(record_set), path)
    return True, ""


def save_record_set_json(path: Path, record_set: RecordSet) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record_set.to_storage(), indent=2, ensure_ascii=False), encoding="utf-8")


def save_month_html(path: Path, record_set: RecordSet, month_index: int) -> None:
    write_html_report(path, record_set, month_index)
