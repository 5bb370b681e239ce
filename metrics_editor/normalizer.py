"""Month-block normalization of the monthly performance export."""

from __future__ import annotations

from typing import Any, Sequence

from metrics_editor.domain.derivation import rederive
from metrics_editor.domain.models import MONTH_IDS, MetricSet, MonthRecord
from metrics_editor.errors import ImportFailedError
from metrics_editor.ingestion import cell, normalize_label, parse_number

FIRST_MONTH_COLUMN = 2
MONTH_BLOCK_WIDTH = 4
FIRST_DATA_ROW = 3
LABEL_COLUMN = 1

# Offset inside a month block -> channel; matches the physical export columns.
CHANNEL_OFFSETS: tuple[tuple[int, str], ...] = (
    (1, "facebook"),
    (2, "instagram"),
    (3, "google"),
)

# Evaluated in order, first label contained in the row label wins.
METRIC_LABELS: tuple[tuple[str, str], ...] = (
    ("Investimento ( mkt)", "investment"),
    ("Faturamento", "revenue"),
    ("Leads (Contatos Recebidos) (mkt)", "leads"),
    ("Cliques (mkt)", "clicks"),
    ("Atendimentos (Conversas sem vácuo)", "consultations"),
    ("Agendamentos", "bookings"),
    ("Comparecimentos", "show_ups"),
    ("Pessoas que compraram", "sales"),
)


def match_metric(label: Any) -> str | None:
    text = normalize_label(label)
    if not text:
        return None
    for needle, field_name in METRIC_LABELS:
        if needle in text:
            return field_name
    return None


def _block_available(header: Sequence[Any] | None, start: int) -> bool:
    return bool(header) and start + MONTH_BLOCK_WIDTH - 1 < len(header)


def _month_from_block(grid: Sequence[Sequence[Any]], month_id: str, start: int) -> MonthRecord:
    counters: dict[str, dict[str, float]] = {channel: {} for _, channel in CHANNEL_OFFSETS}
    for row in grid[FIRST_DATA_ROW:]:
        field_name = match_metric(cell(row, LABEL_COLUMN))
        if field_name is None:
            continue
        for offset, channel in CHANNEL_OFFSETS:
            counters[channel][field_name] = parse_number(cell(row, start + offset))

    month = MonthRecord(
        id=month_id,
        name=month_id,
        **{channel: MetricSet().with_raw(**values) for channel, values in counters.items()},
    )
    return rederive(month)


def _normalize(grid: Sequence[Sequence[Any]]) -> list[MonthRecord]:
    header = grid[0] if grid else None
    months: list[MonthRecord] = []
    start = FIRST_MONTH_COLUMN
    for month_id in MONTH_IDS:
        if not _block_available(header, start):
            continue
        months.append(_month_from_block(grid, month_id, start))
        start += MONTH_BLOCK_WIDTH
    return months


def normalize(grid: Sequence[Sequence[Any]]) -> list[MonthRecord]:
    """Convert the raw export grid into derived month records, in calendar order.

    Months whose block is not covered by the header row are skipped; a grid
    with no month block at all is an import failure. Cells that do not parse
    count as 0. Any other failure aborts the whole import.
    """
    try:
        months = _normalize(grid)
    except Exception as exc:
        raise ImportFailedError(f"Spreadsheet import failed: {exc}") from exc
    if not months:
        raise ImportFailedError("Spreadsheet import failed: no month columns found")
    return months
