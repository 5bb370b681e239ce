"""Application service for the single-operator editing session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Protocol, Sequence

from metrics_editor.domain.derivation import rederive
from metrics_editor.domain.models import DERIVED_FIELDS, EDITABLE_CHANNELS, RAW_FIELDS, TOTAL_CHANNEL, RecordSet
from metrics_editor.errors import ImportFailedError, PersistenceError, ReadOnlyFieldError
from metrics_editor.ingestion import read_grid
from metrics_editor.normalizer import normalize

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def load(self) -> RecordSet | None: ...

    def save(self, record_set: RecordSet) -> None: ...


@dataclass(frozen=True)
class LoadResult:
    record_set: RecordSet
    from_store: bool
    error: str = ""


def coerce_edit_value(value: Any) -> float:
    """Operator input coercion: anything non-numeric becomes 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


class EditorSession:
    """Holds the in-memory record set between load and save.

    Every change swaps ``record_set`` for a new object; previously returned
    record sets are never modified.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.record_set = RecordSet.empty()

    def load(self) -> LoadResult:
        try:
            stored = self.store.load()
        except PersistenceError as exc:
            logger.warning("Falling back to empty record set: %s", exc)
            self.record_set = RecordSet.empty()
            return LoadResult(self.record_set, from_store=False, error=str(exc))

        if stored is None:
            self.record_set = RecordSet.empty()
            return LoadResult(self.record_set, from_store=False)
        self.record_set = stored
        return LoadResult(self.record_set, from_store=True)

    def import_grid(self, grid: Sequence[Sequence[Any]]) -> RecordSet:
        months = normalize(grid)
        self.record_set = RecordSet.from_months(months)
        logger.info("Imported %d months", len(months))
        return self.record_set

    def import_file(self, path: str | Path) -> RecordSet:
        try:
            grid = read_grid(path)
        except Exception as exc:
            raise ImportFailedError(f"Spreadsheet import failed: {exc}") from exc
        return self.import_grid(grid)

    def edit(self, month_index: int, channel: str, field_name: str, value: Any) -> RecordSet:
        if channel == TOTAL_CHANNEL:
            raise ReadOnlyFieldError("The total channel is computed from the other channels")
        if channel not in EDITABLE_CHANNELS:
            raise ValueError(f"Unknown channel: {channel}")
        if field_name in DERIVED_FIELDS:
            raise ReadOnlyFieldError(f"{field_name} is derived from the raw counters")
        if field_name not in RAW_FIELDS:
            raise ValueError(f"Unknown field: {field_name}")
        if month_index < 0 or month_index >= len(self.record_set):
            raise IndexError(f"Month index out of range: {month_index}")

        month = self.record_set[month_index]
        updated = month.channel(channel).with_raw(**{field_name: coerce_edit_value(value)})
        month = rederive(replace(month, **{channel: updated}))
        self.record_set = self.record_set.replace_month(month_index, month)
        return self.record_set

    def save(self) -> bool:
        try:
            self.store.save(self.record_set)
        except PersistenceError as exc:
            logger.error("Save failed: %s", exc)
            return False
        return True

    def reset(self) -> RecordSet:
        self.record_set = RecordSet.empty()
        return self.record_set

    def discard(self) -> LoadResult:
        return self.load()

