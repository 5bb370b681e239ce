"""Marketing metrics editor package."""

from .application import EditorSession
from .domain import MetricSet, MonthRecord, RecordSet, derive_channel, derive_month
from .errors import ImportFailedError, MetricsEditorError, PersistenceError, ReadOnlyFieldError
from .infrastructure import JsonRecordStore
from .ingestion import parse_number, read_grid
from .normalizer import normalize

__all__ = [
    "EditorSession",
    "ImportFailedError",
    "JsonRecordStore",
    "MetricSet",
    "MetricsEditorError",
    "MonthRecord",
    "PersistenceError",
    "ReadOnlyFieldError",
    "RecordSet",
    "derive_channel",
    "derive_month",
    "normalize",
    "parse_number",
    "read_grid",
]
