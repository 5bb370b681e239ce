"""Domain layer package."""

from .derivation import derive_channel, derive_month, rederive, round_half_up, sum_raw
from .models import (
    CHANNELS,
    DERIVED_FIELDS,
    EDITABLE_CHANNELS,
    MONTH_IDS,
    RAW_FIELDS,
    TOTAL_CHANNEL,
    MetricSet,
    MonthRecord,
    RecordSet,
)

__all__ = [
    "CHANNELS",
    "DERIVED_FIELDS",
    "EDITABLE_CHANNELS",
    "MONTH_IDS",
    "RAW_FIELDS",
    "TOTAL_CHANNEL",
    "MetricSet",
    "MonthRecord",
    "RecordSet",
    "derive_channel",
    "derive_month",
    "rederive",
    "round_half_up",
    "sum_raw",
]
