"""Domain models for monthly channel metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Sequence

MONTH_NAMES: tuple[tuple[str, str], ...] = (
    ("JANEIRO", "Jan"),
    ("FEVEREIRO", "Fev"),
    ("MARÇO", "Mar"),
    ("ABRIL", "Abr"),
    ("MAIO", "Mai"),
    ("JUNHO", "Jun"),
    ("JULHO", "Jul"),
    ("AGOSTO", "Ago"),
    ("SETEMBRO", "Set"),
    ("OUTUBRO", "Out"),
    ("NOVEMBRO", "Nov"),
    ("DEZEMBRO", "Dez"),
)
MONTH_IDS: tuple[str, ...] = tuple(short for _, short in MONTH_NAMES)

# Channel A, B, C in that order, then the aggregate.
EDITABLE_CHANNELS: tuple[str, ...] = ("google", "facebook", "instagram")
TOTAL_CHANNEL = "total"
CHANNELS: tuple[str, ...] = (*EDITABLE_CHANNELS, TOTAL_CHANNEL)

RAW_FIELDS: tuple[str, ...] = (
    "investment",
    "revenue",
    "clicks",
    "leads",
    "consultations",
    "bookings",
    "show_ups",
    "sales",
)
DERIVED_FIELDS: tuple[str, ...] = (
    "roas",
    "average_ticket",
    "cpc",
    "cpl",
    "lead_rate",
    "consultation_rate",
    "booking_rate",
    "show_up_rate",
    "sale_rate",
)

# Keys used by the JSON store; kept stable so existing database files load.
STORAGE_KEYS: dict[str, str] = {
    "investment": "invest",
    "revenue": "faturamento",
    "clicks": "cliques",
    "leads": "leads",
    "consultations": "atendimentos",
    "bookings": "agendamentos",
    "show_ups": "comparecimentos",
    "sales": "vendas",
    "roas": "roas",
    "average_ticket": "ticket",
    "cpc": "cpc",
    "cpl": "cpl",
    "lead_rate": "taxa_lead",
    "consultation_rate": "taxa_atendimento",
    "booking_rate": "taxa_agendamento",
    "show_up_rate": "taxa_comparecimento",
    "sale_rate": "taxa_venda",
}


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


@dataclass(frozen=True)
class MetricSet:
    """Raw counters and derived ratios for one channel in one month."""

    investment: float = 0.0
    revenue: float = 0.0
    clicks: float = 0.0
    leads: float = 0.0
    consultations: float = 0.0
    bookings: float = 0.0
    show_ups: float = 0.0
    sales: float = 0.0
    roas: float = 0.0
    average_ticket: float = 0.0
    cpc: float = 0.0
    cpl: float = 0.0
    lead_rate: float = 0.0
    consultation_rate: float = 0.0
    booking_rate: float = 0.0
    show_up_rate: float = 0.0
    sale_rate: float = 0.0

    def raw(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in RAW_FIELDS}

    def derived(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in DERIVED_FIELDS}

    def with_raw(self, **values: float) -> "MetricSet":
        unknown = [name for name in values if name not in RAW_FIELDS]
        if unknown:
            raise ValueError(f"Not raw counters: {', '.join(sorted(unknown))}")
        return replace(self, **{name: float(value) for name, value in values.items()})

    def to_storage(self) -> dict[str, float]:
        return {STORAGE_KEYS[item.name]: getattr(self, item.name) for item in fields(self)}

    @classmethod
    def from_storage(cls, payload: Mapping[str, Any] | None) -> "MetricSet":
        if not isinstance(payload, Mapping):
            return cls()
        return cls(**{name: _to_float(payload.get(key)) for name, key in STORAGE_KEYS.items()})


@dataclass(frozen=True)
class MonthRecord:
    id: str
    name: str
    google: MetricSet = field(default_factory=MetricSet)
    facebook: MetricSet = field(default_factory=MetricSet)
    instagram: MetricSet = field(default_factory=MetricSet)
    total: MetricSet = field(default_factory=MetricSet)

    @classmethod
    def empty(cls, month_id: str) -> "MonthRecord":
        return cls(id=month_id, name=month_id)

    def channel(self, channel: str) -> MetricSet:
        if channel not in CHANNELS:
            raise ValueError(f"Unknown channel: {channel}")
        return getattr(self, channel)

    def to_storage(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "name": self.name}
        for channel in CHANNELS:
            payload[channel] = self.channel(channel).to_storage()
        return payload

    @classmethod
    def from_storage(cls, payload: Mapping[str, Any]) -> "MonthRecord":
        month_id = str(payload.get("id", "") or "")
        name = str(payload.get("name", "") or month_id)
        return cls(
            id=month_id,
            name=name,
            **{channel: MetricSet.from_storage(payload.get(channel)) for channel in CHANNELS},
        )


@dataclass(frozen=True)
class RecordSet:
    """Ordered month records; the unit of persistence."""

    months: tuple[MonthRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.months)

    def __iter__(self):
        return iter(self.months)

    def __getitem__(self, index: int) -> MonthRecord:
        return self.months[index]

    @classmethod
    def empty(cls) -> "RecordSet":
        return cls(months=tuple(MonthRecord.empty(month_id) for month_id in MONTH_IDS))

    @classmethod
    def from_months(cls, months: Sequence[MonthRecord]) -> "RecordSet":
        return cls(months=tuple(months))

    def index_of(self, month: str) -> int:
        key = month.strip().lower()
        for idx, record in enumerate(self.months):
            if record.id.lower() == key or record.name.lower() == key:
                return idx
        raise IndexError(f"Month not in record set: {month}")

    def replace_month(self, index: int, month: MonthRecord) -> "RecordSet":
        if index < 0 or index >= len(self.months):
            raise IndexError(f"Month index out of range: {index}")
        months = list(self.months)
        months[index] = month
        return RecordSet(months=tuple(months))

    def to_storage(self) -> dict[str, Any]:
        return {"detailed": [month.to_storage() for month in self.months]}

    @classmethod
    def from_storage(cls, payload: Any) -> "RecordSet | None":
        """Return None when the document carries no months."""
        if not isinstance(payload, Mapping):
            return None
        detailed = payload.get("detailed")
        if not isinstance(detailed, list) or not detailed:
            return None
        months = [MonthRecord.from_storage(item) for item in detailed if isinstance(item, Mapping)]
        if not months:
            return None
        return cls(months=tuple(months))
