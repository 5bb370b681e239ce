"""Derived ratio rules for channel metrics and the monthly total."""

from __future__ import annotations

import math
import sys

from .models import EDITABLE_CHANNELS, RAW_FIELDS, MetricSet, MonthRecord

EPSILON = sys.float_info.epsilon


def round_half_up(value: float | None) -> float:
    """Round to 2 decimals, halves away from zero for non-negative inputs."""
    if not value or math.isnan(value):
        return 0.0
    if math.isinf(value):
        return 0.0
    return math.floor((value + EPSILON) * 100 + 0.5) / 100


def _ratio(num: float, den: float, scale: float = 1.0) -> float:
    if den <= 0:
        return 0.0
    return round_half_up(num / den * scale)


def derive_channel(raw: MetricSet) -> MetricSet:
    """Recompute every derived field of ``raw`` from its own counters.

    Ratios use the rounded investment and revenue so a second pass over the
    result reproduces it exactly.
    """
    investment = round_half_up(raw.investment)
    revenue = round_half_up(raw.revenue)
    return MetricSet(
        investment=investment,
        revenue=revenue,
        clicks=raw.clicks,
        leads=raw.leads,
        consultations=raw.consultations,
        bookings=raw.bookings,
        show_ups=raw.show_ups,
        sales=raw.sales,
        roas=_ratio(revenue, investment),
        average_ticket=_ratio(revenue, raw.sales),
        cpc=_ratio(investment, raw.clicks),
        cpl=_ratio(investment, raw.leads),
        lead_rate=_ratio(raw.leads, raw.clicks, 100),
        consultation_rate=_ratio(raw.consultations, raw.leads, 100),
        booking_rate=_ratio(raw.bookings, raw.consultations, 100),
        show_up_rate=_ratio(raw.show_ups, raw.bookings, 100),
        sale_rate=_ratio(raw.sales, raw.leads, 100),
    )


def sum_raw(*channels: MetricSet) -> MetricSet:
    """Sum raw counters only; derived fields of the inputs are ignored."""
    totals = {name: sum(getattr(channel, name) for channel in channels) for name in RAW_FIELDS}
    return MetricSet(**totals)


def derive_month(
    google: MetricSet,
    facebook: MetricSet,
    instagram: MetricSet,
) -> tuple[MetricSet, MetricSet, MetricSet, MetricSet]:
    google = derive_channel(google)
    facebook = derive_channel(facebook)
    instagram = derive_channel(instagram)
    total = derive_channel(sum_raw(google, facebook, instagram))
    return google, facebook, instagram, total


def rederive(month: MonthRecord) -> MonthRecord:
    """Return ``month`` with all four metric sets recomputed."""
    google, facebook, instagram, total = derive_month(
        *(month.channel(channel) for channel in EDITABLE_CHANNELS)
    )
    return MonthRecord(
        id=month.id,
        name=month.name,
        google=google,
        facebook=facebook,
        instagram=instagram,
        total=total,
    )
