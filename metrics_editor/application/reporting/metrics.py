"""Shared numeric/formatting utilities for reporting."""

from __future__ import annotations

from typing import Any


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def _group_thousands(value: float, decimals: int) -> str:
    # 1,234.56 -> 1.234,56
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def fmt_money(value: float | None) -> str:
    if value is None:
        return "R$ 0,00"
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {_group_thousands(abs(value), 2)}"


def fmt_count(value: float | None) -> str:
    number = to_float(value)
    if number.is_integer():
        return _group_thousands(number, 0)
    return _group_thousands(number, 2)


def fmt_pct(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{_group_thousands(value, 2)}%"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{_group_thousands(value, 2)}x"
