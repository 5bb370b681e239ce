"""Text rendering of one month/channel panel."""

from __future__ import annotations

from typing import Callable, List, Tuple

from metrics_editor.application.reporting.metrics import fmt_count, fmt_money, fmt_pct, fmt_roas
from metrics_editor.domain.models import TOTAL_CHANNEL, MetricSet, MonthRecord

CHANNEL_TITLES = {
    "total": "Visão Total",
    "google": "Google",
    "facebook": "Face",
    "instagram": "Insta",
}

Line = Tuple[str, str, Callable[[float | None], str], bool]

# (label, field, formatter, editable)
PANEL_SECTIONS: List[Tuple[str, List[Line]]] = [
    (
        "Financeiro & Ads",
        [
            ("Investimento Total", "investment", fmt_money, True),
            ("Faturamento", "revenue", fmt_money, True),
            ("ROAS", "roas", fmt_roas, False),
            ("Ticket Médio", "average_ticket", fmt_money, False),
        ],
    ),
    (
        "Tráfego",
        [
            ("Cliques", "clicks", fmt_count, True),
            ("CPC", "cpc", fmt_money, False),
            ("Leads", "leads", fmt_count, True),
            ("CPL", "cpl", fmt_money, False),
            ("Taxa Conversão (Lead)", "lead_rate", fmt_pct, False),
        ],
    ),
    (
        "Comercial",
        [
            ("Atendimentos", "consultations", fmt_count, True),
            ("Tx. Atendimento", "consultation_rate", fmt_pct, False),
            ("Agendamentos", "bookings", fmt_count, True),
            ("Tx. Agendamento", "booking_rate", fmt_pct, False),
            ("Comparecimentos", "show_ups", fmt_count, True),
            ("Tx. Comparecimento", "show_up_rate", fmt_pct, False),
        ],
    ),
    (
        "Vendas",
        [
            ("Total Vendas", "sales", fmt_count, True),
            ("Taxa Conversão Final", "sale_rate", fmt_pct, False),
        ],
    ),
]


def _section_lines(metrics: MetricSet, lines: List[Line], read_only: bool) -> List[str]:
    width = max(len(label) for label, _, _, _ in lines)
    rendered: List[str] = []
    for label, field_name, formatter, editable in lines:
        marker = "*" if editable and not read_only else " "
        rendered.append(f"  {marker} {label.ljust(width)}  {formatter(getattr(metrics, field_name))}")
    return rendered


def render_panel(month: MonthRecord, channel: str) -> str:
    """Render every field of one month/channel; ``*`` marks editable counters."""
    metrics = month.channel(channel)
    read_only = channel == TOTAL_CHANNEL
    lines = [f"{month.name} | {CHANNEL_TITLES.get(channel, channel)}"]
    if read_only:
        lines.append("Exibindo soma automática (somente leitura).")
    for title, section in PANEL_SECTIONS:
        lines.append("")
        lines.append(f"[{title}]")
        lines.extend(_section_lines(metrics, section, read_only))
    return "\n".join(lines)


def month_summary_line(month: MonthRecord) -> str:
    total = month.total
    return (
        f"{month.name}: investimento {fmt_money(total.investment)}, "
        f"faturamento {fmt_money(total.revenue)}, ROAS {fmt_roas(total.roas)}, "
        f"leads {fmt_count(total.leads)}, vendas {fmt_count(total.sales)}"
    )
