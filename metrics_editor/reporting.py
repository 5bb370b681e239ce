"""HTML month report with the three channels and their total side by side."""

from __future__ import annotations

from datetime import datetime
from html import escape
from pathlib import Path
from typing import List

from metrics_editor.application.reporting.metrics import fmt_count, fmt_money, fmt_pct, fmt_roas
from metrics_editor.application.reporting.rendering import CHANNEL_TITLES, PANEL_SECTIONS
from metrics_editor.domain.models import CHANNELS, TOTAL_CHANNEL, MonthRecord, RecordSet


def _render_section_table(month: MonthRecord, title: str, lines: list) -> str:
    header_cells = "".join(
        f"<th class=\"{'total-col' if channel == TOTAL_CHANNEL else ''}\">{escape(CHANNEL_TITLES[channel])}</th>"
        for channel in CHANNELS
    )
    body_rows: List[str] = []
    for label, field_name, formatter, editable in lines:
        css = "raw" if editable else "derived"
        cells = "".join(
            f"<td class=\"{'total-col' if channel == TOTAL_CHANNEL else ''}\">"
            f"{escape(formatter(getattr(month.channel(channel), field_name)))}</td>"
            for channel in CHANNELS
        )
        body_rows.append(f"<tr class=\"{css}\"><th>{escape(label)}</th>{cells}</tr>")
    return (
        "<section class=\"panel\">"
        f"<h2>{escape(title)}</h2>"
        "<table class=\"metric-table\">"
        f"<thead><tr><th></th>{header_cells}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody>"
        "</table>"
        "</section>"
    )


def _headline(month: MonthRecord) -> str:
    total = month.total
    return (
        f"Investimento {fmt_money(total.investment)} | Faturamento {fmt_money(total.revenue)} | "
        f"ROAS {fmt_roas(total.roas)} | Leads {fmt_count(total.leads)} | "
        f"Vendas {fmt_count(total.sales)} ({fmt_pct(total.sale_rate)})"
    )


def write_html_report(output_path: Path, record_set: RecordSet, month_index: int) -> None:
    month = record_set[month_index]
    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M")
    sections_html = "".join(_render_section_table(month, title, lines) for title, lines in PANEL_SECTIONS)

    html = f"""<!doctype html>
<html lang="pt-BR">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Métricas {escape(month.name)}</title>
  <style>
    :root {{
      --bg: #e4f0f0;
      --panel: #ffffff;
      --line: #d5dce8;
      --text: #0f172a;
      --sub: #475569;
      --brand: #1a3c45;
    }}
    * {{ box-sizing: border-box; }}
    body {{
      margin: 0;
      background: radial-gradient(circle at center, #e4f0f0 0%, #99c8d2 100%);
      color: var(--text);
      font-family: "Segoe UI", sans-serif;
    }}
    .wrap {{
      max-width: 1100px;
      margin: 0 auto;
      padding: 20px;
    }}
    .panel {{
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 14px;
      box-shadow: 0 4px 16px rgba(15, 23, 42, 0.05);
      padding: 14px 18px;
      margin-bottom: 14px;
    }}
    h1 {{
      margin: 0 0 8px;
      color: var(--brand);
      font-size: 28px;
    }}
    h2 {{
      margin: 0 0 8px;
      font-size: 16px;
      text-transform: uppercase;
      color: var(--sub);
    }}
    .meta {{
      color: var(--sub);
      font-size: 13px;
    }}
    table {{
      width: 100%;
      border-collapse: collapse;
      table-layout: fixed;
      font-size: 13px;
    }}
    th, td {{
      border: 1px solid var(--line);
      padding: 6px 8px;
      text-align: right;
    }}
    tbody th {{
      text-align: left;
      font-weight: 600;
    }}
    thead th {{
      background: #eef4ff;
    }}
    tr.derived td {{
      color: #1d4ed8;
      background: #f8fafc;
    }}
    .total-col {{
      font-weight: 700;
    }}
  </style>
</head>
<body>
  <div class="wrap">
    <section class="panel">
      <h1>{escape(month.name)}</h1>
      <div class="meta">{escape(_headline(month))}</div>
      <div class="meta">Gerado em: {escape(generated_at)}</div>
    </section>
    {sections_html}
  </div>
</body>
</html>
"""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
