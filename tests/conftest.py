import pytest
from pathlib import Path

from metrics_editor.infrastructure.json_repository import JsonRecordStore

LABELS = {
    "investment": "Investimento ( mkt)",
    "revenue": "Faturamento",
    "leads": "Leads (Contatos Recebidos) (mkt)\n",
    "clicks": "Cliques (mkt)",
    "consultations": "Atendimentos (Conversas sem vácuo)",
    "bookings": "Agendamentos",
    "show_ups": "Comparecimentos",
    "sales": "Pessoas que compraram",
}


def build_grid(months: int, rows: dict, header_width: int | None = None) -> list:
    """Export-shaped grid: 2 label columns, then 4 columns per month (spacer, face, insta, google).

    ``rows`` maps a field name to a list of (face, insta, google) cell triples, one per month.
    """
    width = 2 + 4 * months
    header = ["", ""] + [f"MES {i + 1}" if j == 0 else "" for i in range(months) for j in range(4)]
    if header_width is not None:
        header = header[:header_width]
    grid = [header, ["", "Canal"] + ["", "Face", "Insta", "Google"] * months, [""] * width]
    for field_name, triples in rows.items():
        row = ["", LABELS[field_name]]
        for face, insta, google in triples:
            row += ["", face, insta, google]
        row += [""] * (width - len(row))
        grid.append(row)
    return grid


@pytest.fixture()
def store(tmp_path: Path) -> JsonRecordStore:
    return JsonRecordStore(tmp_path / "database.json")


SAMPLE_CSV_LINES = (
    ",,JANEIRO,,,\n",
    ",Canal,,Face,Insta,Google\n",
    ",,,,,\n",
    ',Investimento ( mkt),,"R$ 1.000,00","R$ 500,00","R$ 2.000,00"\n',
    ",Cliques (mkt),,100,50,200\n",
    ',"Leads (Contatos Recebidos) (mkt)\n",,10,5,20\n',
)


@pytest.fixture()
def sample_csv(tmp_path: Path) -> Path:
    """One month block: investment and clicks for face/insta/google."""
    path = tmp_path / "export.csv"
    path.write_text("".join(SAMPLE_CSV_LINES), encoding="utf-8")
    return path


@pytest.fixture()
def blank_line_csv(tmp_path: Path) -> Path:
    """Same export with a leading empty line and empty lines between rows."""
    path = tmp_path / "export_blank_lines.csv"
    path.write_text("\n" + "\n".join(SAMPLE_CSV_LINES) + "\r\n", encoding="utf-8")
    return path


@pytest.fixture()
def grid_builder():
    return build_grid
