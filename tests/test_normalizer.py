import pytest

from metrics_editor.errors import ImportFailedError
from metrics_editor.ingestion import parse_number
from metrics_editor.normalizer import match_metric, normalize


def test_parse_number():
    assert parse_number("R$ 1.234,56") == 1234.56
    assert parse_number("12,5%") == 12.5
    assert parse_number("  R$ 500,00 ") == 500.0
    assert parse_number("R$ 1.234.567,89") == 1234567.89
    assert parse_number("") == 0
    assert parse_number("abc") == 0
    assert parse_number(None) == 0
    assert parse_number("-") == 0
    assert parse_number(42) == 42.0
    assert parse_number(float("nan")) == 0
    assert parse_number("1e999") == 0
    assert parse_number("-1e999") == 0
    assert parse_number(float("inf")) == 0


def test_match_metric_normalizes_line_breaks():
    assert match_metric("Leads (Contatos Recebidos) (mkt)\n") == "leads"
    assert match_metric("Leads (Contatos Recebidos)\n(mkt)") == "leads"
    assert match_metric("  Cliques (mkt)  ") == "clicks"
    assert match_metric("Impressões") is None
    assert match_metric(None) is None


def test_match_metric_first_entry_wins():
    # Contains both the revenue and the bookings labels.
    assert match_metric("Faturamento dos Agendamentos") == "revenue"
    assert match_metric("Total de Comparecimentos e Agendamentos") == "bookings"


def test_single_month_channel_order(grid_builder):
    grid = grid_builder(
        1,
        {
            "investment": [("R$ 1.000,00", "R$ 500,00", "R$ 2.000,00")],
            "clicks": [("100", "50", "200")],
        },
    )
    months = normalize(grid)

    assert len(months) == 1
    month = months[0]
    assert month.id == "Jan"
    assert month.name == "Jan"
    assert month.facebook.investment == 1000
    assert month.instagram.investment == 500
    assert month.google.investment == 2000
    assert month.google.clicks == 200
    assert month.total.investment == 3500
    assert month.total.clicks == 350
    assert month.total.cpc == 10.0
    assert month.google.cpc == 10.0
    assert month.total.leads == 0


def test_full_funnel_row_mapping(grid_builder):
    grid = grid_builder(
        1,
        {
            "revenue": [("R$ 3.000,00", "0", "R$ 6.000,00")],
            "leads": [("30", "", "60")],
            "consultations": [("15", "", "30")],
            "bookings": [("10", "", "20")],
            "show_ups": [("5", "", "10")],
            "sales": [("3", "", "6")],
        },
    )
    google = normalize(grid)[0].google
    assert google.revenue == 6000
    assert google.leads == 60
    assert google.consultations == 30
    assert google.bookings == 20
    assert google.show_ups == 10
    assert google.sales == 6
    assert google.average_ticket == 1000.0
    assert google.consultation_rate == 50.0
    assert google.sale_rate == 10.0


def test_months_in_calendar_order(grid_builder):
    grid = grid_builder(
        3,
        {"investment": [("1", "0", "0"), ("2", "0", "0"), ("3", "0", "0")]},
    )
    months = normalize(grid)
    assert [m.id for m in months] == ["Jan", "Fev", "Mar"]
    assert [m.facebook.investment for m in months] == [1, 2, 3]


def test_short_header_skips_month(grid_builder):
    # Third block would need header columns up to index 13.
    grid = grid_builder(
        3,
        {"clicks": [("1", "1", "1"), ("2", "2", "2"), ("3", "3", "3")]},
        header_width=12,
    )
    months = normalize(grid)
    assert [m.id for m in months] == ["Jan", "Fev"]
    assert months[1].total.clicks == 6


def test_rows_before_data_start_are_ignored(grid_builder):
    grid = grid_builder(1, {"clicks": [("1", "2", "3")]})
    grid[2] = ["", "Cliques (mkt)", "", "999", "999", "999"]
    month = normalize(grid)[0]
    assert month.total.clicks == 6


def test_short_and_unlabeled_rows(grid_builder):
    grid = grid_builder(1, {"clicks": [("10", "20", "30")]})
    grid.append([""])
    grid.append(["x"])
    grid.append(["", "Faturamento", "", "R$ 10,00"])
    grid.append(["", None, "", "5", "5", "5"])
    month = normalize(grid)[0]
    assert month.facebook.revenue == 10
    assert month.instagram.revenue == 0
    assert month.google.revenue == 0
    assert month.total.clicks == 60


def test_later_duplicate_row_overwrites(grid_builder):
    grid = grid_builder(1, {"clicks": [("10", "20", "30")]})
    grid.append(["", "Cliques (mkt)", "", "1", "2", "3"])
    assert normalize(grid)[0].total.clicks == 6


def test_grid_without_month_blocks_fails():
    with pytest.raises(ImportFailedError):
        normalize([])
    with pytest.raises(ImportFailedError):
        normalize([["", "", "JANEIRO", "", ""]])


def test_unexpected_failure_is_import_failed():
    class BrokenRow(list):
        def __getitem__(self, index):
            raise RuntimeError("broken")

        def __len__(self):
            return 10

    grid = [["h"] * 10, [], [], BrokenRow()]
    with pytest.raises(ImportFailedError):
        normalize(grid)
