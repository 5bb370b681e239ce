import json

import pytest

from metrics_editor.domain.derivation import rederive
from metrics_editor.domain.models import MONTH_IDS, MetricSet, MonthRecord, RecordSet
from metrics_editor.errors import PersistenceError
from metrics_editor.infrastructure.json_repository import JsonRecordStore


def _sample_record_set():
    record_set = RecordSet.empty()
    month = rederive(
        MonthRecord(
            id="Jan",
            name="Jan",
            google=MetricSet().with_raw(investment=1500.5, revenue=4000, clicks=300, leads=30, sales=3),
            facebook=MetricSet().with_raw(investment=200, clicks=40),
        )
    )
    return record_set.replace_month(0, month)


def test_missing_file_loads_none(store):
    assert store.load() is None


def test_round_trip(store):
    record_set = _sample_record_set()
    store.save(record_set)
    assert store.load() == record_set


def test_wire_format_keys(store):
    store.save(_sample_record_set())
    payload = json.loads(store.path.read_text(encoding="utf-8"))
    first = payload["detailed"][0]
    assert first["id"] == "Jan"
    assert set(first) == {"id", "name", "google", "facebook", "instagram", "total"}
    assert first["google"]["invest"] == 1500.5
    assert first["google"]["cliques"] == 300
    assert first["total"]["taxa_venda"] == 10.0
    assert "investment" not in first["google"]
    assert [row["id"] for row in payload["detailed"]] == list(MONTH_IDS)


def test_reads_original_store_documents(store):
    store.path.write_text(
        json.dumps({"detailed": [{"id": "Mar", "name": "Mar", "google": {"invest": 10, "cpc": 1}, "total": {}}]}),
        encoding="utf-8",
    )
    record_set = store.load()
    assert len(record_set) == 1
    assert record_set[0].google.investment == 10
    assert record_set[0].google.cpc == 1
    assert record_set[0].facebook == MetricSet()


@pytest.mark.parametrize("document", ["null", "{}", '{"detailed": []}', "[]"])
def test_empty_documents_load_none(store, document):
    store.path.write_text(document, encoding="utf-8")
    assert store.load() is None


def test_invalid_json_raises(store):
    store.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        store.load()


def test_save_overwrites(store):
    store.save(_sample_record_set())
    store.save(RecordSet.empty())
    assert store.load() == RecordSet.empty()


def test_save_failure_keeps_previous_file(tmp_path):
    target = tmp_path / "database.json"
    target.mkdir()
    store = JsonRecordStore(target)
    with pytest.raises(PersistenceError):
        store.save(RecordSet.empty())
    assert target.is_dir()
    assert list(tmp_path.iterdir()) == [target]
