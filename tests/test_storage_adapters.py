import json

import pytest

from dealdesk.adapters.sql_repo import SqlInputStorage
from dealdesk.adapters.storage import DEFAULT_STORAGE_KEY, JsonFileInputStorage
from dealdesk.domain.errors import PersistenceError
from dealdesk.domain.inputs import InputRecord
from dealdesk.services.input_store import InputStore


def test_json_storage_round_trip(tmp_path):
    path = tmp_path / "inputs.json"
    storage = JsonFileInputStorage(path)
    assert storage.load() is None

    record = InputRecord(purchase_price="100000", arv_percentage_goal="65")
    storage.save(record)

    assert JsonFileInputStorage(path).load() == record
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk[DEFAULT_STORAGE_KEY]["purchasePrice"] == "100000"


def test_json_storage_clear_removes_file_when_empty(tmp_path):
    path = tmp_path / "inputs.json"
    storage = JsonFileInputStorage(path)
    storage.save(InputRecord(arv="1"))
    storage.clear()
    assert not path.exists()
    assert storage.load() is None
    storage.clear()


def test_json_storage_keeps_other_keys(tmp_path):
    path = tmp_path / "inputs.json"
    path.write_text(json.dumps({"someOtherTool": {"x": 1}}), encoding="utf-8")
    storage = JsonFileInputStorage(path)

    storage.save(InputRecord(arv="1"))
    storage.clear()

    assert json.loads(path.read_text(encoding="utf-8")) == {"someOtherTool": {"x": 1}}


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", json.dumps({DEFAULT_STORAGE_KEY: "oops"})])
def test_json_storage_corrupt_file_raises(tmp_path, content):
    path = tmp_path / "inputs.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(PersistenceError):
        JsonFileInputStorage(path).load()


def test_store_survives_corrupt_json_file(tmp_path):
    path = tmp_path / "inputs.json"
    path.write_text("{not json", encoding="utf-8")
    store = InputStore(JsonFileInputStorage(path))
    assert store.get_snapshot() == InputRecord.defaults()
    assert store.warnings


def test_store_restores_previous_session_from_json(tmp_path):
    path = tmp_path / "inputs.json"
    first = InputStore(JsonFileInputStorage(path))
    first.set_field("rentalIncome", "1500")
    first.set_field("piti", "800")

    second = InputStore(JsonFileInputStorage(path))
    assert second.get_snapshot().rental_income == "1500"
    assert second.get_snapshot().piti == "800"


def test_sql_storage_round_trip(tmp_path):
    uri = f"sqlite:///{tmp_path / 'dealdesk.db'}"
    storage = SqlInputStorage(uri)
    assert storage.load() is None

    storage.save(InputRecord(arv="180000"))
    storage.save(InputRecord(arv="190000", rehab="5000"))

    loaded = SqlInputStorage(uri).load()
    assert loaded == InputRecord(arv="190000", rehab="5000")

    storage.clear()
    assert storage.load() is None


def test_sql_storage_keys_are_isolated(tmp_path):
    uri = f"sqlite:///{tmp_path / 'dealdesk.db'}"
    a = SqlInputStorage(uri, key="a")
    b = SqlInputStorage(uri, key="b")
    a.save(InputRecord(taxes="1"))
    assert b.load() is None
    b.clear()
    assert a.load() == InputRecord(taxes="1")


def test_corrupt_json_file_is_replaced_on_next_edit(tmp_path):
    path = tmp_path / "inputs.json"
    path.write_text("{not json", encoding="utf-8")

    store = InputStore(JsonFileInputStorage(path))
    store.set_field("rentalIncome", "1500")
    store.reset()
    store.set_field("piti", "800")

    reloaded = InputStore(JsonFileInputStorage(path))
    assert reloaded.get_snapshot().piti == "800"
    assert reloaded.get_snapshot().rental_income == ""
    assert reloaded.warnings == []
    assert store.warnings == []

    # the unreadable original is kept next to the store
    assert (tmp_path / "inputs.json.corrupt").read_text(encoding="utf-8") == "{not json"


def test_clear_erases_corrupt_json_file(tmp_path):
    path = tmp_path / "inputs.json"
    path.write_text("[1, 2]", encoding="utf-8")
    storage = JsonFileInputStorage(path)

    storage.clear()

    assert not path.exists()
    assert storage.load() is None
    assert storage.corrupt_path.exists()


def test_save_over_non_object_entry(tmp_path):
    path = tmp_path / "inputs.json"
    path.write_text(json.dumps({DEFAULT_STORAGE_KEY: "oops", "other": 1}), encoding="utf-8")
    storage = JsonFileInputStorage(path)

    storage.save(InputRecord(arv="5"))

    assert storage.load() == InputRecord(arv="5")
    assert json.loads(path.read_text(encoding="utf-8"))["other"] == 1


def test_sql_storage_updates_existing_row(tmp_path):
    from sqlmodel import Session

    from dealdesk.adapters.sql_repo import InputRecordRow

    uri = f"sqlite:///{tmp_path / 'dealdesk.db'}"
    storage = SqlInputStorage(uri)
    storage.save(InputRecord(arv="1"))
    storage.save(InputRecord(arv="2"))

    with Session(storage.engine) as session:
        row = session.get(InputRecordRow, DEFAULT_STORAGE_KEY)
        assert row is not None
        assert row.payload["arv"] == "2"
        assert row.updated_at is not None


def test_store_persists_through_sql_backend(tmp_path):
    uri = f"sqlite:///{tmp_path / 'dealdesk.db'}"
    store = InputStore(SqlInputStorage(uri))
    store.set_field("assignmentFee", "12000")
    assert store.warnings == []

    assert InputStore(SqlInputStorage(uri)).get_snapshot().assignment_fee == "12000"
