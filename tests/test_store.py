import json

import pytest

from scientistmanager.model.errors import (
    DuplicateRecord, NoFileSelected, NoSelection, NotFound, ParseError, ReadError,
    WriteError
)
from scientistmanager.model.store import ScientistStore, parse_records


def names(records):
    return [r.full_name for r in records]


# --- load / import ---

def test_load_replaces_records_in_file_order(store):
    assert names(store.records) == ["Иван Петров", "Олена Коваль", "John Smith"]
    assert [r.id for r in store.records] == ["a1", "b2", "c3"]


def test_load_copies_text_verbatim_into_local_file(sample_json, data_file):
    s = ScientistStore()
    s.load(sample_json, data_file)

    assert s.file_path == data_file
    assert data_file.read_text(encoding="utf-8") == sample_json
    assert s.is_modified is False


def test_load_without_file_path_stays_in_memory(sample_json):
    s = ScientistStore()
    records = s.load(sample_json)

    assert len(records) == 3
    assert s.file_path is None


def test_load_clears_selection(store, sample_json):
    store.select("b2")
    store.load(sample_json)
    assert store.selected is None


@pytest.mark.parametrize("text", [
    "{not json",
    '{"fullName": "object instead of array"}',
    "[1, 2, 3]",
    '[{"fullName": 5}]',
])
def test_failed_parse_leaves_state_and_file_untouched(store, data_file, text):
    before = store.records
    file_before = data_file.read_text(encoding="utf-8")

    with pytest.raises(ParseError):
        store.load(text)

    assert store.records == before
    assert data_file.read_text(encoding="utf-8") == file_before


def test_failed_import_write_leaves_state_untouched(store, sample_json, broken_path):
    before = store.records

    with pytest.raises(WriteError):
        store.load("[]", broken_path)

    assert store.records == before
    assert store.file_path != broken_path


def test_import_file_reads_source_and_writes_target(tmp_path, sample_json):
    source = tmp_path / "bundled.json"
    source.write_text(sample_json, encoding="utf-8")
    target = tmp_path / "appdata" / "scientist.json"

    s = ScientistStore()
    s.import_file(source, target)

    assert len(s) == 3
    assert target.read_text(encoding="utf-8") == sample_json


def test_import_file_accepts_byte_order_mark(tmp_path, sample_json):
    source = tmp_path / "bom.json"
    source.write_bytes(b"\xef\xbb\xbf" + sample_json.encode("utf-8"))

    s = ScientistStore()
    s.import_file(source, tmp_path / "out.json")

    assert names(s.records)[0] == "Иван Петров"


def test_import_missing_file_raises_read_error(tmp_path):
    with pytest.raises(ReadError):
        ScientistStore().import_file(tmp_path / "missing.json", tmp_path / "out.json")


def test_import_undecodable_file_raises_parse_error(tmp_path):
    source = tmp_path / "binary.json"
    source.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(ParseError):
        ScientistStore().import_file(source, tmp_path / "out.json")


def test_duplicate_ids_are_replaced():
    records = parse_records(json.dumps([{"id": "same"}, {"id": "same"}]))
    assert records[0].id == "same"
    assert records[1].id != "same"


# --- save ---

def test_save_without_file_raises():
    with pytest.raises(NoFileSelected):
        ScientistStore().save()


def test_save_round_trip_preserves_records_and_order(store, data_file):
    text = store.save()

    assert data_file.read_text(encoding="utf-8") == text
    assert parse_records(text) == store.records


def test_save_writes_indented_json_with_unicode(store, data_file):
    store.save()
    text = data_file.read_text(encoding="utf-8")

    assert "Иван Петров" in text
    assert '\n  {\n    "id": "a1"' in text


def test_save_failure_raises_write_error(store, broken_path):
    store.file_path = broken_path
    with pytest.raises(WriteError):
        store.save()


# --- filter ---

def test_filter_example_from_requirements():
    s = ScientistStore()
    s.load(json.dumps([{"fullName": "Иван Петров", "faculty": "CS", "rank": "Professor"}]))

    assert names(s.filter("pro")) == ["Иван Петров"]
    assert s.filter("xyz") == []


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_returns_everything(store, query):
    assert store.filter(query) == store.records


def test_filter_is_case_insensitive_for_cyrillic(store):
    assert names(store.filter("ПЕТРОВ")) == ["Иван Петров"]
    assert names(store.filter("коваль")) == ["Олена Коваль"]


def test_filter_searches_only_name_faculty_and_rank(store):
    # "Computer Science" is only in a department, "phd" only in a degree
    assert store.filter("computer science") == []
    assert store.filter("phd") == []
    assert store.filter("2010") == []
    assert names(store.filter("physics")) == ["John Smith"]


def test_filter_preserves_relative_order(store):
    # Matches rank of the first two records
    assert names(store.filter("professor")) == ["Иван Петров", "Олена Коваль"]


# --- add / update / delete ---

def test_add_appends_once_at_the_end_and_autosaves(store, data_file, make_scientist):
    record = make_scientist("Григорій Сковорода")
    store.add(record)

    all_records = store.filter("")
    assert all_records[-1] is record
    assert sum(1 for r in all_records if r.id == record.id) == 1
    assert parse_records(data_file.read_text(encoding="utf-8"))[-1] == record
    assert store.is_modified is False


def test_add_rolls_back_when_autosave_fails(store, broken_path, make_scientist):
    store.file_path = broken_path

    with pytest.raises(WriteError):
        store.add(make_scientist())

    assert len(store) == 3
    assert store.is_modified is False


def test_add_rejects_duplicate_id(store, make_scientist):
    with pytest.raises(DuplicateRecord) as excinfo:
        store.add(make_scientist(id="a1"))

    assert excinfo.value.record_id == "a1"
    assert len(store) == 3


def test_update_changes_fields_but_not_position_or_id(store, data_file, make_scientist):
    store.update("b2", make_scientist("Олена Коваль-Шевченко", rank="Professor", id="ignored"))

    record = store.records[1]
    assert record.id == "b2"
    assert record.full_name == "Олена Коваль-Шевченко"
    assert record.rank == "Professor"
    assert parse_records(data_file.read_text(encoding="utf-8"))[1].full_name == "Олена Коваль-Шевченко"


def test_update_rolls_back_when_autosave_fails(store, broken_path, make_scientist):
    original = store.get("b2").full_name
    store.file_path = broken_path

    with pytest.raises(WriteError):
        store.update("b2", make_scientist("Changed"))

    assert store.get("b2").full_name == original


def test_update_with_unchanged_fields_does_not_write(sample_json, data_file):
    s = ScientistStore(autosave=False)
    s.load(sample_json, data_file)

    s.update("a1", s.get("a1"))

    assert s.is_modified is False
    assert data_file.read_text(encoding="utf-8") == sample_json


def test_update_unknown_id_raises_not_found(store, make_scientist):
    with pytest.raises(NotFound):
        store.update("nope", make_scientist())


def test_delete_removes_exactly_one_and_clears_selection(store, data_file):
    store.select("b2")
    removed = store.delete("b2")

    assert removed.full_name == "Олена Коваль"
    assert len(store) == 2
    assert all(r.id != "b2" for r in store.records)
    assert store.selected is None
    assert len(parse_records(data_file.read_text(encoding="utf-8"))) == 2


def test_delete_keeps_other_selection(store):
    store.select("a1")
    store.delete("c3")
    assert store.selected.id == "a1"


def test_delete_rolls_back_when_autosave_fails(store, broken_path):
    store.select("b2")
    store.file_path = broken_path

    with pytest.raises(WriteError):
        store.delete("b2")

    assert [r.id for r in store.records] == ["a1", "b2", "c3"]
    assert store.selected_id == "b2"


def test_delete_unknown_id_raises_not_found(store):
    with pytest.raises(NotFound):
        store.delete("nope")


# --- selection ---

def test_edit_and_delete_need_a_selection(store, make_scientist):
    with pytest.raises(NoSelection):
        store.update_selected(make_scientist())
    with pytest.raises(NoSelection):
        store.delete_selected()


def test_selected_operations_act_on_selected_record(store, make_scientist):
    store.select("c3")
    store.update_selected(make_scientist("Джон Сміт"))
    assert store.get("c3").full_name == "Джон Сміт"

    store.delete_selected()
    assert [r.id for r in store.records] == ["a1", "b2"]
    assert store.selected is None


def test_select_unknown_id_raises_not_found(store):
    with pytest.raises(NotFound):
        store.select("nope")


def test_select_none_clears_selection(store):
    store.select("a1")
    assert store.select(None) is None
    assert store.selected is None


# --- autosave policy ---

def test_without_autosave_mutations_only_mark_modified(sample_json, data_file, make_scientist):
    s = ScientistStore(autosave=False)
    s.load(sample_json, data_file)

    s.add(make_scientist())
    assert s.is_modified is True
    assert data_file.read_text(encoding="utf-8") == sample_json

    s.save()
    assert s.is_modified is False
    assert len(parse_records(data_file.read_text(encoding="utf-8"))) == 4


def test_mutation_before_any_open_stays_in_memory(make_scientist):
    s = ScientistStore()
    s.add(make_scientist())

    assert len(s) == 1
    assert s.is_modified is True
    with pytest.raises(NoFileSelected):
        s.save()
