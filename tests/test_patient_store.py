"""Tests for patient list persistence."""

import json
from datetime import date

import pytest

from physio_documentation.core.enums import ClinicalTextField, SessionType
from physio_documentation.core.exceptions import PersistenceError
from physio_documentation.core.models import Patient, Session
from physio_documentation.repository import (
    InMemoryPatientStore,
    JsonFilePatientStore,
    PatientStore,
    deserialize_patients,
    serialize_patients,
)


def _sample_patients():
    scored = Session(
        id="s1",
        type=SessionType.FOLLOWUP,
        date=date(2025, 3, 14),
        complaints=["pain", "vertigo"],
        measures=["mt", "edu"],
        pain=3,
        function=2,
        note="Folgetermin am 14.3.2025",
        score=0,
    )
    scored.set_text(ClinicalTextField.EPICRISIS, "Weiter so")
    scored.set_text(ClinicalTextField.TRANSCRIPT, "diktierter Text")
    unscored = Session(id="s2", date=None)
    return [
        Patient(
            id="p1",
            name="Anna Muster",
            birth_year=1980,
            diagnosis_code="M54.5",
            diagnosis_short_label="Kreuzschmerz",
            diagnosis_long_label="Lendenschmerz",
            sessions=[scored, unscored],
        ),
        Patient(id="p2", name="Max", sessions=[]),
    ]


def test_document_round_trip_is_lossless():
    patients = _sample_patients()
    document = json.loads(json.dumps(serialize_patients(patients)))
    assert deserialize_patients(document) == patients


def test_document_keeps_null_score_distinct_from_zero():
    document = serialize_patients(_sample_patients())
    sessions = document["patients"][0]["sessions"]
    assert sessions[0]["score"] == 0
    assert sessions[1]["score"] is None
    assert sessions[1]["date"] is None


def test_document_uses_stored_key_names():
    session = serialize_patients(_sample_patients())["patients"][0]["sessions"][0]
    assert session["epikriseText"] == "Weiter so"
    assert session["speechNotes"] == "diktierter Text"
    assert session["type"] == "followup"
    assert session["date"] == "2025-03-14"


def test_deserialize_rejects_malformed_document():
    with pytest.raises(ValueError):
        deserialize_patients({"patients": "nope"})
    with pytest.raises(ValueError):
        deserialize_patients([])


@pytest.mark.parametrize(
    "document",
    [
        {"patients": [None]},
        {"patients": ["Anna"]},
        {"patients": [{"name": "A", "sessions": "xy"}]},
        {"patients": [{"name": "A", "sessions": [None]}]},
        {"patients": [{"name": "A", "sessions": [{"complaints": 5}]}]},
    ],
)
def test_deserialize_rejects_malformed_records(document):
    with pytest.raises(ValueError):
        deserialize_patients(document)


def test_json_file_store_malformed_records(tmp_path):
    path = tmp_path / "patients.json"
    path.write_text(json.dumps({"patients": [{"name": "A", "sessions": "xy"}]}), encoding="utf-8")
    with pytest.raises(PersistenceError) as excinfo:
        JsonFilePatientStore(str(path)).load()
    assert excinfo.value.operation == "load"


def test_json_file_store_round_trip(tmp_path):
    store = JsonFilePatientStore(str(tmp_path / "nested" / "patients.json"))
    assert isinstance(store, PatientStore)
    assert store.load() == []

    patients = _sample_patients()
    store.save(patients)
    assert store.load() == patients
    assert not list((tmp_path / "nested").glob("*.tmp"))


def test_json_file_store_overwrites_whole_document(tmp_path):
    store = JsonFilePatientStore(str(tmp_path / "patients.json"))
    store.save(_sample_patients())
    store.save([Patient(id="p9", name="Solo")])
    assert [p.id for p in store.load()] == ["p9"]


def test_json_file_store_corrupt_file(tmp_path):
    path = tmp_path / "patients.json"
    path.write_text("{broken", encoding="utf-8")
    with pytest.raises(PersistenceError) as excinfo:
        JsonFilePatientStore(str(path)).load()
    assert excinfo.value.operation == "load"


def test_json_file_store_unwritable_location(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    store = JsonFilePatientStore(str(blocker / "patients.json"))
    with pytest.raises(PersistenceError) as excinfo:
        store.save([])
    assert excinfo.value.operation == "save"


def test_in_memory_store_round_trip():
    store = InMemoryPatientStore()
    assert store.load() == []
    patients = _sample_patients()
    store.save(patients)
    assert store.save_count == 1
    assert store.load() == patients


def test_in_memory_store_corrupt_document():
    with pytest.raises(PersistenceError):
        InMemoryPatientStore(document="not json").load()
