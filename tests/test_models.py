"""Tests for the patient/session data model."""

from datetime import date

import pytest

from physio_documentation.core.constants import complaint_catalog
from physio_documentation.core.enums import ClinicalTextField, SessionType
from physio_documentation.core.exceptions import PatientValidationError
from physio_documentation.core.models import ICD10Code, Patient, Session


def test_register_creates_one_initial_session():
    patient = Patient.register("  Anna Muster ", birth_year=1980)
    assert patient.name == "Anna Muster"
    assert len(patient.sessions) == 1
    assert patient.sessions[0].type is SessionType.INITIAL
    assert patient.sessions[0].date == date.today()


def test_register_rejects_blank_name():
    with pytest.raises(PatientValidationError) as excinfo:
        Patient.register("   ")
    assert excinfo.value.field_name == "name"


def test_diagnosis_needs_a_code():
    patient = Patient.register("Anna")
    with pytest.raises(PatientValidationError):
        patient.attach_diagnosis(ICD10Code(code="", short_label="Kreuzschmerz"))
    assert not patient.has_diagnosis


def test_identifiers_are_unique():
    sessions = [Session() for _ in range(50)]
    assert len({s.id for s in sessions}) == 50


def test_session_defaults():
    session = Session.create(SessionType.FOLLOWUP)
    assert session.pain == 5
    assert session.function == 5
    assert session.score is None
    assert session.note == ""
    assert session.complaints == []


def test_session_type_is_parsed_from_string():
    assert Session(type="followup").type is SessionType.FOLLOWUP
    with pytest.raises(ValueError):
        Session(type="discharge")


def test_complaints_are_deduplicated_in_order():
    session = Session(complaints=["pain", "swelling", "pain"])
    assert session.complaints == ["pain", "swelling"]


def test_toggle_adds_and_removes():
    session = Session()
    assert session.toggle_complaint("pain") is True
    assert session.toggle_measure("mt") is True
    assert session.toggle_complaint("pain") is False
    assert session.complaints == []
    assert session.measures == ["mt"]


def test_append_text_joins_with_single_space():
    session = Session()
    session.append_text(ClinicalTextField.STATUS, "Flexion 90 Grad")
    session.append_text(ClinicalTextField.STATUS, " Extension frei ")
    assert session.status_text == "Flexion 90 Grad Extension frei"


def test_every_text_field_has_an_accessor():
    session = Session()
    for text_field in ClinicalTextField:
        session.set_text(text_field, text_field.value)
        assert session.get_text(text_field) == text_field.value


def test_note_sections_exclude_transcript():
    assert ClinicalTextField.TRANSCRIPT not in ClinicalTextField.note_sections()
    assert ClinicalTextField.note_sections()[0] is ClinicalTextField.ANAMNESIS


def test_catalog_falls_back_to_raw_id():
    catalog = complaint_catalog()
    assert catalog.label_for("stiffness") == "Stiffness"
    assert catalog.label_for("vertigo") == "vertigo"
    assert catalog.unknown_ids(["pain", "vertigo"]) == ["vertigo"]
    assert catalog.ids[0] == "pain"


def test_session_round_trip_keeps_null_and_zero_scores():
    unscored = Session(date=date(2025, 1, 2))
    zero = Session(date=date(2025, 1, 3), score=0)

    assert Session.from_dict(unscored.to_dict()).score is None
    assert Session.from_dict(zero.to_dict()).score == 0
    assert Session.from_dict(zero.to_dict()).is_scored


def test_stored_integral_float_score_counts_as_computed():
    session = Session.from_dict({"id": "s1", "score": 60.0})
    assert session.score == 60
    assert isinstance(session.score, int)
    assert session.is_scored
    assert Session.from_dict({"id": "s2", "score": 59.5}).score is None
    assert not Session.from_dict({"id": "s3", "score": True}).is_scored


def test_session_from_sparse_record_uses_defaults():
    session = Session.from_dict({"id": "s1", "type": "bogus", "date": "not-a-date"})
    assert session.id == "s1"
    assert session.type is SessionType.INITIAL
    assert session.date is None
    assert session.pain == 5
    assert session.anamnesis_text == ""


def test_patient_stored_keys():
    patient = Patient(name="Anna", diagnosis_code="M54.5", diagnosis_short_label="Kreuzschmerz")
    data = patient.to_dict()
    assert data["icdCode"] == "M54.5"
    assert data["icdShort"] == "Kreuzschmerz"
    assert data["birthYear"] is None
    assert data["sessions"] == []


def test_remove_session():
    patient = Patient.register("Anna")
    session_id = patient.sessions[0].id
    assert patient.remove_session(session_id).id == session_id
    assert patient.sessions == []
    assert patient.remove_session(session_id) is None
