"""Tests for note composition."""

from datetime import date

import pytest

from physio_documentation.core.constants import (
    GERMAN_LABELS,
    complaint_catalog,
    measure_catalog,
)
from physio_documentation.core.enums import ClinicalTextField, NoteLanguage, SessionType
from physio_documentation.core.exceptions import PreconditionError
from physio_documentation.core.models import Patient, Session
from physio_documentation.generation import NoteComposer


EXPECTED_ANNA_NOTE = (
    "Initial assessment on 3/7/2025\n"
    "\n"
    "Diagnosis code: M54.5 – Kreuzschmerz\n"
    "\n"
    "Subjective (summary): patient reports Pain, Stiffness. "
    "Current pain intensity 7/10, functional limitation 6/10.\n"
    "\n"
    "Plan (summary): performed today: Manual therapy. "
    "Continue therapy, adjust load, home exercise programme as needed.\n"
    "\n"
    "Severity score: 60/100 (moderate)."
)


def test_compose_example_patient(composer, anna):
    assert composer.compose(anna, anna.sessions[0]) == EXPECTED_ANNA_NOTE


def test_compose_does_not_mutate_session(composer, anna):
    session = anna.sessions[0]
    composer.compose(anna, session)
    assert session.score is None
    assert session.note == ""


def test_compose_is_idempotent(composer, anna):
    session = anna.sessions[0]
    session.set_text(ClinicalTextField.ANAMNESIS, "Seit 3 Wochen Schmerzen")
    assert composer.compose(anna, session) == composer.compose(anna, session)


def test_stored_score_takes_precedence(composer, anna):
    session = anna.sessions[0]
    session.score = 12
    composed = composer.compose_note(anna, session)
    assert composed.score == 12
    assert composed.text.endswith("Severity score: 12/100 (mild).")


def test_stored_zero_score_is_used(composer, anna):
    session = anna.sessions[0]
    session.score = 0
    assert composer.compose(anna, session).endswith("Severity score: 0/100 (mild).")


def test_integral_float_score_is_used_as_stored(composer, anna):
    session = anna.sessions[0]
    session.score = 12.0
    composed = composer.compose_note(anna, session)
    assert composed.score == 12
    assert composed.text.endswith("Severity score: 12/100 (mild).")


def test_sections_in_order_and_trimmed(composer, anna):
    session = anna.sessions[0]
    session.set_text(ClinicalTextField.EPICRISIS, "  Gute Prognose  ")
    session.set_text(ClinicalTextField.ANAMNESIS, "Sturz vor 2 Wochen\n")
    session.set_text(ClinicalTextField.THERAPY_PLAN, "6x KG")

    blocks = composer.compose(anna, session).split("\n\n")

    assert blocks[2] == "History:\nSturz vor 2 Wochen"
    assert blocks[3] == "Therapy plan:\n6x KG"
    assert blocks[4] == "Summary / epicrisis / recommendation:\nGute Prognose"
    assert blocks[5].startswith("Subjective (summary)")


def test_whitespace_only_sections_are_omitted(composer, anna):
    session = anna.sessions[0]
    session.set_text(ClinicalTextField.STATUS, "   \n\t ")
    text = composer.compose(anna, session)
    assert "Current findings" not in text
    assert "\n\n\n" not in text


def test_transcript_is_not_part_of_note(composer, anna):
    session = anna.sessions[0]
    session.set_text(ClinicalTextField.TRANSCRIPT, "raw dictation")
    assert "raw dictation" not in composer.compose(anna, session)


def test_minimal_session_still_has_all_fixed_blocks(composer):
    session = Session(type=SessionType.FOLLOWUP, date=None)
    patient = Patient(name="Max", sessions=[session])

    blocks = composer.compose(patient, session).split("\n\n")

    assert blocks == [
        "Follow-up on no date",
        "Diagnosis code: not documented",
        "Subjective (summary): no specific complaints selected. "
        "Current pain intensity 5/10, functional limitation 5/10.",
        "Plan (summary): symptom-oriented treatment. "
        "Continue therapy, adjust load, home exercise programme as needed.",
        "Severity score: 40/100 (moderate).",
    ]


def test_unknown_catalog_ids_are_shown_raw(composer, anna):
    session = anna.sessions[0]
    session.complaints = ["pain", "vertigo"]
    session.measures = ["dry_needling"]
    text = composer.compose(anna, session)
    assert "patient reports Pain, vertigo." in text
    assert "performed today: dry_needling." in text


def test_diagnosis_without_short_label(composer, anna):
    anna.diagnosis_short_label = ""
    assert "\n\nDiagnosis code: M54.5\n\n" in composer.compose(anna, anna.sessions[0])


def test_out_of_range_ratings_do_not_crash(composer, anna):
    session = anna.sessions[0]
    session.pain = 14
    session.function = -2
    text = composer.compose(anna, session)
    assert "pain intensity 14/10, functional limitation -2/10" in text


def test_german_label_pack(anna):
    composer = NoteComposer(
        complaint_catalog(NoteLanguage.GERMAN),
        measure_catalog(NoteLanguage.GERMAN),
        GERMAN_LABELS,
    )
    blocks = composer.compose(anna, anna.sessions[0]).split("\n\n")

    assert blocks[0] == "Erstbefund am 7.3.2025"
    assert blocks[1] == "ICD-10: M54.5 – Kreuzschmerz"
    assert "Schmerz, Steifigkeit" in blocks[2]
    assert "heute durchgeführt: Manuelle Therapie." in blocks[3]
    assert blocks[4] == "Beschwerde-Score: 60/100 (moderate Beschwerden)."


def test_missing_patient_is_precondition_violation(composer, anna):
    with pytest.raises(PreconditionError):
        composer.compose(None, anna.sessions[0])


def test_missing_session_is_precondition_violation(composer, anna):
    with pytest.raises(PreconditionError):
        composer.compose(anna, None)


def test_patient_without_sessions_is_precondition_violation(composer):
    patient = Patient(name="Leer")
    with pytest.raises(PreconditionError):
        composer.compose(patient, Session(date=date(2025, 1, 1)))


def test_foreign_session_is_rejected(composer, anna):
    other = Patient(name="Other", sessions=[Session()])
    with pytest.raises(PreconditionError):
        composer.compose(anna, other.sessions[0])
