"""
Shared pytest fixtures for the documentation assistant test suite.

Fixtures build isolated workspaces over an in-memory patient store and the
bundled ICD-10 catalog, so no test touches a real storage file unless it
asks for tmp_path explicitly.
"""

from datetime import date

import pytest

from physio_documentation.core.config import AssistantConfiguration, ConfigDefaults
from physio_documentation.core.constants import complaint_catalog, measure_catalog
from physio_documentation.core.enums import SessionType
from physio_documentation.core.models import ICD10Code, Patient, Session
from physio_documentation.generation.note_composer import NoteComposer
from physio_documentation.repository.icd10_repository import (
    FileBasedICD10Repository,
    InMemoryICD10Repository,
)
from physio_documentation.repository.patient_store import InMemoryPatientStore
from physio_documentation.workspace import ClinicalWorkspace


@pytest.fixture
def small_catalog():
    """A three-entry catalog with predictable order."""
    return InMemoryICD10Repository(
        [
            ICD10Code("M54.5", "Kreuzschmerz", "Kreuzschmerz, Lendenschmerz"),
            ICD10Code("M54.4", "Lumboischialgie", "Lumboischialgie mit Kreuzschmerz"),
            ICD10Code("M17.1", "Gonarthrose", "Sonstige primäre Gonarthrose"),
        ]
    )


@pytest.fixture
def bundled_catalog():
    return FileBasedICD10Repository(ConfigDefaults.DEFAULT_ICD10_CATALOG_PATH)


@pytest.fixture
def composer():
    return NoteComposer(complaint_catalog(), measure_catalog())


@pytest.fixture
def anna():
    """Patient "Anna Muster" with one scored-ready initial session."""
    session = Session(
        type=SessionType.INITIAL,
        date=date(2025, 3, 7),
        complaints=["pain", "stiffness"],
        measures=["mt"],
        pain=7,
        function=6,
    )
    return Patient(
        name="Anna Muster",
        birth_year=1980,
        diagnosis_code="M54.5",
        diagnosis_short_label="Kreuzschmerz",
        sessions=[session],
    )


@pytest.fixture
def store():
    return InMemoryPatientStore()


@pytest.fixture
def workspace(store, small_catalog):
    return ClinicalWorkspace(store, small_catalog, config=AssistantConfiguration())
