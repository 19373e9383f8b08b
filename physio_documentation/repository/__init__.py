"""
Repository Layer - Catalog Access and Patient Persistence

Submodules:
    icd10_repository.py → Diagnostic code catalog (search + lookup)
    patient_store.py    → Patient list document storage

Dependency Rule:
    This layer depends on: core (models, exceptions)
    This layer is used by: workspace
"""

from physio_documentation.repository.icd10_repository import (
    ICD10Repository,
    InMemoryICD10Repository,
    FileBasedICD10Repository,
    resolve_diagnosis_entry,
)
from physio_documentation.repository.patient_store import (
    PatientStore,
    JsonFilePatientStore,
    InMemoryPatientStore,
    serialize_patients,
    deserialize_patients,
)

__all__ = [
    "ICD10Repository",
    "InMemoryICD10Repository",
    "FileBasedICD10Repository",
    "resolve_diagnosis_entry",
    "PatientStore",
    "JsonFilePatientStore",
    "InMemoryPatientStore",
    "serialize_patients",
    "deserialize_patients",
]
