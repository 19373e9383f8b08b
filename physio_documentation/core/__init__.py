"""
Core Layer - Domain Models, Enums, Constants, Exceptions, Configuration

This layer contains pure domain definitions with no I/O.

Dependency Rule:
    This layer depends on: nothing else in the package
    This layer is used by: every other layer
"""

from physio_documentation.core.models import (
    ICD10Code,
    CatalogOption,
    ComplaintOption,
    MeasureOption,
    ClinicalCatalog,
    NoteLabels,
    Session,
    Patient,
)
from physio_documentation.core.enums import (
    SessionType,
    SeverityBand,
    ClinicalTextField,
    NoteLanguage,
)
from physio_documentation.core.constants import (
    ENGLISH_LABELS,
    GERMAN_LABELS,
    complaint_catalog,
    measure_catalog,
    labels_for,
)
from physio_documentation.core.config import AssistantConfiguration, configure_logging
from physio_documentation.core.exceptions import (
    PhysioDocumentationError,
    ConfigurationError,
    PatientValidationError,
    SessionValidationError,
    PreconditionError,
    PatientNotFoundError,
    SessionNotFoundError,
    DatasetLoadError,
    PersistenceError,
)

__all__ = [
    # Models
    "ICD10Code",
    "CatalogOption",
    "ComplaintOption",
    "MeasureOption",
    "ClinicalCatalog",
    "NoteLabels",
    "Session",
    "Patient",
    # Enums
    "SessionType",
    "SeverityBand",
    "ClinicalTextField",
    "NoteLanguage",
    # Catalogs and label packs
    "ENGLISH_LABELS",
    "GERMAN_LABELS",
    "complaint_catalog",
    "measure_catalog",
    "labels_for",
    # Configuration
    "AssistantConfiguration",
    "configure_logging",
    # Exceptions
    "PhysioDocumentationError",
    "ConfigurationError",
    "PatientValidationError",
    "SessionValidationError",
    "PreconditionError",
    "PatientNotFoundError",
    "SessionNotFoundError",
    "DatasetLoadError",
    "PersistenceError",
]
