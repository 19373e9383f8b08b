"""
Physiotherapy Documentation Assistant

Turns structured physiotherapy session data into a severity score and a
formatted clinical note, and keeps the patient list in a local document.

Architecture Overview:
    physio_documentation/
    ├── core/          → Domain models, enums, catalogs, configuration (Layer 0 - Pure)
    ├── repository/    → ICD-10 catalog + patient persistence (Layer 1 - Infrastructure)
    ├── scoring/       → Severity score and band (Layer 2 - Business Logic)
    ├── generation/    → Note composition (Layer 3 - Business Logic)
    └── workspace.py   → Application state and actions (Layer 4 - Public API)

Quick Start:
    from physio_documentation import ClinicalWorkspace

    workspace = ClinicalWorkspace.from_environment()
    workspace.load()
    workspace.register_patient("Anna Muster", diagnosis_entry="M54.5")
    print(workspace.generate_note().text)
"""

__version__ = "1.0.0"

# =============================================================================
# PUBLIC API EXPORTS
# =============================================================================

# Main Entry Point
from physio_documentation.workspace import ClinicalWorkspace, GeneratedNote, SaveResult

# Core Models
from physio_documentation.core.models import (
    ICD10Code,
    CatalogOption,
    ClinicalCatalog,
    NoteLabels,
    Patient,
    Session,
)

# Enums
from physio_documentation.core.enums import (
    ClinicalTextField,
    NoteLanguage,
    SessionType,
    SeverityBand,
)

# Scoring and Composition
from physio_documentation.scoring import calculate_score, classify_score, SeverityCategory
from physio_documentation.generation import NoteComposer, ComposedNote

# Configuration
from physio_documentation.core.config import AssistantConfiguration

__all__ = [
    # Main Entry Point
    "ClinicalWorkspace",
    "GeneratedNote",
    "SaveResult",
    # Core Models
    "ICD10Code",
    "CatalogOption",
    "ClinicalCatalog",
    "NoteLabels",
    "Patient",
    "Session",
    # Enums
    "ClinicalTextField",
    "NoteLanguage",
    "SessionType",
    "SeverityBand",
    # Scoring and Composition
    "calculate_score",
    "classify_score",
    "SeverityCategory",
    "NoteComposer",
    "ComposedNote",
    # Configuration
    "AssistantConfiguration",
]
