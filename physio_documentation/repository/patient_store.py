"""
Patient Store - Persistence of the Patient List

The whole patient list is stored as one JSON document of the shape
``{"patients": [Patient → Session[] → field values]}`` and always written as
a full overwrite. Either the new document is in place after a save or the
previous one is.

Architecture:
    PatientStore (Protocol)
    ├── JsonFilePatientStore   → Document in a local JSON file
    └── InMemoryPatientStore   → Document kept as a serialized string

Usage:
    store = JsonFilePatientStore("physio_doc_pilot_v5.json")
    patients = store.load()
    store.save(patients)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from loguru import logger

from physio_documentation.core.exceptions import PersistenceError
from physio_documentation.core.models import Patient

DOCUMENT_KEY = "patients"


# =============================================================================
# STAGE 1: DOCUMENT (DE)SERIALIZATION
# =============================================================================


def serialize_patients(patients: List[Patient]) -> Dict[str, Any]:
    """Convert a patient list to the stored document shape."""
    return {DOCUMENT_KEY: [patient.to_dict() for patient in patients]}


def deserialize_patients(document: Any) -> List[Patient]:
    """
    Rebuild the patient list from a stored document.

    Raises:
        ValueError: If the document is not an object with a patient list, or
            any patient/session record has the wrong shape
    """
    if not isinstance(document, dict) or not isinstance(document.get(DOCUMENT_KEY), list):
        raise ValueError(f"Document has no '{DOCUMENT_KEY}' list")

    patients = []
    for index, record in enumerate(document[DOCUMENT_KEY]):
        if not isinstance(record, dict):
            raise ValueError(f"Patient record {index} is not an object")
        sessions = record.get("sessions") or []
        if not isinstance(sessions, list) or not all(isinstance(s, dict) for s in sessions):
            raise ValueError(f"Patient record {index} has malformed sessions")
        try:
            patients.append(Patient.from_dict(record))
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Patient record {index} could not be rebuilt: {e}")
    return patients


# =============================================================================
# STAGE 2: STORE PROTOCOL
# =============================================================================


@runtime_checkable
class PatientStore(Protocol):
    """
    Protocol for patient list persistence.

    load() returns an empty list when nothing has been stored yet.
    Both methods raise PersistenceError on failure.
    """

    def load(self) -> List[Patient]:
        ...

    def save(self, patients: List[Patient]) -> None:
        ...

    @property
    def location(self) -> str:
        ...


# =============================================================================
# STAGE 3: JSON FILE STORE
# =============================================================================


class JsonFilePatientStore:
    """
    Patient store backed by a local JSON file.

    Saves write to a temporary file in the same directory and then replace
    the target, so a failed save leaves the previous document intact.
    """

    def __init__(self, path: str):
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> List[Patient]:
        """
        Raises:
            PersistenceError: If the file exists but cannot be read or parsed
        """
        if not self._path.exists():
            logger.info(f"No stored patient list yet | path={self._path}")
            return []

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                document = json.load(f)
            patients = deserialize_patients(document)
        except (OSError, ValueError) as e:
            raise PersistenceError(self.location, "load", str(e))

        logger.info(f"Loaded patient list | patients={len(patients)} | path={self._path}")
        return patients

    def save(self, patients: List[Patient]) -> None:
        """
        Raises:
            PersistenceError: If the document cannot be written
        """
        payload = json.dumps(serialize_patients(patients), ensure_ascii=False, indent=2)
        tmp_name: Optional[str] = None
        try:
            directory = self._path.parent
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(self.location, "save", str(e))

        logger.debug(f"Saved patient list | patients={len(patients)} | path={self._path}")


# =============================================================================
# STAGE 4: IN-MEMORY STORE
# =============================================================================


class InMemoryPatientStore:
    """
    Patient store holding the serialized document as a string.

    Going through JSON on every save/load keeps the same round-trip
    behaviour as the file store, which makes it suitable for tests.
    """

    def __init__(self, document: Optional[str] = None):
        self._document = document
        self.save_count = 0

    @property
    def location(self) -> str:
        return "memory"

    @property
    def document(self) -> Optional[str]:
        return self._document

    def load(self) -> List[Patient]:
        if self._document is None:
            return []
        try:
            return deserialize_patients(json.loads(self._document))
        except ValueError as e:
            raise PersistenceError(self.location, "load", str(e))

    def save(self, patients: List[Patient]) -> None:
        self._document = json.dumps(serialize_patients(patients), ensure_ascii=False)
        self.save_count += 1
