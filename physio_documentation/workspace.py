"""
Clinical Workspace - Application State and Public API

This is the PUBLIC API entry point of the documentation assistant. The
workspace owns the patient list and the current selection, and coordinates
the catalog, the composer and the patient store. Nothing in the core layers
reads ambient global state: everything they need is passed in by this
object.

Architecture Diagram:
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          ClinicalWorkspace                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │   ┌────────────┐   ┌──────────────┐   ┌──────────┐   ┌───────────┐  │
    │   │ ICD-10     │ → │ Patient /    │ → │ Scoring  │ → │ Composer  │  │
    │   │ Repository │   │ Session edit │   │          │   │           │  │
    │   └────────────┘   └──────────────┘   └──────────┘   └───────────┘  │
    │                              ↓ every change                          │
    │                        ┌──────────────┐                              │
    │                        │ PatientStore │                              │
    │                        └──────────────┘                              │
    └─────────────────────────────────────────────────────────────────────┘

Data Flow:
    UI edits session fields (update callbacks) → workspace persists
    "Generate" → fresh score + composed note written onto the session → persist

Usage:
    from physio_documentation import ClinicalWorkspace

    workspace = ClinicalWorkspace.from_environment()
    workspace.load()
    patient = workspace.register_patient("Anna Muster", diagnosis_entry="M54.5")
    workspace.set_ratings(pain=7, function=6)
    generated = workspace.generate_note()
"""

from dataclasses import dataclass
from datetime import date as CalendarDate
from typing import Any, List, Optional, Tuple

from loguru import logger

from physio_documentation.core.config import AssistantConfiguration, configure_logging
from physio_documentation.core.constants import (
    RATING_MAX,
    RATING_MIN,
    complaint_catalog,
    labels_for,
    measure_catalog,
)
from physio_documentation.core.enums import ClinicalTextField, SessionType
from physio_documentation.core.exceptions import (
    PatientNotFoundError,
    PatientValidationError,
    PersistenceError,
    PreconditionError,
    SessionNotFoundError,
    SessionValidationError,
)
from physio_documentation.core.models import (
    ClinicalCatalog,
    ICD10Code,
    NoteLabels,
    Patient,
    Session,
    SessionUpdater,
)
from physio_documentation.generation.note_composer import NoteComposer
from physio_documentation.repository.icd10_repository import (
    FileBasedICD10Repository,
    ICD10Repository,
    resolve_diagnosis_entry,
)
from physio_documentation.repository.patient_store import JsonFilePatientStore, PatientStore
from physio_documentation.scoring.severity import SeverityCategory, classify_score, score_session


# =============================================================================
# STAGE 1: RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class SaveResult:
    """Outcome of persisting the patient list; failures are non-fatal."""

    saved: bool
    message: str = ""


@dataclass(frozen=True)
class GeneratedNote:
    """Score, band and text written onto a session by the generate action."""

    session_id: str
    score: int
    category: SeverityCategory
    text: str


# =============================================================================
# STAGE 2: WORKSPACE CLASS
# =============================================================================


class ClinicalWorkspace:
    """
    Application-state object for one clinician's documentation session.

    What it does:
        Holds the patient list and selection, validates input at the
        registration/edit boundary, persists after every change, and runs
        the explicit "generate" action.

    How it works:
        STAGE 1: Construct with a store, a catalog repository and a composer
        STAGE 2: load() reads the stored patient list
        STAGE 3: Registration and edits mutate the selected patient/session
        STAGE 4: Each mutation saves; save failures are logged and reported
                 through last_save_result while memory stays authoritative

    Example:
        >>> workspace = ClinicalWorkspace(store, repository)
        >>> workspace.register_patient("Anna Muster", diagnosis_entry="M54.5")
        >>> workspace.generate_note().score
        60
    """

    def __init__(
        self,
        store: PatientStore,
        icd10_repository: ICD10Repository,
        composer: Optional[NoteComposer] = None,
        config: Optional[AssistantConfiguration] = None,
    ):
        self._config = config or AssistantConfiguration()
        self._store = store
        self._icd10 = icd10_repository

        labels = labels_for(self._config.language)
        self._composer = composer or NoteComposer(
            complaint_catalog(self._config.language),
            measure_catalog(self._config.language),
            labels,
        )

        self._patients: List[Patient] = []
        self._selected_patient_id: Optional[str] = None
        self._selected_session_id: Optional[str] = None
        self._dictation_target = ClinicalTextField.TRANSCRIPT
        self.last_save_result: Optional[SaveResult] = None

    @classmethod
    def from_configuration(cls, config: AssistantConfiguration) -> "ClinicalWorkspace":
        """Assemble a workspace with a JSON file store and the configured catalog."""
        config.validate()
        configure_logging(config.log_level)
        logger.info(f"Assembling clinical workspace | {config.to_dict()}")
        return cls(
            store=JsonFilePatientStore(config.storage_path),
            icd10_repository=FileBasedICD10Repository(config.icd10_catalog_path),
            config=config,
        )

    @classmethod
    def from_environment(cls, env_file: Optional[str] = None) -> "ClinicalWorkspace":
        return cls.from_configuration(AssistantConfiguration.from_environment(env_file))

    # =========================================================================
    # STAGE 3: READ ACCESSORS
    # =========================================================================

    @property
    def patients(self) -> List[Patient]:
        return list(self._patients)

    @property
    def labels(self) -> NoteLabels:
        return self._composer.labels

    @property
    def complaint_options(self) -> ClinicalCatalog:
        return complaint_catalog(self._config.language)

    @property
    def measure_options(self) -> ClinicalCatalog:
        return measure_catalog(self._config.language)

    @property
    def selected_patient(self) -> Optional[Patient]:
        if self._selected_patient_id is None:
            return None
        return self._find_patient(self._selected_patient_id)

    @property
    def selected_session(self) -> Optional[Session]:
        patient = self.selected_patient
        if patient is None or self._selected_session_id is None:
            return None
        return patient.get_session(self._selected_session_id)

    def get_patient(self, patient_id: str) -> Patient:
        patient = self._find_patient(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient

    def severity_of(self, session: Session) -> Optional[SeverityCategory]:
        """Band of a session's stored score, None while not yet computed."""
        if not session.is_scored:
            return None
        return classify_score(session.score, self.labels)

    def sessions_newest_first(self, patient: Patient) -> List[Session]:
        """Sessions by date descending; undated sessions last."""
        dated = sorted((s for s in patient.sessions if s.date), key=lambda s: s.date, reverse=True)
        return dated + [s for s in patient.sessions if not s.date]

    def score_history(self, patient: Patient) -> List[Tuple[CalendarDate, int]]:
        """(date, score) pairs for scored, dated sessions, oldest first."""
        items = [s for s in patient.sessions if s.is_scored and s.date]
        return [(s.date, s.score) for s in sorted(items, key=lambda s: s.date)]

    def patient_summary(self, patient: Patient) -> str:
        """Meta line such as ``*1980 · ICD-10: M54.5 – Kreuzschmerz``."""
        parts = []
        if patient.birth_year:
            parts.append(f"*{patient.birth_year}")
        if patient.diagnosis_code:
            parts.append(f"ICD-10: {patient.diagnosis.display}")
        return " · ".join(parts) or self.labels.no_patient_info

    def search_diagnoses(self, term: str) -> List[ICD10Code]:
        return self._icd10.search_codes(term, max_results=self._config.icd10_search_limit)

    # =========================================================================
    # STAGE 4: PERSISTENCE
    # =========================================================================

    def load(self) -> int:
        """
        Replace in-memory state with the stored patient list.

        A missing or unreadable document leaves the workspace empty; the
        failure is logged, never raised. Returns the number of patients.
        """
        try:
            self._patients = self._store.load()
        except PersistenceError as e:
            logger.warning(f"Could not load stored patients, starting empty | {e}")
            self._patients = []
        self._selected_patient_id = None
        self._selected_session_id = None
        return len(self._patients)

    def save(self) -> SaveResult:
        """Persist the full patient list; failures are reported, not raised."""
        try:
            self._store.save(self._patients)
            self.last_save_result = SaveResult(saved=True)
        except PersistenceError as e:
            logger.warning(f"Patient list not persisted, changes kept in memory | {e}")
            self.last_save_result = SaveResult(
                saved=False,
                message="Changes are kept for this session but may not survive a reload.",
            )
        return self.last_save_result

    # =========================================================================
    # STAGE 5: PATIENT ACTIONS
    # =========================================================================

    def register_patient(
        self,
        name: str,
        birth_year: Any = None,
        diagnosis_entry: Optional[str] = None,
    ) -> Patient:
        """
        Register a patient with one INITIAL session and select both.

        Args:
            name: Display name (required)
            birth_year: Optional year; non-integer input is dropped
            diagnosis_entry: Free text such as "M54.5 Kreuzschmerz", resolved
                against the catalog with raw-token fallback

        Raises:
            PatientValidationError: Missing name, or missing diagnosis while
                the configuration requires one
        """
        if not (name or "").strip():
            raise PatientValidationError("name", "Please enter a patient name")
        if self._config.require_diagnosis and not (diagnosis_entry or "").strip():
            raise PatientValidationError("diagnosis", "Please enter a primary ICD-10 diagnosis")

        diagnosis = resolve_diagnosis_entry(self._icd10, diagnosis_entry or "")
        patient = Patient.register(name, birth_year=_parse_birth_year(birth_year), diagnosis=diagnosis)
        self._apply_default_rating(patient.sessions[0])

        self._patients.append(patient)
        self._selected_patient_id = patient.id
        self._selected_session_id = patient.sessions[0].id

        logger.info(
            f"Patient registered | patient={patient.id} | "
            f"diagnosis={patient.diagnosis_code or 'none'}"
        )
        self.save()
        return patient

    def delete_patient(self, patient_id: str) -> Patient:
        """
        Raises:
            PatientNotFoundError: If no such patient exists
        """
        patient = self.get_patient(patient_id)
        self._patients = [p for p in self._patients if p.id != patient_id]
        if self._selected_patient_id == patient_id:
            self._selected_patient_id = None
            self._selected_session_id = None
        logger.info(f"Patient deleted | patient={patient_id}")
        self.save()
        return patient

    def select_patient(self, patient_id: str) -> Patient:
        """
        Select a patient and its first session.

        A patient without sessions gets a fresh INITIAL session.
        """
        patient = self.get_patient(patient_id)
        self._selected_patient_id = patient.id
        if not patient.sessions:
            session = Session.create(SessionType.INITIAL)
            self._apply_default_rating(session)
            patient.sessions.append(session)
        self._selected_session_id = patient.sessions[0].id
        self.save()
        return patient

    # =========================================================================
    # STAGE 6: SESSION ACTIONS
    # =========================================================================

    def select_session(self, session_id: str) -> Session:
        patient = self._require_patient()
        session = patient.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id, patient.id)
        self._selected_session_id = session.id
        return session

    def add_session(
        self,
        session_type: SessionType = SessionType.FOLLOWUP,
        on_date: Optional[CalendarDate] = None,
    ) -> Session:
        """Append a new session of an explicit type to the selected patient and select it."""
        patient = self._require_patient()
        session = Session.create(SessionType.parse(session_type), on_date)
        self._apply_default_rating(session)
        patient.sessions.append(session)
        self._selected_session_id = session.id
        logger.info(f"Session added | patient={patient.id} | type={session.type.value}")
        self.save()
        return session

    def delete_session(self, session_id: Optional[str] = None) -> Session:
        """
        Delete a session (the selected one by default).

        The first remaining session becomes selected, or none when the
        patient has no sessions left.
        """
        patient = self._require_patient()
        target_id = session_id or self._selected_session_id
        removed = patient.remove_session(target_id) if target_id else None
        if removed is None:
            raise SessionNotFoundError(str(target_id), patient.id)

        if self._selected_session_id == removed.id:
            self._selected_session_id = patient.sessions[0].id if patient.sessions else None
        logger.info(f"Session deleted | patient={patient.id} | session={removed.id}")
        self.save()
        return removed

    def update_session(self, updater: SessionUpdater) -> bool:
        """
        Apply a field-level update callback to the selected session and persist.

        Returns False (and changes nothing) when no session is selected.
        """
        session = self.selected_session
        if session is None:
            logger.debug("Session update ignored, no session selected")
            return False
        updater(session)
        self.save()
        return True

    def set_session_type(self, session_type: SessionType) -> bool:
        try:
            parsed = SessionType.parse(session_type)
        except ValueError:
            raise SessionValidationError("type", session_type)
        return self.update_session(lambda s: setattr(s, "type", parsed))

    def set_session_date(self, on_date: Optional[CalendarDate]) -> bool:
        """Set the session date; clearing it falls back to today."""
        value = on_date or CalendarDate.today()
        return self.update_session(lambda s: setattr(s, "date", value))

    def set_ratings(self, pain: Optional[int] = None, function: Optional[int] = None) -> bool:
        """
        Raises:
            SessionValidationError: If a rating is not an integer in 0-10
        """
        for field_name, value in (("pain", pain), ("function", function)):
            if value is not None and not _is_valid_rating(value):
                raise SessionValidationError(field_name, value)

        def apply(session: Session) -> None:
            if pain is not None:
                session.pain = pain
            if function is not None:
                session.function = function

        return self.update_session(apply)

    def toggle_complaint(self, complaint_id: str) -> bool:
        return self.update_session(lambda s: s.toggle_complaint(complaint_id))

    def toggle_measure(self, measure_id: str) -> bool:
        return self.update_session(lambda s: s.toggle_measure(measure_id))

    def set_text(self, text_field: ClinicalTextField, text: str) -> bool:
        return self.update_session(lambda s: s.set_text(text_field, text))

    def set_note(self, text: str) -> bool:
        """Store a manual edit of the note; only regeneration overwrites it."""
        return self.update_session(lambda s: setattr(s, "note", text or ""))

    # =========================================================================
    # STAGE 7: DICTATION
    # =========================================================================

    @property
    def dictation_target(self) -> ClinicalTextField:
        return self._dictation_target

    @property
    def dictation_target_label(self) -> str:
        return self.labels.dictation_target_labels[self._dictation_target]

    def set_dictation_target(self, text_field: Optional[ClinicalTextField]) -> None:
        self._dictation_target = ClinicalTextField(text_field or ClinicalTextField.TRANSCRIPT)

    def append_dictation(self, text: str, target: Optional[ClinicalTextField] = None) -> bool:
        """
        Append recognized speech to the active (or given) text field.

        Text always goes onto the field's current value, so manual typing and
        dictation can interleave.
        """
        if not (text or "").strip():
            return False
        text_field = ClinicalTextField(target or self._dictation_target)
        appended = self.update_session(lambda s: s.append_text(text_field, text))
        if appended:
            logger.debug(f"Dictation appended | field={text_field.value} | chars={len(text)}")
        return appended

    # =========================================================================
    # STAGE 8: NOTE GENERATION
    # =========================================================================

    def generate_note(self) -> GeneratedNote:
        """
        Compute a fresh score, compose the note and store both on the session.

        Raises:
            PreconditionError: If no patient/session is selected
        """
        patient = self.selected_patient
        session = self.selected_session
        if patient is None or session is None:
            raise PreconditionError("Select a patient and a session before generating a note")

        session.score = score_session(session)
        composed = self._composer.compose_note(patient, session)
        session.note = composed.text

        logger.info(
            f"Note generated | patient={patient.id} | session={session.id} | "
            f"score={composed.score} | band={composed.category.band.value}"
        )
        self.save()
        return GeneratedNote(
            session_id=session.id,
            score=composed.score,
            category=composed.category,
            text=composed.text,
        )

    # =========================================================================
    # STAGE 9: HELPERS
    # =========================================================================

    def _find_patient(self, patient_id: str) -> Optional[Patient]:
        return next((p for p in self._patients if p.id == patient_id), None)

    def _require_patient(self) -> Patient:
        patient = self.selected_patient
        if patient is None:
            raise PreconditionError("No patient selected")
        return patient

    def _apply_default_rating(self, session: Session) -> None:
        session.pain = self._config.default_rating
        session.function = self._config.default_rating


def _parse_birth_year(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _is_valid_rating(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and RATING_MIN <= value <= RATING_MAX
    )
