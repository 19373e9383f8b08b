"""
Domain Models for Physiotherapy Documentation

This module defines the data structures the assistant operates on. Patients
own their sessions exclusively; catalogs and label packs are immutable
configuration injected into the composer.

Model Hierarchy:
    ICD10Code      → One entry of the diagnostic code catalog
    CatalogOption  → One complaint or measure choice (id + label)
    ClinicalCatalog→ Ordered, immutable set of CatalogOptions
    NoteLabels     → Localized wording for composed notes
    Session        → One documented treatment encounter
    Patient        → A registered patient and their sessions

Serialization:
    Patient.to_dict()/from_dict() and Session.to_dict()/from_dict() use the
    camelCase keys of the stored patient document, so a stored list
    round-trips without loss (including score=None vs. score=0).

Usage:
    from physio_documentation.core.models import Patient, Session

    session = Session.create(SessionType.INITIAL)
    patient = Patient.register("Anna Muster", diagnosis=ICD10Code("M54.5", "Kreuzschmerz"))
"""

import uuid
from dataclasses import dataclass, field
from datetime import date as CalendarDate
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from physio_documentation.core.enums import ClinicalTextField, SessionType
from physio_documentation.core.exceptions import PatientValidationError

DEFAULT_RATING = 5


def new_identifier() -> str:
    """Return a fresh opaque identifier (random UUID4 string)."""
    return str(uuid.uuid4())


def parse_iso_date(value: Any) -> Optional[CalendarDate]:
    """Parse a stored ISO date (``YYYY-MM-DD``); anything unparseable becomes None."""
    if value is None or value == "":
        return None
    if isinstance(value, CalendarDate):
        return value
    try:
        return CalendarDate.fromisoformat(str(value)[:10])
    except ValueError:
        return None


# =============================================================================
# STAGE 1: ICD-10 CODE MODEL
# =============================================================================


@dataclass(frozen=True)
class ICD10Code:
    """
    A single entry of the diagnostic code catalog.

    Attributes:
        code: The ICD-10 code string (e.g., "M54.5")
        short_label: Short human-readable label (e.g., "Kreuzschmerz")
        long_label: Longer description, may be empty

    Example:
        >>> code = ICD10Code(code="M54.5", short_label="Kreuzschmerz")
        >>> code.display
        'M54.5 – Kreuzschmerz'
    """

    code: str
    short_label: str = ""
    long_label: str = ""

    @property
    def display(self) -> str:
        """``code – short label`` or just the code when no label is known."""
        if self.short_label:
            return f"{self.code} – {self.short_label}"
        return self.code

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against code and both labels."""
        needle = term.lower()
        return (
            needle in self.code.lower()
            or needle in self.short_label.lower()
            or needle in self.long_label.lower()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the catalog's JSON shape."""
        return {"code": self.code, "short": self.short_label, "long": self.long_label}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ICD10Code":
        """Create from a catalog record (accepts ``short``/``long`` or full key names)."""
        return cls(
            code=str(data.get("code", "")).strip(),
            short_label=data.get("short", data.get("short_label")) or "",
            long_label=data.get("long", data.get("long_label")) or "",
        )


# =============================================================================
# STAGE 2: COMPLAINT / MEASURE CATALOGS
# =============================================================================


@dataclass(frozen=True)
class CatalogOption:
    """One selectable complaint or measure: a short identifier and its label."""

    id: str
    label: str


# Same shape, kept as distinct names for readability at call sites.
ComplaintOption = CatalogOption
MeasureOption = CatalogOption


class ClinicalCatalog:
    """
    Fixed, ordered enumeration of complaint or measure options.

    Used both to render toggle choices (iteration order) and to translate
    stored identifiers back into labels. Unknown identifiers degrade to
    their raw id.
    """

    def __init__(self, name: str, options: Iterable[CatalogOption]):
        self.name = name
        self._options: Tuple[CatalogOption, ...] = tuple(options)
        self._labels: Dict[str, str] = {}
        for option in self._options:
            self._labels.setdefault(option.id, option.label)

    def __iter__(self):
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, option_id: object) -> bool:
        return option_id in self._labels

    def __repr__(self) -> str:
        return f"ClinicalCatalog(name={self.name!r}, options={len(self._options)})"

    @property
    def ids(self) -> List[str]:
        return [option.id for option in self._options]

    def label_for(self, option_id: str) -> str:
        """Label for an id, or the id itself when the catalog has no entry."""
        return self._labels.get(option_id, option_id)

    def labels_for(self, option_ids: Iterable[str]) -> List[str]:
        return [self.label_for(option_id) for option_id in option_ids]

    def unknown_ids(self, option_ids: Iterable[str]) -> List[str]:
        return [option_id for option_id in option_ids if option_id not in self._labels]


# =============================================================================
# STAGE 3: NOTE LABEL PACK
# =============================================================================


@dataclass(frozen=True)
class NoteLabels:
    """
    Localized wording for composed notes and severity bands.

    Template placeholders:
        header_template       → {type_label}, {date}
        diagnosis_template    → {code}, {short_label}
        subjective_*_template → {complaints}, {pain}, {function}
        plan_with_measures    → {measures}
        score_template        → {score}, {band}
        date_pattern          → {day}, {month}, {year} (unpadded day/month)
    """

    language: str
    initial_label: str
    followup_label: str
    header_template: str
    no_date_label: str
    date_pattern: str
    diagnosis_template: str
    diagnosis_code_only_template: str
    diagnosis_missing: str
    section_headings: Dict[ClinicalTextField, str]
    subjective_with_complaints_template: str
    subjective_without_complaints_template: str
    plan_with_measures_template: str
    plan_without_measures: str
    plan_closing: str
    score_template: str
    band_texts: Dict[str, str]
    dictation_target_labels: Dict[ClinicalTextField, str]
    no_patient_info: str

    def type_label(self, session_type: SessionType) -> str:
        return self.initial_label if session_type == SessionType.INITIAL else self.followup_label

    def format_date(self, value: Optional[CalendarDate]) -> str:
        if value is None:
            return self.no_date_label
        return self.date_pattern.format(day=value.day, month=value.month, year=value.year)


# =============================================================================
# STAGE 4: SESSION MODEL
# =============================================================================
# Mapping of the enumerated text fields to Session attributes and to the keys
# of the stored document. Every ClinicalTextField member must appear here.

_TEXT_FIELD_ATTRIBUTES: Dict[ClinicalTextField, str] = {
    ClinicalTextField.ANAMNESIS: "anamnesis_text",
    ClinicalTextField.STATUS: "status_text",
    ClinicalTextField.DIAGNOSIS: "diagnosis_text",
    ClinicalTextField.THERAPY_PLAN: "therapy_plan_text",
    ClinicalTextField.COURSE: "course_text",
    ClinicalTextField.EPICRISIS: "epicrisis_text",
    ClinicalTextField.TRANSCRIPT: "transcript_text",
}

_TEXT_FIELD_KEYS: Dict[ClinicalTextField, str] = {
    ClinicalTextField.ANAMNESIS: "anamnesisText",
    ClinicalTextField.STATUS: "statusText",
    ClinicalTextField.DIAGNOSIS: "diagnosisText",
    ClinicalTextField.THERAPY_PLAN: "therapyPlanText",
    ClinicalTextField.COURSE: "courseText",
    ClinicalTextField.EPICRISIS: "epikriseText",
    ClinicalTextField.TRANSCRIPT: "speechNotes",
}


def _rating_or_default(value: Any) -> Any:
    # Booleans are ints in Python but never valid ratings.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return DEFAULT_RATING


def _stored_score(value: Any) -> Optional[int]:
    # Integral floats such as 60.0 count as computed scores.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass
class Session:
    """
    One documented treatment encounter.

    What it does:
        Holds the structured ratings, selected complaint/measure identifiers,
        the free-text clinical sections, and the derived score and note.

    Attributes:
        id: Opaque unique identifier
        type: INITIAL or FOLLOWUP (header wording only)
        date: Calendar date of the encounter, None when unset
        complaints: Selected complaint ids (ordered, no duplicates)
        measures: Selected measure ids (ordered, no duplicates)
        pain: 0-10 pain rating
        function: 0-10 functional limitation rating
        score: 0-100 severity score, None until computed
        note: Last generated (or manually edited) note text

    Example:
        >>> session = Session.create(SessionType.FOLLOWUP)
        >>> session.toggle_complaint("pain")
        >>> session.complaints
        ['pain']
    """

    id: str = field(default_factory=new_identifier)
    type: SessionType = SessionType.INITIAL
    date: Optional[CalendarDate] = field(default_factory=CalendarDate.today)
    complaints: List[str] = field(default_factory=list)
    measures: List[str] = field(default_factory=list)
    pain: int = DEFAULT_RATING
    function: int = DEFAULT_RATING
    anamnesis_text: str = ""
    status_text: str = ""
    diagnosis_text: str = ""
    therapy_plan_text: str = ""
    course_text: str = ""
    epicrisis_text: str = ""
    transcript_text: str = ""
    note: str = ""
    score: Optional[int] = None

    def __post_init__(self):
        self.type = SessionType.parse(self.type)
        self.complaints = _unique(self.complaints)
        self.measures = _unique(self.measures)

    @classmethod
    def create(
        cls, session_type: SessionType, on_date: Optional[CalendarDate] = None
    ) -> "Session":
        """Create an empty session of an explicit type, dated today unless given."""
        return cls(type=session_type, date=on_date or CalendarDate.today())

    # -------------------------------------------------------------------------
    # 4.1 Text field access
    # -------------------------------------------------------------------------

    def get_text(self, text_field: ClinicalTextField) -> str:
        return getattr(self, _TEXT_FIELD_ATTRIBUTES[ClinicalTextField(text_field)])

    def set_text(self, text_field: ClinicalTextField, value: str) -> None:
        setattr(self, _TEXT_FIELD_ATTRIBUTES[ClinicalTextField(text_field)], value or "")

    def append_text(self, text_field: ClinicalTextField, text: str) -> str:
        """
        Append recognized text to the current value of a field.

        The current value and the new text are joined by one space and the
        result is trimmed. Returns the new field value.
        """
        current = self.get_text(text_field).strip()
        updated = f"{current} {(text or '').strip()}".strip()
        self.set_text(text_field, updated)
        return updated

    def section_text(self, text_field: ClinicalTextField) -> str:
        """Trimmed field content; whitespace-only content counts as absent."""
        return (self.get_text(text_field) or "").strip()

    # -------------------------------------------------------------------------
    # 4.2 Complaint / measure selection
    # -------------------------------------------------------------------------

    def toggle_complaint(self, complaint_id: str) -> bool:
        """Add the complaint if absent, remove it if present. Returns new state."""
        return _toggle(self.complaints, complaint_id)

    def toggle_measure(self, measure_id: str) -> bool:
        """Add the measure if absent, remove it if present. Returns new state."""
        return _toggle(self.measures, measure_id)

    # -------------------------------------------------------------------------
    # 4.3 Derived values
    # -------------------------------------------------------------------------

    @property
    def effective_pain(self):
        return _rating_or_default(self.pain)

    @property
    def effective_function(self):
        return _rating_or_default(self.function)

    @property
    def complaints_count(self) -> int:
        return len(self.complaints)

    @property
    def is_scored(self) -> bool:
        return _stored_score(self.score) is not None

    # -------------------------------------------------------------------------
    # 4.4 Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "date": self.date.isoformat() if self.date else None,
            "complaints": list(self.complaints),
            "measures": list(self.measures),
            "pain": self.pain,
            "function": self.function,
        }
        for text_field, key in _TEXT_FIELD_KEYS.items():
            data[key] = self.get_text(text_field)
        data["note"] = self.note
        data["score"] = self.score
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Create from a stored record; missing keys fall back to defaults."""
        try:
            session_type = SessionType.parse(data.get("type") or SessionType.INITIAL)
        except ValueError:
            session_type = SessionType.INITIAL
        session = cls(
            id=data.get("id") or new_identifier(),
            type=session_type,
            date=parse_iso_date(data.get("date")),
            complaints=list(data.get("complaints") or []),
            measures=list(data.get("measures") or []),
            pain=_rating_or_default(data.get("pain")),
            function=_rating_or_default(data.get("function")),
            note=data.get("note") or "",
            score=_stored_score(data.get("score")),
        )
        for text_field, key in _TEXT_FIELD_KEYS.items():
            session.set_text(text_field, data.get(key) or "")
        return session


# =============================================================================
# STAGE 5: PATIENT MODEL
# =============================================================================


@dataclass
class Patient:
    """
    A registered patient with an optional resolved diagnosis and their sessions.

    What it does:
        Owns an ordered list of sessions exclusively; a session never exists
        outside its patient.

    Attributes:
        id: Opaque unique identifier
        name: Display name (non-empty at registration)
        birth_year: Optional year of birth
        diagnosis_code: Resolved ICD-10 code, None when not documented
        diagnosis_short_label: Catalog short label (empty if unresolved)
        diagnosis_long_label: Catalog long label (empty if unresolved)
        sessions: Owned sessions in creation order

    Example:
        >>> patient = Patient.register("Anna Muster", birth_year=1980)
        >>> len(patient.sessions)
        1
    """

    name: str
    id: str = field(default_factory=new_identifier)
    birth_year: Optional[int] = None
    diagnosis_code: Optional[str] = None
    diagnosis_short_label: str = ""
    diagnosis_long_label: str = ""
    sessions: List[Session] = field(default_factory=list)

    @classmethod
    def register(
        cls,
        name: str,
        birth_year: Optional[int] = None,
        diagnosis: Optional[ICD10Code] = None,
        first_session_date: Optional[CalendarDate] = None,
    ) -> "Patient":
        """
        Create a new patient, always initialized with one INITIAL session.

        Raises:
            PatientValidationError: If the name is empty after trimming
        """
        clean_name = (name or "").strip()
        if not clean_name:
            raise PatientValidationError("name", "Patient name is required")

        patient = cls(name=clean_name, birth_year=birth_year)
        if diagnosis is not None:
            patient.attach_diagnosis(diagnosis)
        patient.sessions.append(Session.create(SessionType.INITIAL, first_session_date))
        return patient

    def attach_diagnosis(self, diagnosis: ICD10Code) -> None:
        """
        Attach a resolved diagnosis.

        Raises:
            PatientValidationError: If the code is empty (labels need a code)
        """
        if not diagnosis.code:
            raise PatientValidationError("diagnosis", "Diagnosis code is required")
        self.diagnosis_code = diagnosis.code
        self.diagnosis_short_label = diagnosis.short_label
        self.diagnosis_long_label = diagnosis.long_label

    @property
    def diagnosis(self) -> Optional[ICD10Code]:
        if not self.diagnosis_code:
            return None
        return ICD10Code(
            code=self.diagnosis_code,
            short_label=self.diagnosis_short_label,
            long_label=self.diagnosis_long_label,
        )

    @property
    def has_diagnosis(self) -> bool:
        return bool(self.diagnosis_code)

    def get_session(self, session_id: str) -> Optional[Session]:
        return next((s for s in self.sessions if s.id == session_id), None)

    def owns(self, session: Session) -> bool:
        return any(s is session or s.id == session.id for s in self.sessions)

    def remove_session(self, session_id: str) -> Optional[Session]:
        session = self.get_session(session_id)
        if session is not None:
            self.sessions = [s for s in self.sessions if s.id != session_id]
        return session

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "birthYear": self.birth_year,
            "icdCode": self.diagnosis_code,
            "icdShort": self.diagnosis_short_label,
            "icdLong": self.diagnosis_long_label,
            "sessions": [s.to_dict() for s in self.sessions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Patient":
        birth_year = data.get("birthYear")
        return cls(
            id=data.get("id") or new_identifier(),
            name=data.get("name") or "",
            birth_year=birth_year if isinstance(birth_year, int) else None,
            diagnosis_code=data.get("icdCode") or None,
            diagnosis_short_label=data.get("icdShort") or "",
            diagnosis_long_label=data.get("icdLong") or "",
            sessions=[Session.from_dict(s) for s in data.get("sessions") or []],
        )


# =============================================================================
# STAGE 6: HELPERS
# =============================================================================


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _toggle(values: List[str], value: str) -> bool:
    if value in values:
        values.remove(value)
        return False
    values.append(value)
    return True


SessionUpdater = Callable[[Session], None]
