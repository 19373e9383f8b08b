"""
Enumerations for Physiotherapy Documentation

Enumeration Categories:
    SessionType      → Kind of treatment encounter (controls header wording)
    SeverityBand     → Qualitative classification of the severity score
    ClinicalTextField→ Free-text sections of a session (dictation targets)
    NoteLanguage     → Label pack used for composed notes
"""

from enum import Enum


# =============================================================================
# STAGE 1: SESSION TYPE
# =============================================================================


class SessionType(str, Enum):
    """
    Type of a documented treatment session.

    Only affects the wording of the note header; scoring and composition
    rules are the same for both types.
    """

    INITIAL = "initial"
    FOLLOWUP = "followup"

    @classmethod
    def parse(cls, value) -> "SessionType":
        """
        Convert a stored/raw value to a SessionType.

        Raises:
            ValueError: If the value is not a known session type
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


# =============================================================================
# STAGE 2: SEVERITY BAND
# =============================================================================
# The three-way partition of the 0-100 score. Thresholds live in
# core/constants.py next to the score weights.


class SeverityBand(str, Enum):
    """Qualitative severity classification derived from the score."""

    MILD = "mild"
    MODERATE = "moderate"
    PRONOUNCED = "pronounced"


# =============================================================================
# STAGE 3: CLINICAL TEXT FIELDS
# =============================================================================


class ClinicalTextField(str, Enum):
    """
    The free-text sections of a session.

    What it does:
        Enumerates every text field a clinician can type or dictate into.
        The dictation collaborator selects one of these as its active target
        instead of addressing session attributes by string name.

    Members (in note order, transcript last):
        ANAMNESIS    → history / anamnesis
        STATUS       → current findings / status
        DIAGNOSIS    → diagnosis narrative
        THERAPY_PLAN → therapy plan
        COURSE       → course notes
        EPICRISIS    → summary / epicrisis / recommendation
        TRANSCRIPT   → catch-all dictation transcript (never part of the note)
    """

    ANAMNESIS = "anamnesis"
    STATUS = "status"
    DIAGNOSIS = "diagnosis"
    THERAPY_PLAN = "therapy_plan"
    COURSE = "course"
    EPICRISIS = "epicrisis"
    TRANSCRIPT = "transcript"

    @property
    def is_note_section(self) -> bool:
        """Whether this field is rendered as its own block in the note."""
        return self is not ClinicalTextField.TRANSCRIPT

    @classmethod
    def note_sections(cls) -> tuple:
        """Section fields in the order they appear in a composed note."""
        return tuple(f for f in cls if f.is_note_section)


# =============================================================================
# STAGE 4: NOTE LANGUAGE
# =============================================================================


class NoteLanguage(str, Enum):
    """Language of the label pack used for notes and catalogs."""

    ENGLISH = "en"
    GERMAN = "de"
