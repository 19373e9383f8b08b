"""
Note Composer - Clinical Note Text Generation

This module composes the textual clinical note for one session from its
structured fields, its free-text sections and the severity score. It is a
pure transformation: the same Patient+Session values always produce the
same text, and nothing is written back onto the session.

Block Order (each block only when its source content is non-empty):
    1. Header          → "<type label> on <date>"
    2. Diagnosis line  → "Diagnosis code: <code> – <short label>" or "not documented"
    3. Section blocks  → history, findings, diagnosis, therapy plan, course, epicrisis
    4. Subjective      → complaint labels plus pain/function ratings
    5. Plan            → measures performed today plus fixed closing clause
    6. Score line      → "Severity score: <score>/100 (<band>)."

    Blocks are joined by one blank line. The dictation transcript is never
    part of the note.

Pipeline Position:
    Session fields → Severity Scoring → [NoteComposer] → Session.note
                                         ^^^^^^^^^^^^^
                                         You are here

Usage:
    composer = NoteComposer(complaint_catalog(), measure_catalog())
    text = composer.compose(patient, session)
"""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from physio_documentation.core.constants import ENGLISH_LABELS
from physio_documentation.core.enums import ClinicalTextField
from physio_documentation.core.exceptions import PreconditionError
from physio_documentation.core.models import ClinicalCatalog, NoteLabels, Patient, Session
from physio_documentation.scoring.severity import (
    SeverityCategory,
    classify_score,
    score_session,
)

BLOCK_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ComposedNote:
    """A composed note together with the score and band it reports."""

    text: str
    score: int
    category: SeverityCategory


# =============================================================================
# STAGE 1: NOTE COMPOSER CLASS
# =============================================================================


class NoteComposer:
    """
    Composes the clinical note for a patient's session.

    What it does:
        Turns a Patient+Session pair into an ordered, section-based text
        document. Catalogs and wording are injected, so the same composer
        logic serves any catalog version or language.

    When to use:
        - On the explicit "generate" action (via ClinicalWorkspace)
        - When previewing a note without persisting it

    Example:
        >>> composer = NoteComposer(complaint_catalog(), measure_catalog())
        >>> text = composer.compose(patient, session)
        >>> text.splitlines()[0]
        'Initial assessment on 3/7/2025'
    """

    def __init__(
        self,
        complaint_catalog: ClinicalCatalog,
        measure_catalog: ClinicalCatalog,
        labels: NoteLabels = ENGLISH_LABELS,
    ):
        self._complaints = complaint_catalog
        self._measures = measure_catalog
        self._labels = labels

    @property
    def labels(self) -> NoteLabels:
        return self._labels

    # =========================================================================
    # STAGE 2: PUBLIC API
    # =========================================================================

    def compose(self, patient: Optional[Patient], session: Optional[Session]) -> str:
        """
        Compose the note text.

        Raises:
            PreconditionError: If patient or session is missing, or the
                session does not belong to the patient
        """
        return self.compose_note(patient, session).text

    def compose_note(self, patient: Optional[Patient], session: Optional[Session]) -> ComposedNote:
        """
        Compose the note and report the score/band it was written with.

        The stored session score is used when present; otherwise the score is
        computed from the current ratings and complaint count.
        """
        self._check_preconditions(patient, session)

        score = int(session.score) if session.is_scored else score_session(session)
        category = classify_score(score, self._labels)

        blocks = [
            self._header(session),
            self._diagnosis_line(patient),
            *self._section_blocks(session),
            self._subjective_summary(session),
            self._plan_summary(session),
            self._labels.score_template.format(score=score, band=category.text),
        ]
        text = BLOCK_SEPARATOR.join(block for block in blocks if block)

        logger.debug(
            f"Composed note | patient={patient.id} | session={session.id} | "
            f"score={score} | blocks={sum(1 for b in blocks if b)}"
        )
        return ComposedNote(text=text, score=score, category=category)

    # =========================================================================
    # STAGE 3: BLOCK BUILDERS
    # =========================================================================

    def _header(self, session: Session) -> str:
        return self._labels.header_template.format(
            type_label=self._labels.type_label(session.type),
            date=self._labels.format_date(session.date),
        )

    def _diagnosis_line(self, patient: Patient) -> str:
        if not patient.has_diagnosis:
            return self._labels.diagnosis_missing
        if patient.diagnosis_short_label:
            return self._labels.diagnosis_template.format(
                code=patient.diagnosis_code, short_label=patient.diagnosis_short_label
            )
        return self._labels.diagnosis_code_only_template.format(code=patient.diagnosis_code)

    def _section_blocks(self, session: Session) -> List[str]:
        blocks = []
        for text_field in ClinicalTextField.note_sections():
            content = session.section_text(text_field)
            if content:
                blocks.append(f"{self._labels.section_headings[text_field]}\n{content}")
        return blocks

    def _subjective_summary(self, session: Session) -> str:
        pain = _format_rating(session.effective_pain)
        function = _format_rating(session.effective_function)
        if not session.complaints:
            return self._labels.subjective_without_complaints_template.format(
                pain=pain, function=function
            )

        unknown = self._complaints.unknown_ids(session.complaints)
        if unknown:
            logger.warning(f"Unknown complaint ids shown as-is: {unknown}")
        return self._labels.subjective_with_complaints_template.format(
            complaints=", ".join(self._complaints.labels_for(session.complaints)),
            pain=pain,
            function=function,
        )

    def _plan_summary(self, session: Session) -> str:
        if session.measures:
            unknown = self._measures.unknown_ids(session.measures)
            if unknown:
                logger.warning(f"Unknown measure ids shown as-is: {unknown}")
            opening = self._labels.plan_with_measures_template.format(
                measures=", ".join(self._measures.labels_for(session.measures))
            )
        else:
            opening = self._labels.plan_without_measures
        return f"{opening} {self._labels.plan_closing}"

    # =========================================================================
    # STAGE 4: PRECONDITIONS
    # =========================================================================

    @staticmethod
    def _check_preconditions(patient: Optional[Patient], session: Optional[Session]) -> None:
        if patient is None:
            raise PreconditionError("Cannot compose a note without a patient")
        if session is None:
            raise PreconditionError(
                "Cannot compose a note without a session", context={"patient_id": patient.id}
            )
        if not patient.owns(session):
            raise PreconditionError(
                "Session does not belong to patient",
                context={"patient_id": patient.id, "session_id": session.id},
            )


def _format_rating(value) -> str:
    # 7.0 renders as "7"; other values render as given.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
