"""
Constants for Physiotherapy Documentation

Constant Categories:
    SCORE_*             → Severity score weights, caps and band thresholds
    BAND_COLORS         → Presentation colour token per severity band
    COMPLAINT/MEASURE   → Default complaint and measure catalogs (en + de)
    ENGLISH/GERMAN      → Label packs for composed notes

Score weights and band thresholds are part of the stored data contract:
scores persisted in earlier sessions must stay comparable with new ones.
"""

from fractions import Fraction
from typing import Dict, List, Tuple

from physio_documentation.core.enums import ClinicalTextField, NoteLanguage, SeverityBand
from physio_documentation.core.models import (
    DEFAULT_RATING,
    CatalogOption,
    ClinicalCatalog,
    NoteLabels,
)


# =============================================================================
# STAGE 1: SEVERITY SCORE
# =============================================================================

RATING_MIN = 0
RATING_MAX = 10

SCORE_MIN = 0
SCORE_MAX = 100

# Weighted sum of the three normalized (0-100) components.
PAIN_WEIGHT = Fraction(2, 5)
FUNCTION_WEIGHT = Fraction(2, 5)
COMPLAINT_WEIGHT = Fraction(1, 5)

# Ratings are 0-10, normalized by x10. Complaint count saturates at 5.
RATING_SCALE = 10
COMPLAINT_COUNT_CAP = 5

# Lower bounds (inclusive) of the upper two bands.
MODERATE_THRESHOLD = 34
PRONOUNCED_THRESHOLD = 67

BAND_COLORS: Dict[SeverityBand, str] = {
    SeverityBand.MILD: "#9ae6b4",
    SeverityBand.MODERATE: "#faf089",
    SeverityBand.PRONOUNCED: "#feb2b2",
}


# =============================================================================
# STAGE 2: COMPLAINT AND MEASURE CATALOGS
# =============================================================================
# (id, english label, german label) in display order.

_COMPLAINT_ENTRIES: List[Tuple[str, str, str]] = [
    ("pain", "Pain", "Schmerz"),
    ("stiffness", "Stiffness", "Steifigkeit"),
    ("weakness", "Weakness", "Schwäche"),
    ("numbness", "Numbness / tingling", "Taubheit / Kribbeln"),
    ("instability", "Instability", "Instabilität"),
    ("limited_rom", "Limited range of motion", "Beweglichkeit ↓"),
    ("swelling", "Swelling", "Schwellung"),
]

_MEASURE_ENTRIES: List[Tuple[str, str, str]] = [
    ("mt", "Manual therapy", "Manuelle Therapie"),
    ("pt", "Physiotherapy exercises", "Krankengymnastik"),
    ("ml", "Lymphatic drainage", "Lymphdrainage"),
    ("exercise", "Active exercises", "aktive Übungen"),
    ("edu", "Patient education", "Edukation"),
    ("taping", "Taping", "Taping"),
    ("device", "Equipment-based training", "Gerätetraining"),
]


def _build_catalog(name: str, entries, language: NoteLanguage) -> ClinicalCatalog:
    column = 1 if NoteLanguage(language) == NoteLanguage.ENGLISH else 2
    return ClinicalCatalog(name, [CatalogOption(e[0], e[column]) for e in entries])


def complaint_catalog(language: NoteLanguage = NoteLanguage.ENGLISH) -> ClinicalCatalog:
    """Default complaint catalog with labels in the given language."""
    return _build_catalog("complaints", _COMPLAINT_ENTRIES, language)


def measure_catalog(language: NoteLanguage = NoteLanguage.ENGLISH) -> ClinicalCatalog:
    """Default measure catalog with labels in the given language."""
    return _build_catalog("measures", _MEASURE_ENTRIES, language)


# =============================================================================
# STAGE 3: NOTE LABEL PACKS
# =============================================================================

ENGLISH_LABELS = NoteLabels(
    language=NoteLanguage.ENGLISH.value,
    initial_label="Initial assessment",
    followup_label="Follow-up",
    header_template="{type_label} on {date}",
    no_date_label="no date",
    date_pattern="{month}/{day}/{year}",
    diagnosis_template="Diagnosis code: {code} – {short_label}",
    diagnosis_code_only_template="Diagnosis code: {code}",
    diagnosis_missing="Diagnosis code: not documented",
    section_headings={
        ClinicalTextField.ANAMNESIS: "History:",
        ClinicalTextField.STATUS: "Current findings / status:",
        ClinicalTextField.DIAGNOSIS: "Diagnosis (physiotherapeutic / medical):",
        ClinicalTextField.THERAPY_PLAN: "Therapy plan:",
        ClinicalTextField.COURSE: "Course & documentation:",
        ClinicalTextField.EPICRISIS: "Summary / epicrisis / recommendation:",
    },
    subjective_with_complaints_template=(
        "Subjective (summary): patient reports {complaints}. "
        "Current pain intensity {pain}/10, functional limitation {function}/10."
    ),
    subjective_without_complaints_template=(
        "Subjective (summary): no specific complaints selected. "
        "Current pain intensity {pain}/10, functional limitation {function}/10."
    ),
    plan_with_measures_template="Plan (summary): performed today: {measures}.",
    plan_without_measures="Plan (summary): symptom-oriented treatment.",
    plan_closing="Continue therapy, adjust load, home exercise programme as needed.",
    score_template="Severity score: {score}/100 ({band}).",
    band_texts={
        SeverityBand.MILD.value: "mild",
        SeverityBand.MODERATE.value: "moderate",
        SeverityBand.PRONOUNCED.value: "pronounced",
    },
    dictation_target_labels={
        ClinicalTextField.ANAMNESIS: "History",
        ClinicalTextField.STATUS: "Current findings / status",
        ClinicalTextField.DIAGNOSIS: "Diagnosis",
        ClinicalTextField.THERAPY_PLAN: "Therapy plan",
        ClinicalTextField.COURSE: "Course & documentation",
        ClinicalTextField.EPICRISIS: "Summary / epicrisis",
        ClinicalTextField.TRANSCRIPT: "Full transcript",
    },
    no_patient_info="No additional info",
)

GERMAN_LABELS = NoteLabels(
    language=NoteLanguage.GERMAN.value,
    initial_label="Erstbefund",
    followup_label="Folgetermin",
    header_template="{type_label} am {date}",
    no_date_label="ohne Datum",
    date_pattern="{day}.{month}.{year}",
    diagnosis_template="ICD-10: {code} – {short_label}",
    diagnosis_code_only_template="ICD-10: {code}",
    diagnosis_missing="ICD-10: nicht dokumentiert",
    section_headings={
        ClinicalTextField.ANAMNESIS: "Anamnese:",
        ClinicalTextField.STATUS: "Aktueller Befund / Status:",
        ClinicalTextField.DIAGNOSIS: "Diagnose (physiotherapeutisch / ärztlich):",
        ClinicalTextField.THERAPY_PLAN: "Therapievorschlag / Therapieplan:",
        ClinicalTextField.COURSE: "Verlauf & Dokumentation:",
        ClinicalTextField.EPICRISIS: "Epikrise / Bewertung / Empfehlung:",
    },
    subjective_with_complaints_template=(
        "Subjektiv (Kurzfassung): Patient:in berichtet über {complaints}. "
        "Schmerzintensität aktuell {pain}/10, Alltagseinschränkung {function}/10."
    ),
    subjective_without_complaints_template=(
        "Subjektiv (Kurzfassung): keine spezifischen Beschwerden ausgewählt. "
        "Schmerzintensität aktuell {pain}/10, Alltagseinschränkung {function}/10."
    ),
    plan_with_measures_template="Plan (Kurzfassung): heute durchgeführt: {measures}.",
    plan_without_measures="Plan (Kurzfassung): symptomorientierte Behandlung.",
    plan_closing=(
        "Fortführung der Therapie, Anpassung der Belastung, Heimübungsprogramm nach Bedarf."
    ),
    score_template="Beschwerde-Score: {score}/100 ({band}).",
    band_texts={
        SeverityBand.MILD.value: "milde Beschwerden",
        SeverityBand.MODERATE.value: "moderate Beschwerden",
        SeverityBand.PRONOUNCED.value: "ausgeprägte Beschwerden",
    },
    dictation_target_labels={
        ClinicalTextField.ANAMNESIS: "Anamnese",
        ClinicalTextField.STATUS: "Aktueller Befund / Status",
        ClinicalTextField.DIAGNOSIS: "Diagnose",
        ClinicalTextField.THERAPY_PLAN: "Therapieplan",
        ClinicalTextField.COURSE: "Verlauf & Dokumentation",
        ClinicalTextField.EPICRISIS: "Epikrise / Bewertung",
        ClinicalTextField.TRANSCRIPT: "Gesamt-Transkript",
    },
    no_patient_info="Keine Zusatzinfos",
)

LABEL_PACKS: Dict[NoteLanguage, NoteLabels] = {
    NoteLanguage.ENGLISH: ENGLISH_LABELS,
    NoteLanguage.GERMAN: GERMAN_LABELS,
}


def labels_for(language: NoteLanguage) -> NoteLabels:
    """Label pack for a language."""
    return LABEL_PACKS[NoteLanguage(language)]


# =============================================================================
# STAGE 4: ICD-10 LOOKUP
# =============================================================================

ICD10_SEARCH_LIMIT = 15
