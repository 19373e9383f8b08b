"""
Severity Scoring - Score Calculator and Band Classifier

This module turns the structured ratings of a session into a 0-100 severity
score and classifies that score into one of three qualitative bands.

Formula:
    painNorm      = pain * 10
    functionNorm  = function * 10
    complaintNorm = min(complaintsCount, 5) / 5 * 100
    score         = round(0.4 * painNorm + 0.4 * functionNorm + 0.2 * complaintNorm)

    The sum is evaluated in exact rational arithmetic and rounded half up
    (floor(x + 0.5)), so 59.5 becomes 60 and -0.5 becomes 0.

Bands:
    score < 34        → MILD
    34 <= score < 67  → MODERATE
    score >= 67       → PRONOUNCED

Pipeline Position:
    Session ratings → [Severity Scoring] → Note Composer → Session.score
                       ^^^^^^^^^^^^^^^^^
                       You are here

Usage:
    from physio_documentation.scoring import calculate_score, classify_score

    score = calculate_score(pain=7, function=6, complaints_count=2)  # 60
    category = classify_score(score)  # SeverityCategory(band=MODERATE, ...)
"""

import math
from dataclasses import dataclass
from fractions import Fraction

from physio_documentation.core.constants import (
    BAND_COLORS,
    COMPLAINT_COUNT_CAP,
    COMPLAINT_WEIGHT,
    ENGLISH_LABELS,
    FUNCTION_WEIGHT,
    MODERATE_THRESHOLD,
    PAIN_WEIGHT,
    PRONOUNCED_THRESHOLD,
    RATING_SCALE,
    SCORE_MAX,
)
from physio_documentation.core.enums import SeverityBand
from physio_documentation.core.models import NoteLabels, Session


# =============================================================================
# STAGE 1: SCORE CALCULATOR
# =============================================================================


def calculate_score(pain, function, complaints_count: int) -> int:
    """
    Compute the severity score from ratings and complaint count.

    Inputs are not clamped: out-of-range ratings are processed as given so
    that stored historical scores stay comparable.

    Args:
        pain: Pain rating (0-10)
        function: Functional limitation rating (0-10)
        complaints_count: Number of selected complaints

    Returns:
        Integer score, 0-100 for in-range inputs

    Example:
        >>> calculate_score(pain=10, function=10, complaints_count=5)
        100
    """
    pain_norm = Fraction(pain) * RATING_SCALE
    function_norm = Fraction(function) * RATING_SCALE
    complaint_norm = Fraction(min(complaints_count, COMPLAINT_COUNT_CAP), COMPLAINT_COUNT_CAP)
    complaint_norm *= SCORE_MAX

    weighted = (
        PAIN_WEIGHT * pain_norm
        + FUNCTION_WEIGHT * function_norm
        + COMPLAINT_WEIGHT * complaint_norm
    )
    return _round_half_up(weighted)


def score_session(session: Session) -> int:
    """Fresh score from the session's current ratings and complaint count."""
    return calculate_score(
        pain=session.effective_pain,
        function=session.effective_function,
        complaints_count=session.complaints_count,
    )


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


# =============================================================================
# STAGE 2: BAND CLASSIFIER
# =============================================================================


@dataclass(frozen=True)
class SeverityCategory:
    """
    Classification of a score for presentation.

    Attributes:
        band: The qualitative band
        text: Localized band text from the label pack
        color: Presentation colour token
    """

    band: SeverityBand
    text: str
    color: str


def classify_band(score) -> SeverityBand:
    """Band for any numeric score; values outside 0-100 are still classified."""
    if score < MODERATE_THRESHOLD:
        return SeverityBand.MILD
    if score < PRONOUNCED_THRESHOLD:
        return SeverityBand.MODERATE
    return SeverityBand.PRONOUNCED


def classify_score(score, labels: NoteLabels = ENGLISH_LABELS) -> SeverityCategory:
    """
    Classify a score into a band with its localized text and colour token.

    Example:
        >>> classify_score(34).band
        <SeverityBand.MODERATE: 'moderate'>
    """
    band = classify_band(score)
    return SeverityCategory(
        band=band,
        text=labels.band_texts.get(band.value, band.value),
        color=BAND_COLORS[band],
    )
