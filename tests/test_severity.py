"""Tests for the severity score calculator and band classifier."""

import pytest

from physio_documentation.core.constants import BAND_COLORS, GERMAN_LABELS
from physio_documentation.core.enums import SeverityBand
from physio_documentation.core.models import Session
from physio_documentation.scoring import (
    calculate_score,
    classify_band,
    classify_score,
    score_session,
)


def test_score_extremes():
    assert calculate_score(pain=0, function=0, complaints_count=0) == 0
    assert calculate_score(pain=10, function=10, complaints_count=5) == 100


def test_score_example_patient():
    # 0.4*70 + 0.4*60 + 0.2*40 = 28 + 24 + 8
    assert calculate_score(pain=7, function=6, complaints_count=2) == 60


def test_complaint_count_is_capped_at_five():
    assert calculate_score(pain=0, function=0, complaints_count=5) == 20
    assert calculate_score(pain=0, function=0, complaints_count=12) == 20


@pytest.mark.parametrize(
    "pain, function, complaints, expected",
    [
        (5, 5, 0, 40),
        (1, 0, 0, 4),
        (3, 4, 1, 32),
        (10, 0, 3, 52),
    ],
)
def test_score_matches_weighted_formula(pain, function, complaints, expected):
    assert calculate_score(pain, function, complaints) == expected


def test_fractional_ratings_round_half_up():
    # 0.4 * 1.25 * 10 = 5.0 ; 0.4 * 0.125 * 10 = 0.5 -> rounds up
    assert calculate_score(pain=1.25, function=0.125, complaints_count=0) == 6
    assert calculate_score(pain=0.125, function=0, complaints_count=0) == 1


def test_out_of_range_inputs_are_used_as_given():
    assert calculate_score(pain=12, function=10, complaints_count=5) == 108
    assert calculate_score(pain=-1, function=0, complaints_count=0) == -4


@pytest.mark.parametrize(
    "score, band",
    [
        (0, SeverityBand.MILD),
        (33, SeverityBand.MILD),
        (34, SeverityBand.MODERATE),
        (66, SeverityBand.MODERATE),
        (67, SeverityBand.PRONOUNCED),
        (100, SeverityBand.PRONOUNCED),
        (-5, SeverityBand.MILD),
        (140, SeverityBand.PRONOUNCED),
    ],
)
def test_band_boundaries(score, band):
    assert classify_band(score) is band


def test_classify_score_carries_text_and_color():
    category = classify_score(60)
    assert category.band is SeverityBand.MODERATE
    assert category.text == "moderate"
    assert category.color == BAND_COLORS[SeverityBand.MODERATE]


def test_classify_score_uses_label_pack():
    assert classify_score(10, GERMAN_LABELS).text == "milde Beschwerden"
    assert classify_score(90, GERMAN_LABELS).text == "ausgeprägte Beschwerden"


def test_score_session_uses_defaults_for_missing_ratings():
    session = Session(pain=None, function=None, complaints=["pain"])
    # defaults 5/5 -> 20 + 20 + 4
    assert score_session(session) == 44
