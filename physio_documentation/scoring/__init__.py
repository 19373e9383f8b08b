"""
Scoring Layer - Severity Score and Band Classification

Submodules:
    severity.py → Score calculator, band classifier

Dependency Rule:
    This layer depends on: core
    This layer is used by: generation, workspace
"""

from physio_documentation.scoring.severity import (
    SeverityCategory,
    calculate_score,
    classify_band,
    classify_score,
    score_session,
)

__all__ = [
    "SeverityCategory",
    "calculate_score",
    "classify_band",
    "classify_score",
    "score_session",
]
