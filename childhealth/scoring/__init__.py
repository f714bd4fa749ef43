"""Scoring modules for the behavioral and sensory instruments."""

from childhealth.scoring.behavioral import HYPERACTIVITY_INDEX, factor_mean, score_behavioral
from childhealth.scoring.result import ScoreResult
from childhealth.scoring.sensory import raw_sums, score_sensory
from childhealth.scoring.severity import classify
from childhealth.scoring.standardization import standardize

__all__ = [
    "HYPERACTIVITY_INDEX",
    "ScoreResult",
    "classify",
    "factor_mean",
    "raw_sums",
    "score_behavioral",
    "score_sensory",
    "standardize",
]
