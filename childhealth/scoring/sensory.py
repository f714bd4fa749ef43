"""Sensory integration inventory scoring module.

Each item is scored 1-5 (Never, Rarely, Sometimes, Often, Always). Item
scores are summed per dimension and each raw sum is converted to a T-score
through the norm tables, where higher T-scores mean better integration.
The overall score is the mean T-score, which keeps it on the same scale as
the dimensions regardless of how many items each dimension has.
"""

import math
from typing import Iterable, Mapping

from childhealth.catalog import Item, StandardizationTable
from childhealth.models.score import Instrument
from childhealth.scoring.result import ScoreResult
from childhealth.scoring.severity import classify
from childhealth.scoring.standardization import standardize


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 rounding up."""
    return math.floor(value + 0.5)


def raw_sums(items: Iterable[Item], answers: Mapping[int, int]) -> dict[str, int]:
    """Sum answered scores per dimension over the active items.

    Every active item contributes its dimension, so a dimension whose items
    are all unanswered still appears with a raw sum of 0.
    """
    sums: dict[str, int] = {}
    for item in items:
        sums[item.dimension] = sums.get(item.dimension, 0) + answers.get(item.id, 0)
    return sums


def score_sensory(
    items: Iterable[Item],
    answers: Mapping[int, int],
    table: StandardizationTable | None = None,
) -> ScoreResult:
    """Score sensory inventory responses.

    Args:
        items: Active (already age-filtered) items
        answers: Item id to selected option score
        table: Norm tables (defaults to the shipped sensory norms)

    Returns:
        ScoreResult with raw sums, T-scores and levels per dimension
    """
    dimension_raw_scores = raw_sums(items, answers)
    dimension_scores: dict[str, float] = {}
    dimension_levels = {}

    for dimension, raw in dimension_raw_scores.items():
        t_score = standardize(dimension, raw, table)
        dimension_scores[dimension] = t_score
        dimension_levels[dimension] = classify(Instrument.SENSORY, t_score, dimension)

    if dimension_scores:
        total = round_half_up(sum(dimension_scores.values()) / len(dimension_scores))
    else:
        total = 0

    return ScoreResult(
        instrument=Instrument.SENSORY,
        dimension_scores=dimension_scores,
        dimension_raw_scores=dimension_raw_scores,
        total_score=total,
        dimension_levels=dimension_levels,
        total_level=classify(Instrument.SENSORY, total),
    )
