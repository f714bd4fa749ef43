"""Conners parent questionnaire (48-item) scoring module.

Each item is scored 0-3:
- 0 = None
- 1 = Slight
- 2 = Considerable
- 3 = Severe

Items are grouped into six factors. A factor's score is the mean of its
answered items, so a partially completed questionnaire still produces
comparable factor scores. The Hyperactivity Index doubles as the headline
score for the whole questionnaire.

Factor severity (same thresholds for every factor):
- < 1.5: Normal
- 1.5-1.99: Mild
- 2.0-2.49: Moderate
- >= 2.5: Severe
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from childhealth.catalog import FactorDefinition, get_instrument
from childhealth.models.score import Instrument
from childhealth.scoring.result import ScoreResult
from childhealth.scoring.severity import classify

HYPERACTIVITY_INDEX = "HyperactivityIndex"

# Factor means are reported to 2 decimals, halves rounded up
MEAN_PRECISION = Decimal("0.01")


def factor_mean(factor: FactorDefinition, answers: Mapping[int, int]) -> float:
    """Mean score over the factor's answered items, rounded to 2 decimals.

    Unanswered items are left out of both the sum and the count. A factor
    with no answered items scores 0.
    """
    answered = [answers[item_id] for item_id in factor.item_ids if item_id in answers]
    if not answered:
        return 0.0
    mean = Decimal(sum(answered)) / Decimal(len(answered))
    return float(mean.quantize(MEAN_PRECISION, rounding=ROUND_HALF_UP))


def score_behavioral(
    answers: Mapping[int, int],
    factors: tuple[FactorDefinition, ...] | None = None,
) -> ScoreResult:
    """Score Conners questionnaire responses.

    Args:
        answers: Item id to selected option score, answered items only
        factors: Factor definitions (defaults to the shipped catalog)

    Returns:
        ScoreResult with one mean per factor; the total is the
        Hyperactivity Index mean
    """
    if factors is None:
        factors = get_instrument(Instrument.BEHAVIORAL).factors

    dimension_scores: dict[str, float] = {}
    dimension_levels = {}

    for factor in factors:
        mean = factor_mean(factor, answers)
        dimension_scores[factor.name] = mean
        dimension_levels[factor.name] = classify(Instrument.BEHAVIORAL, mean, factor.name)

    total = dimension_scores.get(HYPERACTIVITY_INDEX, 0.0)

    return ScoreResult(
        instrument=Instrument.BEHAVIORAL,
        dimension_scores=dimension_scores,
        total_score=total,
        dimension_levels=dimension_levels,
        total_level=classify(Instrument.BEHAVIORAL, total, HYPERACTIVITY_INDEX),
    )
