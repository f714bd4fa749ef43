"""Assessment scoring service.

Dispatches a completed answer set to the scorer for its instrument:
- Behavioral: Conners 48-item parent questionnaire (factor means)
- Sensory: 64-item sensory integration inventory (T-scores)

All scoring is deterministic and has no side effects.
"""

import logging
from typing import Any, Mapping

from childhealth.catalog import active_items, parse_age
from childhealth.models.score import Instrument
from childhealth.schemas.score import ScoreResultRead
from childhealth.scoring import ScoreResult, score_behavioral, score_sensory

logger = logging.getLogger(__name__)


class ScoringService:
    """Service for calculating assessment scores."""

    @classmethod
    def calculate(
        cls,
        instrument: Instrument,
        answers: Mapping[int, int],
        age_years: Any = None,
    ) -> ScoreResult:
        """Score a completed questionnaire.

        Args:
            instrument: Instrument the answers belong to
            answers: Item id to selected option score
            age_years: Declared age; selects the sensory items that were administered

        Returns:
            ScoreResult

        Raises:
            ValueError: If the instrument is not supported
        """
        instrument = Instrument(instrument)

        if instrument == Instrument.BEHAVIORAL:
            result = score_behavioral(answers)
        elif instrument == Instrument.SENSORY:
            items = active_items(instrument, age_years)
            result = score_sensory(items, answers)
        else:
            raise ValueError(f"Unsupported instrument: {instrument}")

        logger.info(
            f"Scored {instrument.value} assessment: total={result.total_score} "
            f"level={result.total_level.value} answered={len(answers)} "
            f"age={parse_age(age_years)}"
        )
        return result

    @classmethod
    def get_scores_for_report(
        cls,
        instrument: Instrument,
        answers: Mapping[int, int],
        age_years: Any = None,
    ) -> dict[str, Any]:
        """Calculate scores and format them for the reporting collaborator.

        Returns the camelCase structure charts and printed reports consume:
        {
            "dimensionScores": {...},
            "dimensionRawScores": {...} | None,
            "totalScore": 48,
            "dimensionLevels": {...},
            "totalLevel": "mild"
        }
        """
        result = cls.calculate(instrument, answers, age_years)
        return ScoreResultRead.from_result(result).model_dump(by_alias=True, mode="json")
