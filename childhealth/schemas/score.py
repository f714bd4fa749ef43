"""Pydantic schema for serialized scoring results."""

from datetime import datetime

from pydantic import BaseModel, Field

from childhealth.models.score import Instrument, SeverityLevel
from childhealth.scoring.result import ScoreResult


class ScoreResultRead(BaseModel):
    """Schema for reading a scoring result.

    Serializes with the camelCase field names the report renderer expects.
    """

    instrument: Instrument
    dimension_scores: dict[str, int | float] = Field(..., alias="dimensionScores")
    dimension_raw_scores: dict[str, int] | None = Field(None, alias="dimensionRawScores")
    total_score: int | float = Field(..., alias="totalScore")
    dimension_levels: dict[str, SeverityLevel] = Field(..., alias="dimensionLevels")
    total_level: SeverityLevel = Field(..., alias="totalLevel")
    calculated_at: datetime = Field(..., alias="calculatedAt")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_result(cls, result: ScoreResult) -> "ScoreResultRead":
        return cls(
            instrument=result.instrument,
            dimension_scores=dict(result.dimension_scores),
            dimension_raw_scores=(
                dict(result.dimension_raw_scores)
                if result.dimension_raw_scores is not None
                else None
            ),
            total_score=result.total_score,
            dimension_levels=dict(result.dimension_levels),
            total_level=result.total_level,
            calculated_at=result.calculated_at,
        )
