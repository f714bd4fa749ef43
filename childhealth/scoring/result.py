"""Scoring result shared by both instruments."""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional

from childhealth.models.score import Instrument, SeverityLevel
from childhealth.utils.time import utc_now


@dataclass(frozen=True)
class ScoreResult:
    """Result of scoring one completed questionnaire.

    ``dimension_scores`` holds factor means for the behavioral instrument and
    T-scores for the sensory instrument. ``dimension_raw_scores`` is only
    set for the sensory instrument.
    """

    instrument: Instrument
    dimension_scores: Mapping[str, float]
    total_score: float
    dimension_levels: Mapping[str, SeverityLevel]
    total_level: SeverityLevel
    dimension_raw_scores: Optional[Mapping[str, int]] = None
    calculated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        # Freeze the mappings so a result cannot be edited after scoring
        object.__setattr__(self, "dimension_scores", MappingProxyType(dict(self.dimension_scores)))
        object.__setattr__(self, "dimension_levels", MappingProxyType(dict(self.dimension_levels)))
        if self.dimension_raw_scores is not None:
            object.__setattr__(
                self, "dimension_raw_scores", MappingProxyType(dict(self.dimension_raw_scores))
            )

    @property
    def abnormal_dimensions(self) -> list[str]:
        """Dimensions classified above NORMAL, in scoring order."""
        return [name for name, level in self.dimension_levels.items() if level.is_abnormal]
