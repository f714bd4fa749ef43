"""Severity classification for both instruments.

Behavioral scores are factor means on the 0-3 item scale; higher is worse:
- < 1.5: Normal
- < 2.0: Mild
- < 2.5: Moderate
- otherwise: Severe

Sensory scores are T-scores; higher is better:
- >= 50: Normal
- >= 40: Mild
- >= 30: Moderate
- otherwise: Severe
"""

from typing import Optional

from childhealth.models.score import Instrument, SeverityLevel

# (upper bound exclusive, level), checked in order
BEHAVIORAL_BANDS = [
    (1.5, SeverityLevel.NORMAL),
    (2.0, SeverityLevel.MILD),
    (2.5, SeverityLevel.MODERATE),
]

# (lower bound inclusive, level), checked in order
SENSORY_BANDS = [
    (50, SeverityLevel.NORMAL),
    (40, SeverityLevel.MILD),
    (30, SeverityLevel.MODERATE),
]


def classify(
    instrument: Instrument,
    score: float,
    dimension: Optional[str] = None,
) -> SeverityLevel:
    """Map a score onto a severity tier.

    ``dimension`` is accepted for both instruments so callers can pass it
    uniformly; neither instrument currently varies thresholds by dimension.
    """
    if instrument == Instrument.BEHAVIORAL:
        for upper, level in BEHAVIORAL_BANDS:
            if score < upper:
                return level
        return SeverityLevel.SEVERE

    for lower, level in SENSORY_BANDS:
        if score >= lower:
            return level
    return SeverityLevel.SEVERE
