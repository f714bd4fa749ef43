"""Instrument and severity enumerations."""

from enum import Enum


class Instrument(str, Enum):
    """Questionnaires administered by the system."""

    BEHAVIORAL = "behavioral"  # Conners parent symptom questionnaire (48 items)
    SENSORY = "sensory"  # Sensory integration inventory (64 items)


class SeverityLevel(str, Enum):
    """Ordered severity tiers, least to most severe."""

    NORMAL = "normal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        """Position in the severity ordering (0 = normal)."""
        return _SEVERITY_ORDER.index(self)

    @property
    def label(self) -> str:
        """Wording used on printed reports."""
        return _SEVERITY_LABELS[self]

    @property
    def is_abnormal(self) -> bool:
        return self is not SeverityLevel.NORMAL


_SEVERITY_ORDER = (
    SeverityLevel.NORMAL,
    SeverityLevel.MILD,
    SeverityLevel.MODERATE,
    SeverityLevel.SEVERE,
)

_SEVERITY_LABELS = {
    SeverityLevel.NORMAL: "Normal",
    SeverityLevel.MILD: "Mild dysfunction",
    SeverityLevel.MODERATE: "Moderate dysfunction",
    SeverityLevel.SEVERE: "Severe dysfunction",
}
