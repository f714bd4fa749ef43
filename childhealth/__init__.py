"""Child health assessment: questionnaire scoring and card eligibility."""

__version__ = "0.1.0"
