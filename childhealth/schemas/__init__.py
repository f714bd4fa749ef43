"""Pydantic schemas exposed to the reporting and quiz collaborators."""

from childhealth.schemas.instrument import AnswerOptionRead, InstrumentRead, ItemRead
from childhealth.schemas.score import ScoreResultRead

__all__ = [
    "AnswerOptionRead",
    "InstrumentRead",
    "ItemRead",
    "ScoreResultRead",
]
