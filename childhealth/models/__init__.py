"""Domain enumerations and database models."""

from childhealth.models.key_value import KeyValueRecord
from childhealth.models.score import Instrument, SeverityLevel

__all__ = [
    "Instrument",
    "SeverityLevel",
    "KeyValueRecord",
]
