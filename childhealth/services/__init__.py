"""Business logic services."""

from childhealth.services.auth import EligibilityService, LoginFailure, LoginResult
from childhealth.services.reporting import OVERALL, build_report, get_symptom_description
from childhealth.services.scoring import ScoringService
from childhealth.services.session import AssessmentSession, SessionError
from childhealth.services.usage_log import UsageLog

__all__ = [
    "AssessmentSession",
    "EligibilityService",
    "LoginFailure",
    "LoginResult",
    "OVERALL",
    "ScoringService",
    "SessionError",
    "UsageLog",
    "build_report",
    "get_symptom_description",
]
