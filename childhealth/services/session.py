"""Single running assessment session.

Walks one respondent through instrument selection, card login, child
intake, the questionnaire and submission. Rendering is left to the caller;
this class only holds the state and enforces the order of steps.
"""

import logging
from enum import Enum
from typing import Any

from childhealth.catalog import Item, active_items, get_instrument, parse_age
from childhealth.models.score import Instrument
from childhealth.scoring.result import ScoreResult
from childhealth.services.auth import EligibilityService, LoginFailure, LoginResult
from childhealth.services.registry import series_for_instrument
from childhealth.services.scoring import ScoringService

logger = logging.getLogger(__name__)


class SessionError(ValueError):
    """Raised when a session step is called out of order or with bad input."""

    pass


class SessionStage(str, Enum):
    """Where the respondent is in the flow."""

    HOME = "home"
    LOGIN = "login"
    INTAKE = "intake"
    INSTRUCTIONS = "instructions"
    QUIZ = "quiz"
    RESULT = "result"


class AssessmentSession:
    """State of one assessment from instrument choice to result."""

    def __init__(self, eligibility: EligibilityService) -> None:
        self.eligibility = eligibility
        self.reset()

    def reset(self) -> None:
        """Discard everything and return to instrument selection."""
        self.stage = SessionStage.HOME
        self.instrument: Instrument | None = None
        self.account_id: str | None = None
        self.child_name = ""
        self.child_age = ""
        self.items: tuple[Item, ...] = ()
        self.answers: dict[int, int] = {}
        self.index = 0
        self.result: ScoreResult | None = None

    def _require(self, *stages: SessionStage) -> None:
        if self.stage not in stages:
            expected = ", ".join(stage.value for stage in stages)
            raise SessionError(f"Session is at {self.stage.value}, expected {expected}")

    def select(self, instrument: Instrument) -> None:
        """Choose the instrument and move to the login step."""
        self._require(SessionStage.HOME, SessionStage.LOGIN)
        self.instrument = Instrument(instrument)
        self.stage = SessionStage.LOGIN

    def login(self, account_id: str, secret: str) -> LoginResult:
        """Check a card against the chosen instrument and consume it.

        A non-admin card issued for a different instrument is refused with
        INSTRUMENT_MISMATCH and is not consumed.
        """
        self._require(SessionStage.LOGIN)
        result = self.eligibility.login(account_id, secret)
        if not result.ok:
            return result

        if not result.is_admin and result.instrument != self.instrument:
            required = series_for_instrument(self.instrument).prefix
            logger.info(
                f"Card {account_id} is for {result.instrument.value}, "
                f"session wants {self.instrument.value}"
            )
            return LoginResult.refused(
                LoginFailure.INSTRUMENT_MISMATCH,
                f"this card is for the {result.instrument.value} assessment; "
                f"use a card starting with {required}",
            )

        self.eligibility.mark_used(account_id)
        self.account_id = account_id
        self.stage = SessionStage.INTAKE
        return result

    def record_intake(self, child_name: str, age: Any) -> None:
        """Store the child's name and declared age.

        Both fields are required; the age is kept as given and only parsed
        when the items are chosen.
        """
        self._require(SessionStage.INTAKE)
        name = (child_name or "").strip()
        age_text = str(age).strip() if age is not None else ""
        if not name or not age_text:
            raise SessionError("Child name and age are both required")
        self.child_name = name
        self.child_age = age_text
        self.stage = SessionStage.INSTRUCTIONS

    @property
    def age_years(self) -> float | None:
        return parse_age(self.child_age)

    def start_quiz(self) -> tuple[Item, ...]:
        """Pick the active items for the declared age and start at the first."""
        self._require(SessionStage.INSTRUCTIONS)
        self.items = active_items(self.instrument, self.child_age)
        self.answers = {}
        self.index = 0
        self.stage = SessionStage.QUIZ
        return self.items

    @property
    def current_item(self) -> Item:
        self._require(SessionStage.QUIZ)
        return self.items[self.index]

    def answer(self, item_id: int, score: int) -> None:
        """Record or change the answer to an active item."""
        self._require(SessionStage.QUIZ)
        if item_id not in {item.id for item in self.items}:
            raise SessionError(f"Item {item_id} is not part of this questionnaire")
        if score not in get_instrument(self.instrument).option_scores:
            raise SessionError(f"Score {score} is not an answer option")
        self.answers[item_id] = score

    def next(self) -> Item:
        """Advance to the next item; stays on the last one."""
        self._require(SessionStage.QUIZ)
        if self.index < len(self.items) - 1:
            self.index += 1
        return self.items[self.index]

    def previous(self) -> Item:
        """Go back one item; stays on the first one."""
        self._require(SessionStage.QUIZ)
        if self.index > 0:
            self.index -= 1
        return self.items[self.index]

    @property
    def progress(self) -> int:
        """Position of the current item as a whole percentage."""
        if not self.items:
            return 0
        return round((self.index + 1) / len(self.items) * 100)

    @property
    def is_complete(self) -> bool:
        return bool(self.items) and all(item.id in self.answers for item in self.items)

    def submit(self) -> ScoreResult:
        """Score the answers and move to the result step.

        Raises:
            SessionError: If any active item is unanswered
        """
        self._require(SessionStage.QUIZ)
        if not self.is_complete:
            missing = [item.id for item in self.items if item.id not in self.answers]
            raise SessionError(f"Unanswered items: {missing}")

        self.result = ScoringService.calculate(self.instrument, self.answers, self.child_age)
        self.stage = SessionStage.RESULT
        return self.result
