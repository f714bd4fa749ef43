"""Card login and single-use enforcement."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional

from childhealth.core.config import settings
from childhealth.core.logging import audit_logger
from childhealth.core.security import verify_secret
from childhealth.models.score import Instrument
from childhealth.services.registry import CredentialRecord, get_registry
from childhealth.services.usage_log import UsageLog
from childhealth.utils.time import MS_PER_HOUR, epoch_ms, from_epoch_ms

logger = logging.getLogger(__name__)


class LoginFailure(str, Enum):
    """Reason a login was refused."""

    ACCOUNT_NOT_FOUND = "account_not_found"
    INCORRECT_SECRET = "incorrect_secret"
    ACCOUNT_LOCKED = "account_locked"
    INSTRUMENT_MISMATCH = "instrument_mismatch"


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a login attempt.

    Attributes:
        ok: Whether the credential may be used now
        instrument: Instrument the card is issued for (success only)
        is_admin: Whether the card is the administrator card
        failure: Failure category (failure only)
        reason: Human-readable failure message (failure only)
        hours_remaining: Whole hours left on the lock (ACCOUNT_LOCKED only)
    """

    ok: bool
    instrument: Optional[Instrument] = None
    is_admin: bool = False
    failure: Optional[LoginFailure] = None
    reason: str = ""
    hours_remaining: Optional[int] = None

    @classmethod
    def success(cls, record: CredentialRecord) -> "LoginResult":
        return cls(ok=True, instrument=record.instrument, is_admin=record.is_admin)

    @classmethod
    def refused(
        cls,
        failure: LoginFailure,
        reason: str,
        hours_remaining: Optional[int] = None,
    ) -> "LoginResult":
        return cls(ok=False, failure=failure, reason=reason, hours_remaining=hours_remaining)


class EligibilityService:
    """Decides whether a card may be used and records its consumption.

    ``login`` never writes the usage log. The caller commits consumption
    with ``mark_used`` once it has accepted the login, so checking a card
    and spending it stay separate steps.
    """

    def __init__(
        self,
        usage_log: UsageLog,
        registry: Mapping[str, CredentialRecord] | None = None,
        clock: Callable[[], int] = epoch_ms,
        cooldown_ms: int | None = None,
    ) -> None:
        self.usage_log = usage_log
        self.registry = registry if registry is not None else get_registry()
        self.clock = clock
        self.cooldown_ms = cooldown_ms if cooldown_ms is not None else settings.account_cooldown_ms

    def login(self, account_id: str, secret: str) -> LoginResult:
        """Validate a card and check its cooldown.

        Args:
            account_id: Card number as typed
            secret: Card secret as typed

        Returns:
            LoginResult describing success or the reason for refusal
        """
        record = self.registry.get(account_id)

        if record is None:
            result = LoginResult.refused(LoginFailure.ACCOUNT_NOT_FOUND, "account not found")
        elif not verify_secret(secret, record.secret):
            result = LoginResult.refused(LoginFailure.INCORRECT_SECRET, "incorrect secret")
        elif record.is_admin:
            # Administrators are never locked and never logged
            result = LoginResult.success(record)
        else:
            result = self._check_cooldown(record)

        audit_logger.log(
            action="login",
            account_id=account_id,
            outcome="accepted" if result.ok else result.failure.value,
            metadata={"is_admin": result.is_admin} if result.ok else None,
        )
        return result

    def _check_cooldown(self, record: CredentialRecord) -> LoginResult:
        last_used = self.usage_log.last_used(record.account_id)
        if last_used is None:
            return LoginResult.success(record)

        elapsed = self.clock() - last_used
        if elapsed < self.cooldown_ms:
            hours = math.ceil((self.cooldown_ms - elapsed) / MS_PER_HOUR)
            unlocks_at = from_epoch_ms(last_used + self.cooldown_ms)
            logger.info(f"Card {record.account_id} locked until {unlocks_at.isoformat()}")
            return LoginResult.refused(
                LoginFailure.ACCOUNT_LOCKED,
                f"account locked, time remaining ≈ {hours} hours",
                hours_remaining=hours,
            )

        return LoginResult.success(record)

    def mark_used(self, account_id: str) -> bool:
        """Start the cooldown for a card.

        No-op for the administrator card and for unknown accounts.

        Returns:
            True if a usage entry was written
        """
        record = self.registry.get(account_id)
        if record is None:
            logger.warning(f"mark_used called for unknown account {account_id}")
            return False
        if record.is_admin:
            return False

        written = self.usage_log.record(account_id, self.clock())
        audit_logger.log(
            action="consume",
            account_id=account_id,
            outcome="recorded" if written else "write_failed",
        )
        return written
