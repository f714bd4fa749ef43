"""Tests for card login and the 24 hour single-use cooldown."""

import json
import logging

import pytest

from childhealth.core.config import Settings
from childhealth.models.score import Instrument
from childhealth.services.auth import EligibilityService, LoginFailure
from childhealth.services.storage import InMemoryKeyValueStore
from childhealth.services.usage_log import USAGE_LOG_KEY, UsageLog
from childhealth.utils.time import MS_PER_HOUR

GT1 = ("GT0001", "113342")
DD1 = ("DD0001", "155204")
ADMIN = ("admin", "gtdd001")


class TestLoginValidation:
    """Tests for credential checks."""

    def test_first_login_succeeds(self, eligibility: EligibilityService) -> None:
        """Test that a fresh card logs in with its instrument."""
        result = eligibility.login(*GT1)

        assert result.ok is True
        assert result.instrument == Instrument.SENSORY
        assert result.is_admin is False
        assert result.failure is None

    def test_unknown_account(self, eligibility: EligibilityService) -> None:
        """Test that an unknown card is refused."""
        result = eligibility.login("GT0999", "113342")

        assert result.ok is False
        assert result.failure == LoginFailure.ACCOUNT_NOT_FOUND
        assert result.reason == "account not found"

    def test_account_id_is_case_sensitive(self, eligibility: EligibilityService) -> None:
        """Test that card numbers must match exactly."""
        assert eligibility.login("gt0001", "113342").failure == LoginFailure.ACCOUNT_NOT_FOUND

    def test_wrong_secret(self, eligibility: EligibilityService) -> None:
        """Test that a wrong secret is refused."""
        result = eligibility.login("GT0001", "000000")

        assert result.ok is False
        assert result.failure == LoginFailure.INCORRECT_SECRET
        assert result.reason == "incorrect secret"

    def test_secret_of_another_card(self, eligibility: EligibilityService) -> None:
        """Test that secrets are not interchangeable between cards."""
        assert eligibility.login("GT0002", GT1[1]).failure == LoginFailure.INCORRECT_SECRET

    def test_login_does_not_consume(
        self, eligibility: EligibilityService, usage_log: UsageLog
    ) -> None:
        """Test that checking a card never writes the usage log."""
        eligibility.login(*GT1)
        eligibility.login(*GT1)
        assert usage_log.load() == {}


class TestCooldown:
    """Tests for the single-use window."""

    def test_locked_right_after_use(self, eligibility: EligibilityService, clock) -> None:
        """Test that a consumed card is locked for about 24 hours."""
        assert eligibility.mark_used(GT1[0]) is True
        clock.advance(1)

        result = eligibility.login(*GT1)

        assert result.ok is False
        assert result.failure == LoginFailure.ACCOUNT_LOCKED
        assert result.hours_remaining == 24
        assert result.reason == "account locked, time remaining ≈ 24 hours"

    def test_remaining_hours_round_up(self, eligibility: EligibilityService, clock) -> None:
        """Test that partial hours count as a whole hour."""
        eligibility.mark_used(GT1[0])
        clock.advance(MS_PER_HOUR)
        assert eligibility.login(*GT1).hours_remaining == 23

        clock.advance(22 * MS_PER_HOUR + 1)
        assert eligibility.login(*GT1).hours_remaining == 1

    def test_unlocked_after_24_hours(self, eligibility: EligibilityService, clock) -> None:
        """Test that the card works again once the window has passed."""
        eligibility.mark_used(GT1[0])
        clock.advance(24 * MS_PER_HOUR)

        result = eligibility.login(*GT1)
        assert result.ok is True

    def test_reuse_restarts_window(self, eligibility: EligibilityService, clock) -> None:
        """Test that consuming again starts a fresh 24 hours."""
        eligibility.mark_used(GT1[0])
        clock.advance(25 * MS_PER_HOUR)
        eligibility.mark_used(GT1[0])
        clock.advance(MS_PER_HOUR)

        assert eligibility.login(*GT1).failure == LoginFailure.ACCOUNT_LOCKED

    def test_cards_locked_independently(self, eligibility: EligibilityService) -> None:
        """Test that consuming one card leaves others usable."""
        eligibility.mark_used(GT1[0])
        assert eligibility.login(*DD1).ok is True

    def test_wrong_secret_reported_before_lock(self, eligibility: EligibilityService) -> None:
        """Test that a locked card with a wrong secret reports the secret."""
        eligibility.mark_used(GT1[0])
        assert eligibility.login("GT0001", "000000").failure == LoginFailure.INCORRECT_SECRET

    def test_log_written_by_another_process(self, memory_store: InMemoryKeyValueStore, clock) -> None:
        """Test that entries already in the store are honoured."""
        memory_store.set(USAGE_LOG_KEY, json.dumps({"DD0001": clock.now - MS_PER_HOUR}))
        service = EligibilityService(UsageLog(memory_store), clock=clock, cooldown_ms=24 * MS_PER_HOUR)

        assert service.login(*DD1).hours_remaining == 23

    def test_configured_cooldown(self, usage_log: UsageLog, clock) -> None:
        """Test that the window follows settings."""
        settings = Settings(account_cooldown_hours=2)
        service = EligibilityService(usage_log, clock=clock, cooldown_ms=settings.account_cooldown_ms)
        service.mark_used(GT1[0])
        clock.advance(2 * MS_PER_HOUR)

        assert service.login(*GT1).ok is True


class TestAdministrator:
    """Tests for the administrator card."""

    def test_admin_login(self, eligibility: EligibilityService) -> None:
        """Test that the admin logs in as admin."""
        result = eligibility.login(*ADMIN)
        assert result.ok is True
        assert result.is_admin is True

    def test_admin_never_logged(self, eligibility: EligibilityService, usage_log: UsageLog) -> None:
        """Test that marking the admin used writes nothing."""
        assert eligibility.mark_used("admin") is False
        assert usage_log.load() == {}

    def test_admin_never_locked(self, eligibility: EligibilityService, memory_store, clock) -> None:
        """Test that an admin entry in the log is ignored."""
        memory_store.set(USAGE_LOG_KEY, json.dumps({"admin": clock.now}))
        assert eligibility.login(*ADMIN).ok is True

    def test_admin_wrong_secret(self, eligibility: EligibilityService) -> None:
        """Test that the admin secret is still checked."""
        assert eligibility.login("admin", "wrong").failure == LoginFailure.INCORRECT_SECRET


class TestFailOpen:
    """Tests for an unavailable or corrupt usage log."""

    def test_corrupt_log_allows_login(self, memory_store: InMemoryKeyValueStore, eligibility) -> None:
        """Test that unparseable log contents read as empty."""
        memory_store.set(USAGE_LOG_KEY, "{not json")
        assert eligibility.login(*GT1).ok is True

    def test_broken_store_allows_login(self, broken_store, clock) -> None:
        """Test that a failing store neither blocks login nor raises."""
        service = EligibilityService(UsageLog(broken_store), clock=clock, cooldown_ms=24 * MS_PER_HOUR)

        assert service.login(*GT1).ok is True
        assert service.mark_used(GT1[0]) is False

    def test_mark_used_unknown_account(self, eligibility: EligibilityService, usage_log) -> None:
        """Test that unknown accounts are never recorded."""
        assert eligibility.mark_used("ZZ0001") is False
        assert usage_log.load() == {}

    def test_undecodable_log_file_allows_login(self, file_store, clock) -> None:
        """Test that a log file of non-UTF-8 bytes reads as empty."""
        file_store.base_path.mkdir(parents=True)
        (file_store.base_path / f"{USAGE_LOG_KEY}.json").write_bytes(b"\xff\xfe{garbage")
        service = EligibilityService(UsageLog(file_store), clock=clock, cooldown_ms=24 * MS_PER_HOUR)

        assert service.login(*GT1).ok is True
        assert service.mark_used(GT1[0]) is True
        assert service.login(*GT1).failure == LoginFailure.ACCOUNT_LOCKED


class TestAuditLogging:
    """Tests for audit lines written on login and consumption."""

    def test_login_is_audited(self, eligibility: EligibilityService, caplog: pytest.LogCaptureFixture) -> None:
        """Test that each login decision is logged."""
        with caplog.at_level(logging.INFO, logger="audit"):
            eligibility.login("GT0001", "000000")
        assert "action=login account=GT0001 outcome=incorrect_secret" in caplog.text

    def test_consumption_is_audited(self, eligibility: EligibilityService, caplog: pytest.LogCaptureFixture) -> None:
        """Test that consuming a card is logged."""
        with caplog.at_level(logging.INFO, logger="audit"):
            eligibility.mark_used(GT1[0])
        assert "action=consume account=GT0001 outcome=recorded" in caplog.text
