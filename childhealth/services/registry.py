"""Deterministic credential registry.

Cards are printed and handed out ahead of time, so the registry must come
out identical on every run: account ids are a series prefix plus a
zero-padded sequence number, and secrets are derived arithmetically from
the sequence number.
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from childhealth.core.security import derive_card_secret
from childhealth.models.score import Instrument

ADMIN_ACCOUNT_ID = "admin"
ADMIN_SECRET = "gtdd001"

CARDS_PER_SERIES = 100


@dataclass(frozen=True)
class CardSeries:
    """A run of cards sharing a prefix, instrument and secret derivation."""
    prefix: str
    instrument: Instrument
    multiplier: int
    offset: int
    count: int = CARDS_PER_SERIES

    def account_id(self, sequence: int) -> str:
        return f"{self.prefix}{sequence:04d}"


# Multiplier/offset pairs are fixed by cards already in circulation
SENSORY_SERIES = CardSeries(prefix="GT", instrument=Instrument.SENSORY, multiplier=997, offset=12345)
BEHAVIORAL_SERIES = CardSeries(prefix="DD", instrument=Instrument.BEHAVIORAL, multiplier=883, offset=54321)

CARD_SERIES = (SENSORY_SERIES, BEHAVIORAL_SERIES)


@dataclass(frozen=True)
class CredentialRecord:
    """A single login credential."""
    account_id: str
    secret: str
    instrument: Instrument
    is_admin: bool = False


def build_series(series: CardSeries) -> list[CredentialRecord]:
    """Generate every card of a series in sequence order."""
    return [
        CredentialRecord(
            account_id=series.account_id(i),
            secret=derive_card_secret(i, series.multiplier, series.offset),
            instrument=series.instrument,
        )
        for i in range(1, series.count + 1)
    ]


def build_registry() -> Mapping[str, CredentialRecord]:
    """Build the full credential set.

    Pure and deterministic: no randomness, no I/O.

    Returns:
        Read-only mapping of account id to CredentialRecord
    """
    records: dict[str, CredentialRecord] = {}

    # The admin's instrument is never checked; it only keeps the record shape uniform
    records[ADMIN_ACCOUNT_ID] = CredentialRecord(
        account_id=ADMIN_ACCOUNT_ID,
        secret=ADMIN_SECRET,
        instrument=Instrument.BEHAVIORAL,
        is_admin=True,
    )

    for series in CARD_SERIES:
        for record in build_series(series):
            records[record.account_id] = record

    return MappingProxyType(records)


@lru_cache
def get_registry() -> Mapping[str, CredentialRecord]:
    """Get the process-wide credential registry."""
    return build_registry()


def series_for_instrument(instrument: Instrument) -> CardSeries:
    """Return the card series issued for an instrument."""
    for series in CARD_SERIES:
        if series.instrument == instrument:
            return series
    raise ValueError(f"No card series for instrument: {instrument}")
