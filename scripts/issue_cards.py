#!/usr/bin/env python
"""Print the credential cards for printing and distribution.

Usage:
    python scripts/issue_cards.py               # every card
    python scripts/issue_cards.py sensory       # GT cards only
    python scripts/issue_cards.py behavioral --output cards.csv

The registry is deterministic, so reissuing prints the same cards.
"""

import argparse
import logging
import csv
import sys
from pathlib import Path

from childhealth.core.logging import setup_logging
from childhealth.models.score import Instrument
from childhealth.services.registry import CARD_SERIES, build_series

logger = logging.getLogger(__name__)

FIELDNAMES = ["account_id", "secret", "instrument"]


def write_cards(instrument: Instrument | None, stream) -> int:
    """Write the cards of one instrument, or all, as CSV rows."""
    writer = csv.DictWriter(stream, fieldnames=FIELDNAMES)
    writer.writeheader()

    count = 0
    for series in CARD_SERIES:
        if instrument is not None and series.instrument != instrument:
            continue
        for record in build_series(series):
            writer.writerow({
                "account_id": record.account_id,
                "secret": record.secret,
                "instrument": record.instrument.value,
            })
            count += 1
    return count


def main():
    """Main entry point for card issuing."""
    parser = argparse.ArgumentParser(description="Issue assessment credential cards")
    parser.add_argument(
        "instrument",
        nargs="?",
        choices=[i.value for i in Instrument],
        help="Only issue cards for this instrument",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write CSV to this file instead of stdout",
    )
    args = parser.parse_args()

    setup_logging()
    instrument = Instrument(args.instrument) if args.instrument else None

    if args.output:
        with args.output.open("w", newline="", encoding="utf-8") as f:
            count = write_cards(instrument, f)
        logger.info(f"Wrote {count} cards to {args.output}")
    else:
        write_cards(instrument, sys.stdout)


if __name__ == "__main__":
    main()
