#!/usr/bin/env python
"""Score a completed questionnaire from a JSON answer file.

Usage:
    python scripts/score_answers.py sensory answers.json --age 7
    python scripts/score_answers.py behavioral answers.json

The answer file is a JSON object mapping item id to the selected option
score, e.g. {"1": 0, "2": 3}.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from childhealth.core.logging import setup_logging
from childhealth.models.score import Instrument
from childhealth.schemas.score import ScoreResultRead
from childhealth.services.reporting import build_report
from childhealth.services.scoring import ScoringService

logger = logging.getLogger(__name__)


def load_answers(path: Path) -> dict[int, int]:
    """Read an answer file into item id -> score."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Answer file must contain a JSON object")
    return {int(item_id): int(score) for item_id, score in data.items()}


def main():
    """Main entry point for offline scoring."""
    parser = argparse.ArgumentParser(description="Score a completed questionnaire")
    parser.add_argument("instrument", choices=[i.value for i in Instrument])
    parser.add_argument("answers", type=Path, help="JSON file of item id to score")
    parser.add_argument("--age", help="Declared age of the child in years")
    args = parser.parse_args()

    setup_logging()

    try:
        answers = load_answers(args.answers)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read answers from {args.answers}: {e}")
        sys.exit(1)

    result = ScoringService.calculate(Instrument(args.instrument), answers, args.age)

    print(ScoreResultRead.from_result(result).model_dump_json(by_alias=True, indent=2))
    print()
    print(build_report(result).to_text())


if __name__ == "__main__":
    main()
