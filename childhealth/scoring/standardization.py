"""Sensory raw-sum to T-score conversion.

Norm tables only cover the raw sums observed in the reference sample, so
conversion has to handle three cases besides an exact hit: sums below the
table (better than any tabulated child), sums above it, and gaps inside it.
"""

import logging
from typing import Mapping

from childhealth.catalog import StandardizationTable, get_standardization_table

logger = logging.getLogger(__name__)

# Returned for a dimension without a norm table
NEUTRAL_T_SCORE = 50

# Below the table: keep the tabulated ceiling only if it is already high
HIGH_T_THRESHOLD = 70
HIGH_T_CEILING = 75

# Above the table: keep the tabulated floor only if it is already low
LOW_T_THRESHOLD = 20
LOW_T_FLOOR = 10


def nearest_raw_key(table: Mapping[int, int], raw_sum: int) -> int:
    """Return the tabulated raw sum closest to ``raw_sum``.

    Keys are scanned in ascending order and a later key only wins when it is
    strictly closer, so an exact tie resolves to the smaller key.
    """
    keys = sorted(table)
    closest = keys[0]
    for key in keys[1:]:
        if abs(key - raw_sum) < abs(closest - raw_sum):
            closest = key
    return closest


def standardize(
    dimension: str,
    raw_sum: int,
    table: StandardizationTable | None = None,
) -> int:
    """Convert a dimension's raw sum to its T-score.

    Args:
        dimension: Sensory dimension name
        raw_sum: Sum of item scores for the dimension
        table: Norm tables (defaults to the shipped sensory norms)

    Returns:
        T-score for the raw sum
    """
    if table is None:
        table = get_standardization_table()

    dimension_table = table.dimensions.get(dimension)
    if dimension_table is None:
        logger.warning(
            f"No standardization table for dimension {dimension!r}; "
            f"using neutral T-score {NEUTRAL_T_SCORE}"
        )
        return NEUTRAL_T_SCORE

    if raw_sum in dimension_table:
        return dimension_table[raw_sum]

    min_raw = min(dimension_table)
    max_raw = max(dimension_table)

    if raw_sum <= min_raw:
        top = dimension_table[min_raw]
        return top if top > HIGH_T_THRESHOLD else HIGH_T_CEILING

    if raw_sum >= max_raw:
        bottom = dimension_table[max_raw]
        return bottom if bottom < LOW_T_THRESHOLD else LOW_T_FLOOR

    return dimension_table[nearest_raw_key(dimension_table, raw_sum)]
