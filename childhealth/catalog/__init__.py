"""Static questionnaire catalogs.

Item lists, answer options, behavioral factor groups and sensory norms are
shipped as YAML files and loaded once per process into immutable objects.
"""

import math
from typing import Any

from childhealth.catalog.loader import (
    get_instrument,
    get_standardization_table,
    load_catalog_file,
    load_instrument,
    load_standardization_table,
)
from childhealth.catalog.models import (
    AgeRule,
    AnswerOption,
    CatalogError,
    FactorDefinition,
    InstrumentDefinition,
    Item,
    StandardizationTable,
)
from childhealth.models.score import Instrument


def parse_age(value: Any) -> float | None:
    """Parse a declared age, returning None unless it is a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        age = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(age):
        return None
    return age


def active_items(instrument: Instrument, age_years: Any = None) -> tuple[Item, ...]:
    """Items to administer for a child of the declared age.

    Age rules only apply when the age parses as a number; otherwise every
    item of the instrument is active.
    """
    definition = get_instrument(instrument)
    age = parse_age(age_years)
    if age is None or not definition.age_rules:
        return definition.items

    return tuple(
        item for item in definition.items
        if not any(rule.excludes(item, age) for rule in definition.age_rules)
    )


__all__ = [
    "AgeRule",
    "AnswerOption",
    "CatalogError",
    "FactorDefinition",
    "InstrumentDefinition",
    "Item",
    "StandardizationTable",
    "active_items",
    "get_instrument",
    "get_standardization_table",
    "load_catalog_file",
    "load_instrument",
    "load_standardization_table",
    "parse_age",
]
