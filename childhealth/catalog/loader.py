"""YAML catalog loader with integrity hashing."""

import hashlib
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from childhealth.catalog.models import CatalogError, InstrumentDefinition, StandardizationTable
from childhealth.models.score import Instrument

# Catalog files ship inside the package
CATALOG_DIR = Path(__file__).parent / "data"

SENSORY_NORMS_FILE = "sensory_norms.yaml"


def compute_catalog_hash(content: str) -> str:
    """Compute SHA256 hash of catalog content.

    Reports cite the hash so a result can be traced to the exact
    questionnaire wording and norms it was scored against.

    Args:
        content: Raw YAML content string

    Returns:
        SHA256 hex digest
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def load_catalog_file(
    filename: str,
    catalog_dir: Path | None = None,
) -> tuple[dict[str, Any], str]:
    """Load a catalog YAML file and compute its hash.

    Args:
        filename: Name of the catalog file (e.g., "sensory.yaml")
        catalog_dir: Directory containing catalog files (defaults to package data)

    Returns:
        Tuple of (parsed catalog dict, SHA256 hash)

    Raises:
        CatalogError: If the file doesn't exist or is not valid YAML
    """
    if catalog_dir is None:
        catalog_dir = CATALOG_DIR

    filepath = catalog_dir / filename

    if not filepath.exists():
        raise CatalogError(f"Catalog file not found: {filepath}")

    content = filepath.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid catalog YAML in {filename}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog file {filename} must contain a mapping")

    return data, compute_catalog_hash(content)


def load_instrument(
    instrument: Instrument,
    catalog_dir: Path | None = None,
) -> InstrumentDefinition:
    """Load and validate an instrument definition from its YAML file."""
    data, content_hash = load_catalog_file(f"{instrument.value}.yaml", catalog_dir)
    return InstrumentDefinition.from_dict(data, content_hash=content_hash)


def load_standardization_table(catalog_dir: Path | None = None) -> StandardizationTable:
    """Load the sensory raw-sum to T-score table."""
    data, content_hash = load_catalog_file(SENSORY_NORMS_FILE, catalog_dir)
    return StandardizationTable.from_dict(data, content_hash=content_hash)


@lru_cache
def get_instrument(instrument: Instrument) -> InstrumentDefinition:
    """Get the process-wide instrument definition, loading it on first use."""
    return load_instrument(Instrument(instrument))


@lru_cache
def get_standardization_table() -> StandardizationTable:
    """Get the process-wide sensory standardization table."""
    return load_standardization_table()
