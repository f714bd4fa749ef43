"""Instrument catalog data models."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from childhealth.models.score import Instrument


class CatalogError(Exception):
    """Raised when a catalog file is missing or internally inconsistent."""

    pass


@dataclass(frozen=True)
class AnswerOption:
    """A selectable answer and the score it contributes."""
    label: str
    score: int


@dataclass(frozen=True)
class Item:
    """A single questionnaire item."""
    id: int
    text: str
    dimension: str
    section: Optional[str] = None  # Display grouping only, never scored


@dataclass(frozen=True)
class FactorDefinition:
    """A named group of behavioral items aggregated by mean score."""
    name: str
    item_ids: tuple[int, ...]


@dataclass(frozen=True)
class AgeRule:
    """Excludes items from the active list for children below an age."""
    below_age: float
    exclude_from_item: int

    def excludes(self, item: Item, age_years: float) -> bool:
        return age_years < self.below_age and item.id >= self.exclude_from_item


@dataclass(frozen=True)
class InstrumentDefinition:
    """Immutable definition of one questionnaire."""
    instrument: Instrument
    version: str
    title: str
    description: str
    items: tuple[Item, ...]
    options: tuple[AnswerOption, ...]
    factors: tuple[FactorDefinition, ...] = ()
    age_rules: tuple[AgeRule, ...] = ()
    content_hash: str = field(default="", repr=False)

    @property
    def item_ids(self) -> frozenset[int]:
        return frozenset(item.id for item in self.items)

    @property
    def dimensions(self) -> tuple[str, ...]:
        """Distinct item dimensions in catalog order."""
        return tuple(dict.fromkeys(item.dimension for item in self.items))

    @property
    def option_scores(self) -> frozenset[int]:
        return frozenset(option.score for option in self.options)

    def get_item(self, item_id: int) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def get_factor(self, name: str) -> FactorDefinition | None:
        for factor in self.factors:
            if factor.name == name:
                return factor
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any], content_hash: str = "") -> "InstrumentDefinition":
        """Create a definition from its parsed YAML representation.

        Items may be listed flat under ``items`` or grouped under
        ``sections``, where each section supplies the title and dimension of
        its items.

        Raises:
            CatalogError: If item ids are not unique positive integers or a
                factor references an unknown item
        """
        try:
            instrument = Instrument(data["id"])
        except (KeyError, ValueError) as e:
            raise CatalogError(f"Unknown instrument id in catalog: {data.get('id')!r}") from e

        items: list[Item] = []
        for item_data in data.get("items", []):
            items.append(Item(
                id=item_data["id"],
                text=item_data["text"],
                dimension=item_data["dimension"],
                section=item_data.get("section"),
            ))
        for section_data in data.get("sections", []):
            for item_data in section_data.get("items", []):
                items.append(Item(
                    id=item_data["id"],
                    text=item_data["text"],
                    dimension=item_data.get("dimension", section_data["dimension"]),
                    section=section_data["title"],
                ))

        seen: set[int] = set()
        for item in items:
            if not isinstance(item.id, int) or item.id <= 0:
                raise CatalogError(f"{instrument.value}: item id must be a positive integer, got {item.id!r}")
            if item.id in seen:
                raise CatalogError(f"{instrument.value}: duplicate item id {item.id}")
            seen.add(item.id)

        factors = tuple(
            FactorDefinition(name=name, item_ids=tuple(ids))
            for name, ids in data.get("factors", {}).items()
        )
        for factor in factors:
            unknown = [i for i in factor.item_ids if i not in seen]
            if unknown:
                raise CatalogError(
                    f"{instrument.value}: factor {factor.name} references unknown items {unknown}"
                )

        return cls(
            instrument=instrument,
            version=str(data.get("version", "unknown")),
            title=data["title"],
            description=data.get("description", ""),
            items=tuple(sorted(items, key=lambda i: i.id)),
            options=tuple(
                AnswerOption(label=o["label"], score=o["score"])
                for o in data["options"]
            ),
            factors=factors,
            age_rules=tuple(
                AgeRule(below_age=float(r["below_age"]), exclude_from_item=r["exclude_from_item"])
                for r in data.get("age_rules", [])
            ),
            content_hash=content_hash,
        )


@dataclass(frozen=True)
class StandardizationTable:
    """Sparse raw-sum to T-score tables, one per dimension."""
    version: str
    dimensions: Mapping[str, Mapping[int, int]]
    content_hash: str = field(default="", repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], content_hash: str = "") -> "StandardizationTable":
        dimensions = {}
        for name, table in data.get("dimensions", {}).items():
            if not table:
                raise CatalogError(f"Standardization table for {name} is empty")
            dimensions[name] = MappingProxyType(
                {int(raw): int(t_score) for raw, t_score in sorted(table.items())}
            )
        return cls(
            version=str(data.get("version", "unknown")),
            dimensions=MappingProxyType(dimensions),
            content_hash=content_hash,
        )
