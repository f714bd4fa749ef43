"""Pydantic schemas for rendering questionnaires."""

from pydantic import BaseModel, Field

from childhealth.catalog import InstrumentDefinition, Item
from childhealth.models.score import Instrument


class AnswerOptionRead(BaseModel):
    """Schema for a selectable answer."""

    label: str
    score: int

    model_config = {"from_attributes": True}


class ItemRead(BaseModel):
    """Schema for a questionnaire item."""

    id: int
    text: str
    dimension: str
    section: str | None = None

    model_config = {"from_attributes": True}


class InstrumentRead(BaseModel):
    """Schema for an instrument as shown to the respondent."""

    instrument: Instrument = Field(..., alias="type")
    version: str
    title: str
    description: str
    items: list[ItemRead] = Field(..., alias="questions")
    options: list[AnswerOptionRead]
    content_hash: str = Field(..., alias="contentHash")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @classmethod
    def from_definition(
        cls,
        definition: InstrumentDefinition,
        items: tuple[Item, ...] | None = None,
    ) -> "InstrumentRead":
        """Build the schema, optionally restricted to the active items."""
        return cls(
            instrument=definition.instrument,
            version=definition.version,
            title=definition.title,
            description=definition.description,
            items=[
                ItemRead.model_validate(item)
                for item in (items if items is not None else definition.items)
            ],
            options=[AnswerOptionRead.model_validate(option) for option in definition.options],
            content_hash=definition.content_hash,
        )
