"""Template engine domain models.

Pydantic models specific to document templates and placeholder resolution.
These models are kept here to avoid circular imports with the API and DB layers.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _FieldBase(BaseModel):
    """Attributes shared by every field kind."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str = Field(min_length=1, description="Key used in the field value map")
    label: str = Field(default="", description="Human-readable label shown on the form")
    required: bool = Field(default=False)


class TextField(_FieldBase):
    """Single-line text input."""

    type: Literal["text"] = "text"
    placeholder: str | None = None
    max_length: int | None = Field(default=None, gt=0)


class TextareaField(_FieldBase):
    """Multi-line text input."""

    type: Literal["textarea"] = "textarea"
    placeholder: str | None = None
    rows: int = Field(default=4, gt=0)


class DateField(_FieldBase):
    """Calendar date input, values are ISO ``YYYY-MM-DD`` strings."""

    type: Literal["date"] = "date"
    min_date: date | None = None
    max_date: date | None = None


class NumberField(_FieldBase):
    """Numeric input."""

    type: Literal["number"] = "number"
    minimum: float | None = None
    maximum: float | None = None


TemplateField = Annotated[
    TextField | TextareaField | DateField | NumberField,
    Field(discriminator="type"),
]


class DocumentTemplate(BaseModel):
    """A template as served by ``GET /api/document-templates/{id}``."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        from_attributes=True,
    )

    id: int
    title: str
    description: str = ""
    template_type: str = ""
    subcategory: str | None = None
    language: str = "en"
    jurisdiction: str | None = "Canada"
    template_content: str
    fields: list[TemplateField] = Field(default_factory=list)


@dataclass
class ResolutionReport:
    """Outcome of a single ``resolve`` call.

    Attributes:
        content: The substituted document.
        replacements: Replacement counts keyed by pass name, then field name.
        unresolved: Placeholder-like markers still present in ``content``
            that were not produced by a substitution.
    """

    content: str
    replacements: dict[str, dict[str, int]] = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)

    @property
    def total_replacements(self) -> int:
        return sum(sum(counts.values()) for counts in self.replacements.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "replacements": self.replacements,
            "total_replacements": self.total_replacements,
            "unresolved": self.unresolved,
        }
