"""Template engine strategies.

Implements placeholder resolution, template-specific overrides and
field validation for document templates.
"""

from app.strategies.template_engine.models import (
    DateField,
    DocumentTemplate,
    NumberField,
    ResolutionReport,
    TemplateField,
    TextareaField,
    TextField,
)
from app.strategies.template_engine.overrides import DEFAULT_OVERRIDES, OverrideTable
from app.strategies.template_engine.resolver import PlaceholderResolver, resolve
from app.strategies.template_engine.validation import validate_field_values

__all__ = [
    "DEFAULT_OVERRIDES",
    "DateField",
    "DocumentTemplate",
    "NumberField",
    "OverrideTable",
    "PlaceholderResolver",
    "ResolutionReport",
    "TemplateField",
    "TextareaField",
    "TextField",
    "resolve",
    "validate_field_values",
]
