"""Per-kind validation of submitted field values."""

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, assert_never

from app.strategies.template_engine.models import (
    DateField,
    NumberField,
    TemplateField,
    TextareaField,
    TextField,
)

logger = logging.getLogger(__name__)


def is_empty_value(value: Any) -> bool:
    """Return True for values that must never be substituted."""
    return value is None or str(value) == ""


def _check_date(field: DateField, raw: str) -> str | None:
    try:
        parsed = date.fromisoformat(raw)
    except ValueError:
        return "must be a date in YYYY-MM-DD format"
    if field.min_date and parsed < field.min_date:
        return f"must be on or after {field.min_date.isoformat()}"
    if field.max_date and parsed > field.max_date:
        return f"must be on or before {field.max_date.isoformat()}"
    return None


def _check_number(field: NumberField, raw: str) -> str | None:
    try:
        number = float(raw.replace(",", ""))
    except ValueError:
        return "must be a number"
    if field.minimum is not None and number < field.minimum:
        return f"must be at least {field.minimum:g}"
    if field.maximum is not None and number > field.maximum:
        return f"must be at most {field.maximum:g}"
    return None


def validate_field_value(field: TemplateField, value: Any) -> str | None:
    """Validate one value against its declared field.

    Args:
        field: The declared template field.
        value: The submitted value (may be None).

    Returns:
        An error message, or None if the value is acceptable.
    """
    if is_empty_value(value):
        return "is required" if field.required else None

    raw = str(value)

    match field:
        case TextField():
            if field.max_length is not None and len(raw) > field.max_length:
                return f"must be at most {field.max_length} characters"
            return None
        case TextareaField():
            return None
        case DateField():
            return _check_date(field, raw)
        case NumberField():
            return _check_number(field, raw)
        case _:
            assert_never(field)


def validate_field_values(
    fields: Sequence[TemplateField],
    values: Mapping[str, Any],
) -> dict[str, str]:
    """Validate a field value map against a template's declared fields.

    Keys in ``values`` that the template does not declare are ignored.

    Args:
        fields: Declared template fields.
        values: Submitted field values.

    Returns:
        Mapping of field name to a message such as ``"Rent amount must be a number"``.
        Empty when every value is valid.
    """
    errors: dict[str, str] = {}
    for field in fields:
        problem = validate_field_value(field, values.get(field.name))
        if problem:
            errors[field.name] = f"{field.label or field.name} {problem}"

    if errors:
        logger.info(f"Field validation failed for {len(errors)} field(s): {sorted(errors)}")

    return errors
