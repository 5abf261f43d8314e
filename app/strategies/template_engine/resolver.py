"""Placeholder resolver strategy.

Substitutes user-supplied field values into free-text templates whose
authors were inconsistent about marker syntax. Four ordered passes trade
precision for recall:

1. double-brace (``{{clientName}}``, optionally quoted, case-insensitive)
2. bracket variants of the field name and label (``[CLIENT NAME]``)
3. template-specific overrides (``[RENT AMOUNT]`` for the lease template)
4. catch-all sweep over every name form and wrapper

Replaced spans are frozen: a value inserted by one pass is never rescanned,
so each occurrence is replaced at most once. Fields are applied in the
iteration order of the value map, which makes the first registered field
win when two fields' variants match the same marker.
"""

import logging
import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from app.interfaces.template import BaseTemplateResolver
from app.strategies.template_engine.models import ResolutionReport, TemplateField
from app.strategies.template_engine.overrides import OverrideTable
from app.strategies.template_engine.validation import is_empty_value

logger = logging.getLogger(__name__)

PASS_DOUBLE_BRACE = "double_brace"
PASS_BRACKET = "bracket"
PASS_OVERRIDE = "override"
PASS_CATCH_ALL = "catch_all"

# Marker shapes reported back as unresolved after all passes
_UNRESOLVED_MARKER = re.compile(r"\{\{\s*[^{}\n]+?\s*\}\}|\[[A-Z][A-Z0-9 _'\-]*\]")

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")
_SEPARATORS = re.compile(r"[\s_\-]+")

# Catch-all wrappers, tried in this order
_CATCH_ALL_WRAPPERS: tuple[tuple[str, str], ...] = (
    ("{{", "}}"),
    ("{", "}"),
    ("[", "]"),
    ("<", ">"),
    ('"{{', '}}"'),
)


class _SpanBuffer:
    """Template text split into resolved and unresolved chunks.

    Substitutions only scan unresolved chunks; each replacement becomes a
    resolved chunk of its own.
    """

    def __init__(self, text: str) -> None:
        self._chunks: list[tuple[str, bool]] = [(text, False)]

    def substitute(self, pattern: re.Pattern[str], repl: Callable[[re.Match[str]], str]) -> int:
        count = 0
        chunks: list[tuple[str, bool]] = []

        for text, resolved in self._chunks:
            if resolved:
                chunks.append((text, True))
                continue

            position = 0
            for match in pattern.finditer(text):
                if match.start() == match.end():
                    continue
                if match.start() > position:
                    chunks.append((text[position:match.start()], False))
                chunks.append((repl(match), True))
                position = match.end()
                count += 1

            if position < len(text):
                chunks.append((text[position:], False))

        self._chunks = chunks
        return count

    def unresolved(self) -> Iterator[str]:
        return (text for text, resolved in self._chunks if not resolved)

    def render(self) -> str:
        return "".join(text for text, _ in self._chunks)


def split_camel(name: str) -> str:
    """``clientName`` -> ``client Name``."""
    return _CAMEL_BOUNDARY.sub(r" \1", name).strip()


def capitalize_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def to_snake(name: str) -> str:
    return _SEPARATORS.sub("_", split_camel(name)).lower()


def to_kebab(name: str) -> str:
    return _SEPARATORS.sub("-", split_camel(name)).lower()


def bracket_variants(name: str, label: str | None = None) -> list[str]:
    """Surface forms tried inside ``[...]`` during the bracket pass."""
    variants = [
        name,
        name.upper(),
        capitalize_first(name),
        split_camel(name).upper(),
    ]
    if label:
        variants.extend([label, label.upper()])
    variants.extend([name.lower(), to_snake(name), to_kebab(name)])
    return _unique(variants)


def catch_all_forms(name: str) -> list[str]:
    """Name forms combined with every wrapper during the catch-all pass."""
    spaced = split_camel(name)
    return _unique(
        [
            name,
            name.upper(),
            name.lower(),
            capitalize_first(name),
            spaced,
            spaced.upper(),
        ]
    )


def _unique(items: Sequence[str]) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        if item:
            seen.setdefault(item, None)
    return list(seen)


def _alternation(literals: Sequence[str]) -> str:
    # Longest first so "CLIENT NAME" wins over "CLIENT"
    ordered = sorted(_unique(literals), key=len, reverse=True)
    return "|".join(re.escape(literal) for literal in ordered)


class PlaceholderResolver(BaseTemplateResolver):
    """Multi-pass placeholder substitution for document templates.

    Attributes:
        overrides: Template-specific field to placeholder mappings.
    """

    def __init__(self, overrides: OverrideTable | None = None) -> None:
        """Initialize the resolver.

        Args:
            overrides: Override table. Defaults to the built-in table.
        """
        self.overrides = overrides if overrides is not None else OverrideTable()

    def resolve(
        self,
        template: str,
        values: Mapping[str, Any],
        template_id: int | str | None = None,
        *,
        fields: Sequence[TemplateField] | None = None,
    ) -> str:
        """Substitute field values into a template.

        Args:
            template: Template body containing placeholder markers.
            values: Field name to value. Empty or None values are skipped.
            template_id: Selects override rules, if any exist for it.
            fields: Declared template fields, used for label variants.

        Returns:
            The substituted document. Unmatched markers are left verbatim.

        Raises:
            TypeError: If ``template`` is not a string.
        """
        return self.resolve_with_report(template, values, template_id, fields=fields).content

    def resolve_with_report(
        self,
        template: str,
        values: Mapping[str, Any],
        template_id: int | str | None = None,
        *,
        fields: Sequence[TemplateField] | None = None,
    ) -> ResolutionReport:
        """Like ``resolve`` but also reports what was replaced and what was left."""
        if not isinstance(template, str):
            raise TypeError(f"Template must be a string, got {type(template).__name__}")

        filled = {
            name: str(value)
            for name, value in values.items()
            if not is_empty_value(value)
        }
        labels = {field.name: field.label for field in fields or ()}
        buffer = _SpanBuffer(template)
        report = ResolutionReport(content=template)

        def record(pass_name: str, field_name: str, count: int) -> None:
            if count:
                per_field = report.replacements.setdefault(pass_name, {})
                per_field[field_name] = per_field.get(field_name, 0) + count

        # Pass 1: {{name}}, "{{name}}", '{{name}}'
        for name, value in filled.items():
            pattern = re.compile(
                r"([\"']?)\{\{\s*" + re.escape(name) + r"\s*\}\}\1",
                re.IGNORECASE,
            )
            record(
                PASS_DOUBLE_BRACE,
                name,
                buffer.substitute(pattern, lambda m, v=value: f"{m.group(1)}{v}{m.group(1)}"),
            )

        # Pass 2: [variant]
        for name, value in filled.items():
            variants = bracket_variants(name, labels.get(name))
            pattern = re.compile(r"\[(?:" + _alternation(variants) + r")\]")
            record(PASS_BRACKET, name, buffer.substitute(pattern, lambda m, v=value: v))

        # Pass 3: per-template overrides
        for name, placeholders in self.overrides.lookup(template_id).items():
            value = filled.get(name)
            if value is None or not placeholders:
                continue
            pattern = re.compile(r"\[(?:" + _alternation(placeholders) + r")\]")
            record(PASS_OVERRIDE, name, buffer.substitute(pattern, lambda m, v=value: v))

        # Pass 4: every name form in every wrapper
        for name, value in filled.items():
            forms = _alternation(catch_all_forms(name))
            for opening, closing in _CATCH_ALL_WRAPPERS:
                pattern = re.compile(re.escape(opening) + r"(?:" + forms + r")" + re.escape(closing))
                record(PASS_CATCH_ALL, name, buffer.substitute(pattern, lambda m, v=value: v))

        report.content = buffer.render()
        report.unresolved = _unique(
            [match.group(0) for text in buffer.unresolved() for match in _UNRESOLVED_MARKER.finditer(text)]
        )

        logger.debug(f"Replacements by pass: {report.replacements}")
        logger.info(
            f"Resolved template {template_id if template_id is not None else '<inline>'}: "
            f"{report.total_replacements} replacement(s), {len(report.unresolved)} unresolved marker(s)"
        )

        return report


_default_resolver = PlaceholderResolver()


def resolve(
    template: str,
    values: Mapping[str, Any],
    template_id: int | str | None = None,
    *,
    fields: Sequence[TemplateField] | None = None,
) -> str:
    """Resolve placeholders with the built-in override table."""
    return _default_resolver.resolve(template, values, template_id, fields=fields)
