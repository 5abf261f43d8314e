"""Concrete strategy implementations."""

from app.strategies.enhancers import (
    OpenAIDocumentEnhancer,
)
from app.strategies.exporters import (
    DocumentExporter,
    PreviewStore,
)
from app.strategies.template_engine import (
    OverrideTable,
    PlaceholderResolver,
)

__all__ = [
    "DocumentExporter",
    "OpenAIDocumentEnhancer",
    "OverrideTable",
    "PlaceholderResolver",
    "PreviewStore",
]
