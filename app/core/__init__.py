"""Core configuration and error types."""

from app.core.config import Settings, get_settings
from app.core.errors import (
    ApiError,
    EmptyContentError,
    EnhancementError,
    ExportError,
    LegalDocsError,
    RenderingSurfaceError,
)

__all__ = [
    "ApiError",
    "EmptyContentError",
    "EnhancementError",
    "ExportError",
    "LegalDocsError",
    "RenderingSurfaceError",
    "Settings",
    "get_settings",
]
