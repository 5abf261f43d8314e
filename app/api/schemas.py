"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization. The wire format
uses camelCase keys; snake_case names are accepted as well.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Re-export template models for API consumers
from app.strategies.template_engine import DocumentTemplate


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


# =============================================================================
# Common Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")


class HealthResponse(BaseModel):
    """Response for the health check endpoint."""

    status: str = "healthy"
    service: str
    version: str


# =============================================================================
# Generated Document Schemas
# =============================================================================


class GeneratedDocumentCreate(CamelModel):
    """Request schema for persisting a generated document."""

    user_id: int | None = None
    template_id: int | None = None
    document_title: str = Field(min_length=1, max_length=512)
    document_content: str = Field(min_length=1)
    document_data: dict[str, Any] | None = None


class GeneratedDocumentRead(CamelModel):
    """Response schema for a persisted document."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, from_attributes=True)

    id: int
    user_id: int | None = None
    template_id: int | None = None
    document_title: str
    document_content: str
    document_data: dict[str, Any] | None = None
    created_at: datetime | None = None


# =============================================================================
# Generation Schemas
# =============================================================================


class GenerateDocumentRequest(CamelModel):
    """Request schema for filling a stored template."""

    template_id: int = Field(description="ID of the stored template")
    form_data: dict[str, Any] = Field(default_factory=dict, description="Field name to value")
    title: str | None = Field(default=None, max_length=512)
    save_document: bool = False
    user_id: int | None = None


class GenerateDocumentResponse(CamelModel):
    """Response schema for a filled template."""

    template_id: int
    title: str
    content: str
    replacements: int = Field(description="Number of placeholder occurrences replaced")
    unresolved: list[str] = Field(default_factory=list, description="Markers left in the document")
    document: GeneratedDocumentRead | None = None


class EnhancedDocumentRequest(CamelModel):
    """Request schema for AI-enhanced generation from an inline template."""

    template: str = Field(min_length=1)
    form_data: dict[str, Any] = Field(default_factory=dict)
    document_type: str = Field(min_length=1)
    jurisdiction: str | None = None
    save_document: bool = False
    title: str | None = None
    user_id: int | None = None


class EnhancedDocumentResponse(CamelModel):
    """Response schema for AI-enhanced generation."""

    content: str


# =============================================================================
# Export Schemas
# =============================================================================


class TextExportRequest(CamelModel):
    """Request schema for a plain-text download."""

    content: str
    filename: str = "document.txt"


class PreviewRequest(CamelModel):
    """Request schema for a preview URL."""

    content: str
    title: str = "Document"


class PreviewResponse(CamelModel):
    """Response schema for a preview URL."""

    url: str
    token: str
    expires_at: datetime


__all__ = [
    "DocumentTemplate",
    "EnhancedDocumentRequest",
    "EnhancedDocumentResponse",
    "ErrorResponse",
    "GenerateDocumentRequest",
    "GenerateDocumentResponse",
    "GeneratedDocumentCreate",
    "GeneratedDocumentRead",
    "HealthResponse",
    "PreviewRequest",
    "PreviewResponse",
    "TextExportRequest",
]
