"""Database models using SQLModel.

Defines the persisted data of the document service:
- DocumentTemplateRecord: Authored templates, read-only through the API
- GeneratedDocument: Documents produced from templates and form data
"""

import datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class DocumentTemplateRecord(SQLModel, table=True):
    """A document template with placeholder markers and declared fields."""

    __tablename__ = "document_templates"

    id: int | None = Field(default=None, primary_key=True)
    template_type: str = Field(max_length=100, index=True)
    subcategory: str | None = Field(default=None, max_length=100)
    title: str = Field(max_length=255)
    description: str = Field(default="")
    language: str = Field(default="en", max_length=8, index=True)
    template_content: str
    fields: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONType, nullable=False),
    )
    jurisdiction: str | None = Field(default="Canada", max_length=100)


class GeneratedDocument(SQLModel, table=True):
    """A document generated from a template and a field value map."""

    __tablename__ = "generated_documents"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int | None = Field(default=None, index=True)
    template_id: int | None = Field(default=None, foreign_key="document_templates.id")
    document_title: str = Field(max_length=512)
    document_content: str
    document_data: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONType, nullable=True),
    )
    created_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )
