"""Document template API routes.

Templates are authored out-of-band and served read-only.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api.deps import get_db
from app.db.models import DocumentTemplateRecord
from app.strategies.template_engine import DocumentTemplate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/document-templates", tags=["templates"])


async def load_template(session: AsyncSession, template_id: int) -> DocumentTemplate:
    """Fetch a template by id.

    Raises:
        HTTPException: 404 if no template exists with that id.
    """
    record = await session.get(DocumentTemplateRecord, template_id)
    if record is None:
        logger.info(f"Template with ID {template_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "message": "Template not found",
                "details": f"No template exists with ID: {template_id}",
            },
        )
    return DocumentTemplate.model_validate(record)


@router.get("", response_model=list[DocumentTemplate])
async def list_templates(
    language: str = Query(default="en", description="Template language, 'en' or 'fr'"),
    template_type: str | None = Query(default=None, alias="type", description="Main category"),
    session: AsyncSession = Depends(get_db),
) -> list[DocumentTemplate]:
    """List templates for a language, optionally filtered by category.

    Raises:
        HTTPException: If the query fails.
    """
    try:
        query = select(DocumentTemplateRecord).where(DocumentTemplateRecord.language == language)
        if template_type:
            query = query.where(DocumentTemplateRecord.template_type == template_type)
        query = query.order_by(DocumentTemplateRecord.id)

        result = await session.execute(query)
        templates = [DocumentTemplate.model_validate(record) for record in result.scalars().all()]

        if not templates:
            logger.info(
                f"No templates found for language: {language}"
                + (f", type: {template_type}" if template_type else "")
            )
        return templates

    except SQLAlchemyError as e:
        logger.error(f"Error retrieving document templates: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving document templates",
        ) from e


@router.get("/{template_id}", response_model=DocumentTemplate)
async def get_template(
    template_id: int,
    session: AsyncSession = Depends(get_db),
) -> DocumentTemplate:
    """Fetch one template with its body and declared fields.

    Raises:
        HTTPException: 404 if the template does not exist.
    """
    try:
        logger.info(f"Retrieving template with ID: {template_id}")
        return await load_template(session, template_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving document template {template_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving document template",
        ) from e
