"""Generated document API routes.

Handles template filling, AI enhancement, persistence and exports.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse
from openai import OpenAIError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select
from starlette.background import BackgroundTask

from app.api.deps import get_db, get_enhancer, get_exporter, get_factory, get_preview_store, get_resolver
from app.api.schemas import (
    EnhancedDocumentRequest,
    EnhancedDocumentResponse,
    GenerateDocumentRequest,
    GenerateDocumentResponse,
    GeneratedDocumentCreate,
    GeneratedDocumentRead,
    PreviewRequest,
    PreviewResponse,
    TextExportRequest,
)
from app.api.templates import load_template
from app.core.errors import EmptyContentError, EnhancementError, ExportError
from app.core.factory import ComponentFactory
from app.db.models import GeneratedDocument
from app.interfaces.exporter import BaseDocumentExporter
from app.interfaces.template import BaseTemplateResolver
from app.strategies.exporters import PreviewStore
from app.strategies.template_engine import validate_field_values

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


async def _persist(
    session: AsyncSession,
    *,
    user_id: int | None,
    template_id: int | None,
    title: str,
    content: str,
    data: dict[str, Any] | None,
) -> GeneratedDocument:
    document = GeneratedDocument(
        user_id=user_id,
        template_id=template_id,
        document_title=title,
        document_content=content,
        document_data=data,
    )
    session.add(document)
    await session.commit()
    await session.refresh(document)
    logger.info(f"Saved generated document {document.id} ({title!r})")
    return document


# =============================================================================
# Persistence Endpoints
# =============================================================================


@router.post("", response_model=GeneratedDocumentRead, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: GeneratedDocumentCreate,
    session: AsyncSession = Depends(get_db),
) -> GeneratedDocument:
    """Persist a generated document.

    Raises:
        HTTPException: If the document cannot be stored.
    """
    try:
        return await _persist(
            session,
            user_id=request.user_id,
            template_id=request.template_id,
            title=request.document_title,
            content=request.document_content,
            data=request.document_data,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error creating document: {e}", exc_info=True)
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating document",
        ) from e


@router.get("", response_model=list[GeneratedDocumentRead])
async def list_documents(
    user_id: int = Query(description="Owner of the documents"),
    session: AsyncSession = Depends(get_db),
) -> list[GeneratedDocument]:
    """List a user's documents, newest first."""
    try:
        result = await session.execute(
            select(GeneratedDocument)
            .where(GeneratedDocument.user_id == user_id)
            .order_by(GeneratedDocument.id.desc())
        )
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"Error retrieving documents for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving documents",
        ) from e


# =============================================================================
# Generation Endpoints
# =============================================================================


@router.post("/generate", response_model=GenerateDocumentResponse)
async def generate_document(
    request: GenerateDocumentRequest,
    session: AsyncSession = Depends(get_db),
    resolver: BaseTemplateResolver = Depends(get_resolver),
) -> GenerateDocumentResponse:
    """Fill a stored template with form data.

    Values are validated against the template's declared fields first.
    Markers whose value is missing or empty stay in the document and are
    listed under ``unresolved``.

    Raises:
        HTTPException: 404 if the template is missing, 422 on invalid values.
    """
    template = await load_template(session, request.template_id)

    errors = validate_field_values(template.fields, request.form_data)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Invalid field values", "errors": errors},
        )

    report = resolver.resolve_with_report(
        template.template_content,
        request.form_data,
        template.id,
        fields=template.fields,
    )
    title = request.title or template.title

    saved = None
    if request.save_document:
        try:
            saved = await _persist(
                session,
                user_id=request.user_id,
                template_id=template.id,
                title=title,
                content=report.content,
                data=request.form_data,
            )
        except SQLAlchemyError as e:
            logger.error(f"Error saving generated document: {e}", exc_info=True)
            await session.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving generated document",
            ) from e

    return GenerateDocumentResponse(
        template_id=template.id,
        title=title,
        content=report.content,
        replacements=report.total_replacements,
        unresolved=report.unresolved,
        document=GeneratedDocumentRead.model_validate(saved) if saved else None,
    )


@router.post("/enhanced", response_model=EnhancedDocumentResponse)
async def generate_enhanced_document(
    request: EnhancedDocumentRequest,
    session: AsyncSession = Depends(get_db),
    resolver: BaseTemplateResolver = Depends(get_resolver),
    factory: ComponentFactory = Depends(get_factory),
) -> EnhancedDocumentResponse:
    """Fill an inline template and have the AI provider enhance it.

    The document is saved only when both ``saveDocument`` and ``title``
    are provided.

    Raises:
        HTTPException: 502 if the AI provider fails, 503 if it is not configured.
    """
    jurisdiction = request.jurisdiction or "Canada"
    content = resolver.resolve(request.template, request.form_data)
    generated_with = "template"

    if factory.settings.use_llm_enhancement:
        enhancer = get_enhancer(factory)
        try:
            content = await enhancer.enhance(
                content,
                document_type=request.document_type,
                jurisdiction=jurisdiction,
            )
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except (OpenAIError, EnhancementError) as e:
            logger.error(f"Enhanced document generation error: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Error generating enhanced document",
            ) from e
        generated_with = enhancer.provider

    if request.save_document and request.title:
        try:
            await _persist(
                session,
                user_id=request.user_id,
                template_id=None,
                title=request.title,
                content=content,
                data={
                    "type": request.document_type,
                    "jurisdiction": jurisdiction,
                    "generatedWith": generated_with,
                    "formData": request.form_data,
                },
            )
        except SQLAlchemyError as e:
            logger.error(f"Error saving enhanced document: {e}", exc_info=True)
            await session.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving enhanced document",
            ) from e

    return EnhancedDocumentResponse(content=content)


# =============================================================================
# Export Endpoints
# =============================================================================


@router.post("/export/text")
async def export_text(
    request: TextExportRequest,
    exporter: BaseDocumentExporter = Depends(get_exporter),
) -> FileResponse:
    """Download the document as a ``.txt`` file with a sanitized name.

    Raises:
        HTTPException: 400 on empty content, 500 if the export fails.
    """
    try:
        path = await exporter.to_plain_text(request.content, request.filename)
    except EmptyContentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ExportError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    return FileResponse(
        path=str(path),
        media_type="text/plain; charset=utf-8",
        filename=path.name,
        background=BackgroundTask(exporter.discard_download, path),
    )


@router.post("/preview", response_model=PreviewResponse)
async def create_preview(
    request: PreviewRequest,
    exporter: BaseDocumentExporter = Depends(get_exporter),
    previews: PreviewStore = Depends(get_preview_store),
) -> PreviewResponse:
    """Render the document for preview and return a short-lived URL.

    Raises:
        HTTPException: 400 on empty content, 500 if rendering fails.
    """
    try:
        url = await exporter.to_preview_url(request.content, request.title)
    except EmptyContentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ExportError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    token = url.rsplit("/", 1)[-1]
    entry = previews.get(token)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Preview expired before it could be returned",
        )
    return PreviewResponse(url=url, token=token, expires_at=entry.expires_at_datetime)


@router.get("/{document_id}", response_model=GeneratedDocumentRead)
async def get_document(
    document_id: int,
    session: AsyncSession = Depends(get_db),
) -> GeneratedDocument:
    """Fetch one generated document.

    Raises:
        HTTPException: 404 if the document does not exist.
    """
    document = await session.get(GeneratedDocument, document_id)
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )
    return document
