"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- Database sessions
- Components built by the application's ComponentFactory
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.factory import ComponentFactory
from app.db.session import get_async_session
from app.interfaces.enhancer import BaseDocumentEnhancer
from app.interfaces.exporter import BaseDocumentExporter
from app.interfaces.template import BaseTemplateResolver
from app.strategies.exporters import PreviewStore

logger = logging.getLogger(__name__)


def get_factory(request: Request) -> ComponentFactory:
    """Return the factory created with the application."""
    return request.app.state.factory


def get_app_settings(factory: ComponentFactory = Depends(get_factory)) -> Settings:
    return factory.settings


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions.

    Args:
        settings: Application settings.

    Yields:
        An async database session.
    """
    try:
        async for session in get_async_session(settings):
            yield session
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting database session: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database connection error",
        ) from e


def get_resolver(factory: ComponentFactory = Depends(get_factory)) -> BaseTemplateResolver:
    return factory.get_resolver()


def get_exporter(factory: ComponentFactory = Depends(get_factory)) -> BaseDocumentExporter:
    return factory.get_exporter()


def get_preview_store(factory: ComponentFactory = Depends(get_factory)) -> PreviewStore:
    return factory.get_preview_store()


def get_enhancer(factory: ComponentFactory = Depends(get_factory)) -> BaseDocumentEnhancer:
    """Dependency for the AI enhancer.

    Raises:
        HTTPException: 503 if enhancement is not configured.
    """
    try:
        return factory.get_enhancer()
    except ValueError as e:
        logger.warning(f"Document enhancer unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI document enhancement is not configured",
        ) from e
