"""FastAPI routers and dependencies."""

from app.api.deps import (
    get_db,
    get_exporter,
    get_factory,
    get_preview_store,
    get_resolver,
)
from app.api.documents import router as documents_router
from app.api.previews import router as previews_router
from app.api.templates import router as templates_router

__all__ = [
    "documents_router",
    "get_db",
    "get_exporter",
    "get_factory",
    "get_preview_store",
    "get_resolver",
    "previews_router",
    "templates_router",
]
