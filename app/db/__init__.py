"""Database models and session management."""

from app.db.models import (
    DocumentTemplateRecord,
    GeneratedDocument,
)
from app.db.session import (
    AsyncSession,
    close_db,
    create_all_tables,
    get_async_session,
    init_db,
)

__all__ = [
    # Models
    "DocumentTemplateRecord",
    "GeneratedDocument",
    # Session
    "AsyncSession",
    "close_db",
    "create_all_tables",
    "get_async_session",
    "init_db",
]
