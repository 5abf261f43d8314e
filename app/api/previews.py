"""Preview API routes.

Serves and revokes the short-lived HTML previews created by
``POST /api/documents/preview``.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import HTMLResponse

from app.api.deps import get_preview_store
from app.strategies.exporters import PreviewStore
from app.strategies.exporters.preview_store import PREVIEW_PATH

logger = logging.getLogger(__name__)

router = APIRouter(prefix=PREVIEW_PATH, tags=["previews"])


@router.get("/{token}", response_class=HTMLResponse)
async def get_preview(
    token: str,
    previews: PreviewStore = Depends(get_preview_store),
) -> Response:
    """Return a preview page.

    Raises:
        HTTPException: 404 if the preview is unknown, revoked or expired.
    """
    entry = previews.get(token)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Preview not found or expired",
        )
    return Response(content=entry.content, media_type=entry.media_type)


@router.delete("/{token}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_preview(
    token: str,
    previews: PreviewStore = Depends(get_preview_store),
) -> Response:
    """Revoke a preview. Revoking an unknown token is not an error."""
    previews.revoke(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
