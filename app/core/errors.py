"""Exception hierarchy shared by the library and the API layer."""

from typing import Any


class LegalDocsError(Exception):
    """Base class for all application errors."""


class ExportError(LegalDocsError):
    """A document could not be printed, downloaded or previewed."""


class EmptyContentError(ExportError, ValueError):
    """Raised before any side effect when the document content is blank."""


class RenderingSurfaceError(ExportError):
    """The off-screen rendering surface could not be created or used."""


class EnhancementError(LegalDocsError):
    """The AI provider failed to return an enhanced document."""


class ApiError(LegalDocsError):
    """An HTTP request to the document API failed.

    ``status`` is 0 for network-level failures where no response was
    received. ``request_id`` identifies the originating request as
    ``"METHOD url"``.

    Attributes:
        status: HTTP status code, or 0 for transport errors.
        message: Human-readable error message.
        data: Decoded error body, if any.
        method: HTTP method of the originating request.
        url: URL of the originating request.
    """

    def __init__(
        self,
        status: int,
        message: str,
        data: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.data = data
        self.method = method
        self.url = url

    @property
    def request_id(self) -> str | None:
        if self.method is None or self.url is None:
            return None
        return f"{self.method.upper()} {self.url}"

    @property
    def is_network_error(self) -> bool:
        return self.status == 0

    @property
    def is_server_error(self) -> bool:
        return self.status >= 500

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)

    @property
    def is_transient(self) -> bool:
        """Whether a retry could plausibly succeed."""
        return self.is_network_error or self.is_server_error

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.request_id} failed ({self.status}): {self.message}"
        return f"{self.status}: {self.message}"
