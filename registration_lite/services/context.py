"""
Explicit dependencies handed to every orchestration operation.

Operations never read ambient state: whatever session data they need is a
parameter, and whatever collaborators they call live on WidgetContext.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from registration_lite.core.config import Settings, get_settings
from registration_lite.core.errors import ApiError
from registration_lite.core.logging import get_logger
from registration_lite.infrastructure.api_client import ApiClient, ApiFailure
from registration_lite.schemas.events import Dispatch

logger = get_logger(__name__)

AuthErrorHandler = Callable[[ApiError, ApiFailure], Any]
Notifier = Callable[[str, str, str], Any]


def default_auth_error_handler(error: ApiError, response: ApiFailure) -> None:
    """Used when the host does not supply one; the host owns re-authentication."""
    logger.warning(
        "auth_error_unhandled",
        status_code=response.status_code,
        message=error.message,
    )


def log_notifier(title: str, message: str, level: str) -> None:
    """Fallback user notification sink: log it."""
    logger.info("user_notification", title=title, message=message, level=level)


@dataclass
class WidgetContext:
    api: ApiClient
    get_access_token: Callable[[], Awaitable[str]]
    dispatch: Dispatch
    auth_error_handler: AuthErrorHandler = default_auth_error_handler
    notifier: Notifier = log_notifier
    settings: Settings = field(default_factory=get_settings)

    def api_url(self, path: str) -> str:
        """Ordering API path, relative to the client base URL."""
        return f"{self.settings.API_PREFIX}{path}"
