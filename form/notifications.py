"""
User-facing notifications and the submission loading state.

Every failure the user sees goes through NotificationCenter with a severity
tag. A new message replaces the current one of the same severity, and each
message expires after a fixed interval.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
import itertools
import logging

import httpx

from models.enums import Severity
from .errors import FormError, MediaUploadError, WebhookError

logger = logging.getLogger(__name__)

AUTO_DISMISS_AFTER = timedelta(seconds=5)
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

SEVERITY_ICONS = {
    Severity.SUCCESS: "✅",
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.INFO: "ℹ️",
}

_ids = itertools.count(1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Notification:
    message: str
    severity: Severity
    created_at: datetime
    expires_at: datetime
    id: int = field(default_factory=lambda: next(_ids))

    @property
    def icon(self) -> str:
        return SEVERITY_ICONS[self.severity]


class NotificationCenter:
    """Holds the live notifications, at most one per severity."""

    def __init__(
        self,
        ttl: timedelta = AUTO_DISMISS_AFTER,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._ttl = ttl
        self._clock = clock
        self._items: List[Notification] = []

    def notify(self, message: str, severity: Severity = Severity.INFO) -> Notification:
        severity = Severity(severity)
        now = self._clock()
        self._items = [n for n in self._items if n.severity != severity]
        note = Notification(
            message=message,
            severity=severity,
            created_at=now,
            expires_at=now + self._ttl,
        )
        self._items.append(note)
        log = logger.warning if severity in (Severity.ERROR, Severity.WARNING) else logger.info
        log("[%s] %s", severity.value, message)
        return note

    def error(self, message: str) -> Notification:
        return self.notify(message, Severity.ERROR)

    def warning(self, message: str) -> Notification:
        return self.notify(message, Severity.WARNING)

    def info(self, message: str) -> Notification:
        return self.notify(message, Severity.INFO)

    def success(self, message: str) -> Notification:
        return self.notify(message, Severity.SUCCESS)

    def dismiss(self, notification_id: int) -> None:
        self._items = [n for n in self._items if n.id != notification_id]

    def active(self) -> List[Notification]:
        """Live notifications; expired ones are dropped."""
        now = self._clock()
        self._items = [n for n in self._items if n.expires_at > now]
        return list(self._items)

    def clear(self) -> None:
        self._items = []


@dataclass
class LoadingState:
    """Progress overlay shown while a submission runs."""
    message: str = "Processing..."
    progress: int = 0
    visible: bool = False

    def show(self, message: str = "Processing...") -> None:
        self.message = message
        self.progress = 0
        self.visible = True

    def update(self, message: Optional[str] = None, progress: Optional[int] = None) -> None:
        if message is not None:
            self.message = message
        if progress is not None:
            self.progress = max(0, min(int(progress), 100))

    def hide(self) -> None:
        self.visible = False


def describe_error(error: BaseException) -> str:
    """
    Text shown for an error caught by the global handler.

    Form errors already carry user-facing text; everything else is mapped
    to a short generic message by kind.
    """
    if isinstance(error, MediaUploadError):
        return "Image upload failed. Please try uploading a different image."
    if isinstance(error, WebhookError):
        return "Submission failed. Please try again or contact support."
    if isinstance(error, FormError):
        return error.message
    if isinstance(error, (httpx.TransportError, ConnectionError)):
        return "Network error. Please check your connection and try again."
    return GENERIC_ERROR_MESSAGE
