"""
Reapplication Notifications

The timer only depends on the Notifier protocol, so expiry can be
observed without a real notification backend.
"""

import logging
from enum import Enum
from typing import List, Protocol, Tuple

logger = logging.getLogger(__name__)

REAPPLY_TITLE = "SPFMatch Reminder"
REAPPLY_BODY = "Time to reapply your sunscreen!"


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None:
        ...


class NotificationPermission(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    DEFAULT = "default"


class LoggingNotifier:
    """Writes notifications to the log."""

    def notify(self, title: str, body: str) -> None:
        logger.info(f"NOTIFY: {title} - {body}")


class RecordingNotifier:
    """Keeps every notification in memory."""

    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.sent.append((title, body))


class PermissionGatedNotifier:
    """Forwards to `inner` only while permission is granted; otherwise a no-op."""

    def __init__(self, inner: Notifier, permission: NotificationPermission = NotificationPermission.DEFAULT):
        self.inner = inner
        self.permission = permission

    def notify(self, title: str, body: str) -> None:
        if self.permission != NotificationPermission.GRANTED:
            logger.debug(f"Notification suppressed (permission={self.permission.value})")
            return
        self.inner.notify(title, body)
