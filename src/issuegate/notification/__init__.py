"""Notification rendering and upsert for the issue gate."""

from issuegate.notification.manager_notification import (
    NotificationManager,
    NotificationResult,
)
from issuegate.notification.renderer_template import (
    DEFAULT_ALLOWED_FIELDS,
    render_template,
)

__all__ = [
    "DEFAULT_ALLOWED_FIELDS",
    "NotificationManager",
    "NotificationResult",
    "render_template",
]
