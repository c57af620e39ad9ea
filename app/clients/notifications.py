"""
app/clients/notifications.py

Purpose: User-facing notifications for client components

- Notification value object (title, description, variant)
- NotificationCenter records and logs what the user would see as toasts
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional

from app.core.logging import get_logger
from utils.time_utils import utcnow

logger = get_logger(__name__)

Variant = Literal["default", "destructive"]


@dataclass
class Notification:
    title: str
    description: str
    variant: Variant = "default"
    created_at: datetime = field(default_factory=utcnow)


class NotificationCenter:
    """
    Collects notifications in the order they were raised.
    Rendering them is left to whatever UI hosts the components.
    """

    def __init__(self):
        self.history: List[Notification] = []

    def notify(self, title: str, description: str, variant: Variant = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)

        if variant == "destructive":
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")

        return notification

    @property
    def latest(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
