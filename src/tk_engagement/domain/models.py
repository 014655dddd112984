"""Domain models for tk_engagement: attendance and in-app notifications."""

from dataclasses import dataclass

from src.tk_common.enums import NotificationType


@dataclass(frozen=True)
class NotificationDraft:
    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.EVENT
    event_id: str | None = None
    action_url: str | None = None
