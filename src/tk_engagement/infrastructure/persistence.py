"""Raw SQL implementations of the attendance and notification stores."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tk_common.enums import AttendanceStatus
from src.tk_engagement.domain.models import NotificationDraft

_UPSERT_ATTENDANCE_SQL = text("""
    INSERT INTO user_events (user_id, event_id, status)
    VALUES (:user_id, :event_id, :status)
    ON CONFLICT (user_id, event_id)
    DO UPDATE SET status = EXCLUDED.status, updated_at = NOW()
""")

_INSERT_NOTIFICATION_SQL = text("""
    INSERT INTO notifications (user_id, title, message, type, event_id, action_url)
    VALUES (:user_id, :title, :message, :type, :event_id, :action_url)
""")


class UserEventRepository:
    async def set_attendance(
        self, db: AsyncSession, user_id: str, event_id: str, status: AttendanceStatus
    ) -> None:
        await db.execute(
            _UPSERT_ATTENDANCE_SQL,
            {"user_id": user_id, "event_id": event_id, "status": status.value},
        )


class NotificationRepository:
    async def create(self, db: AsyncSession, draft: NotificationDraft) -> None:
        await db.execute(
            _INSERT_NOTIFICATION_SQL,
            {
                "user_id": draft.user_id,
                "title": draft.title,
                "message": draft.message,
                "type": draft.type.value,
                "event_id": draft.event_id,
                "action_url": draft.action_url,
            },
        )
