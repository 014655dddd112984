"""Protocols for the user-event and notification stores checkout writes to.

Both are best-effort collaborators: checkout logs their failures and moves on.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tk_common.enums import AttendanceStatus
from src.tk_engagement.domain.models import NotificationDraft


class UserEventStoreProtocol(Protocol):
    async def set_attendance(
        self, db: AsyncSession, user_id: str, event_id: str, status: AttendanceStatus
    ) -> None: ...


class NotificationServiceProtocol(Protocol):
    async def create(self, db: AsyncSession, draft: NotificationDraft) -> None: ...
