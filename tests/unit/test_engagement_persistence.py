"""Unit tests for the attendance and notification repositories."""
from unittest.mock import AsyncMock

import pytest

from src.tk_common.enums import AttendanceStatus, NotificationType
from src.tk_engagement.domain.models import NotificationDraft
from src.tk_engagement.infrastructure.persistence import (
    NotificationRepository,
    UserEventRepository,
)


class TestUserEventRepository:
    @pytest.mark.asyncio
    async def test_set_attendance_upserts(self) -> None:
        db = AsyncMock()
        await UserEventRepository().set_attendance(
            db, "user-1", "EVT-1", AttendanceStatus.ATTENDING
        )
        sql, params = db.execute.call_args.args
        assert "ON CONFLICT (user_id, event_id)" in str(sql)
        assert params == {"user_id": "user-1", "event_id": "EVT-1", "status": "attending"}


class TestNotificationRepository:
    @pytest.mark.asyncio
    async def test_create_inserts_draft(self) -> None:
        db = AsyncMock()
        draft = NotificationDraft(
            user_id="user-1",
            title="Ticket Purchase Confirmed",
            message="Your tickets are confirmed",
            type=NotificationType.EVENT,
            event_id="EVT-1",
            action_url="/user/confirmation?reference=ORD-1-abcdefgh",
        )
        await NotificationRepository().create(db, draft)
        params = db.execute.call_args.args[1]
        assert params["type"] == "event"
        assert params["action_url"].endswith("ORD-1-abcdefgh")
