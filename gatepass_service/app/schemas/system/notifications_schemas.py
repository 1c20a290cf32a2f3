from datetime import datetime
from typing import List
from pydantic import BaseModel
from uuid import UUID

from shared.utils.enums import NotificationSeverity


class NotificationOut(BaseModel):
    id: UUID
    user_id: str
    title: str
    message: str
    severity: NotificationSeverity
    read: bool
    posted_date: datetime

    model_config = {
        "from_attributes": True
    }


class NotificationListResponse(BaseModel):
    notifications: List[NotificationOut]
    total: int
