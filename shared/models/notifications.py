from datetime import datetime, timezone
import uuid
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import Boolean, Column, String, DateTime, Enum
from shared.core.database import Base
from shared.utils.enums import NotificationSeverity


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), index=True, nullable=False)

    title = Column(String(255), nullable=False)
    message = Column(String(500), nullable=False)
    severity = Column(Enum(NotificationSeverity, name="notification_severity"),
                      nullable=False, default=NotificationSeverity.info)
    posted_date = Column(DateTime(timezone=True),
                         default=lambda: datetime.now(timezone.utc))
    read = Column(Boolean, default=False, nullable=False)
