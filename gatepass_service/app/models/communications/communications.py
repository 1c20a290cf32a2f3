import uuid
from sqlalchemy import Boolean, Column, DateTime, Enum, String, Text, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from shared.core.database import Base
from ...enum.communication_enum import CommunicationPriority, CommunicationType, RecipientType


class Communication(Base):
    __tablename__ = "communications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sender_id = Column(String(64), index=True, nullable=False)
    recipient_type = Column(Enum(RecipientType, name="recipient_type"),
                            nullable=False, default=RecipientType.individual)
    # set only for individual messages
    recipient_id = Column(String(64), index=True, nullable=True)
    # set only for department messages
    recipient_department = Column(String(100), nullable=True)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    priority = Column(Enum(CommunicationPriority, name="communication_priority"),
                      nullable=False, default=CommunicationPriority.normal)
    communication_type = Column(Enum(CommunicationType, name="communication_type"),
                                nullable=False, default=CommunicationType.message)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)
