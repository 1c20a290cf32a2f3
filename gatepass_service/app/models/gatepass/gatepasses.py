import uuid
from sqlalchemy import Column, String, Text, DateTime, Enum, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from shared.core.database import Base
from ...enum.gatepass_enum import GatepassStatus


class Gatepass(Base):
    __tablename__ = "gatepasses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    gatepass_id = Column(String(32), unique=True, index=True, nullable=False)
    requester_id = Column(String(64), index=True, nullable=False)
    requester_name = Column(String(200), nullable=False)
    department = Column(String(100), nullable=False)
    reason = Column(Text, nullable=False)
    items_carried = Column(Text, nullable=True)
    exit_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(
        Enum(GatepassStatus, name="gatepass_status"),
        nullable=False,
        default=GatepassStatus.pending
    )
    approved_by = Column(String(64), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    exited_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)
