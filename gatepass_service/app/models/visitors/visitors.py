import uuid
from sqlalchemy import Column, String, Text, DateTime, Enum, ForeignKey, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shared.core.database import Base
from ...enum.visitor_enum import VisitorStatus


class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    visitor_id = Column(String(32), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False)
    company = Column(String(200), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(200), nullable=True)
    purpose_of_visit = Column(String(256), nullable=False)
    host_employee_id = Column(UUID(as_uuid=True), ForeignKey(
        "employees.id", ondelete="SET NULL"), nullable=True)
    status = Column(
        Enum(VisitorStatus, name="visitor_status"),
        nullable=False,
        default=VisitorStatus.pending
    )
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    check_out_time = Column(DateTime(timezone=True), nullable=True)
    expected_checkout = Column(DateTime(timezone=True), nullable=True)
    # opaque biometric reference, never interpreted here
    face_encoding = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    host_employee = relationship("Employee", back_populates="hosted_visitors")

    @property
    def has_face_id(self) -> bool:
        return bool(self.face_encoding)
