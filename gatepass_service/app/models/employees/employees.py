import uuid
from sqlalchemy import Boolean, Column, Date, String, Text, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shared.core.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    employee_id = Column(String(32), unique=True, index=True, nullable=False)
    user_id = Column(String(64), nullable=True)
    department = Column(String(100), nullable=False)
    position = Column(String(100), nullable=True)
    hire_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    face_encoding = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    assignments = relationship("EmployeeAsset", back_populates="employee")
    hosted_visitors = relationship("Visitor", back_populates="host_employee")

    @property
    def has_face_id(self) -> bool:
        return bool(self.face_encoding)
