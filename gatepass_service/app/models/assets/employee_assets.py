import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, TIMESTAMP, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shared.core.database import Base


class EmployeeAsset(Base):
    __tablename__ = "employee_assets"
    # one open assignment per asset
    __table_args__ = (
        Index(
            "uix_employee_assets_active_asset",
            "asset_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    employee_id = Column(UUID(as_uuid=True), ForeignKey(
        "employees.id", ondelete="CASCADE"), nullable=False)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False)
    assigned_by = Column(String(64), nullable=True)
    assigned_date = Column(DateTime(timezone=True), nullable=False)
    returned_date = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    employee = relationship("Employee", back_populates="assignments")
    asset = relationship("Asset", back_populates="assignments")
