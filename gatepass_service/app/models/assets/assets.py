import uuid
from sqlalchemy import Column, Date, Enum, String, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shared.core.database import Base
from ...enum.asset_enum import AssetStatus, AssetType


class Asset(Base):
    __tablename__ = "assets"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(String(32), unique=True, index=True, nullable=False)
    asset_type = Column(Enum(AssetType, name="asset_type"), nullable=False)
    brand = Column(String(128), nullable=True)
    model = Column(String(128), nullable=True)
    serial_number = Column(String(128), unique=True, nullable=False)
    status = Column(
        Enum(AssetStatus, name="asset_status"),
        nullable=False,
        default=AssetStatus.available
    )
    current_location = Column(String(200), nullable=True)
    purchase_date = Column(Date, nullable=True)
    warranty_expiry = Column(Date, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    assignments = relationship(
        "EmployeeAsset", back_populates="asset", order_by="EmployeeAsset.assigned_date.desc()")
