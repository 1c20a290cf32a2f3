import uuid
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import TIMESTAMP, Column, Enum, String, func
from shared.core.database import Base
from shared.utils.enums import UserRole


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # identity issued by the external auth provider
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False)
    department = Column(String(100), nullable=False)
    role = Column(Enum(UserRole, name="app_role"),
                  nullable=False, default=UserRole.staff)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())
