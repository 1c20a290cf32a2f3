from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from shared.core.schemas import CommonQueryParams
from shared.utils.enums import UserRole
from ...enum.communication_enum import CommunicationPriority, CommunicationType, RecipientType


class CommunicationCreate(BaseModel):
    recipient_type: RecipientType = RecipientType.individual
    recipient_id: Optional[str] = None
    recipient_department: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    priority: CommunicationPriority = CommunicationPriority.normal
    communication_type: CommunicationType = CommunicationType.message


class CommunicationOut(BaseModel):
    id: UUID
    sender_id: str
    sender_name: Optional[str] = None
    recipient_type: RecipientType
    recipient_id: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_department: Optional[str] = None
    subject: str
    message: str
    priority: CommunicationPriority
    communication_type: CommunicationType
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class CommunicationsResponse(BaseModel):
    communications: List[CommunicationOut]
    total: int


class ProfileOut(BaseModel):
    id: UUID
    user_id: str
    full_name: str
    email: str
    department: str
    role: UserRole

    model_config = {
        "from_attributes": True
    }
