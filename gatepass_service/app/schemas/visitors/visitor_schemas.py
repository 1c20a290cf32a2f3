from pydantic import BaseModel, EmailStr
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from shared.core.schemas import CommonQueryParams
from ...enum.visitor_enum import VisitorStatus


class VisitorCreate(BaseModel):
    full_name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    purpose_of_visit: Optional[str] = None
    host_employee_id: Optional[UUID] = None
    expected_checkout: Optional[datetime] = None
    face_encoding: Optional[str] = None


class VisitorRequest(CommonQueryParams):
    status: Optional[str] = None   # filter by status if needed


class VisitorOut(BaseModel):
    id: UUID
    visitor_id: str
    full_name: str
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    purpose_of_visit: str
    host_employee_id: Optional[UUID] = None
    status: VisitorStatus
    has_face_id: bool = False
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    expected_checkout: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class VisitorsResponse(BaseModel):
    visitors: List[VisitorOut]
    total: int

    model_config = {"from_attributes": True}


class VisitorOverview(BaseModel):
    totalVisitors: int
    pending: int
    checkedIn: int
    checkedOut: int
    expired: int
