from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from shared.core.schemas import CommonQueryParams


class EmployeeCreate(BaseModel):
    employee_id: Optional[str] = None   # generated when omitted
    user_id: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
    face_encoding: Optional[str] = None


class EmployeeUpdate(BaseModel):
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
    face_encoding: Optional[str] = None
    is_active: Optional[bool] = None


class EmployeeRequest(CommonQueryParams):
    active_only: bool = False


class EmployeeOut(BaseModel):
    id: UUID
    employee_id: str
    user_id: Optional[str] = None
    department: str
    position: Optional[str] = None
    hire_date: Optional[date] = None
    is_active: bool
    has_face_id: bool = False
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class EmployeesResponse(BaseModel):
    employees: List[EmployeeOut]
    total: int
