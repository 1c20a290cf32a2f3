from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from shared.core.schemas import CommonQueryParams
from ...enum.gatepass_enum import GatepassStatus


class GatepassCreate(BaseModel):
    reason: Optional[str] = None
    items_carried: Optional[str] = None
    exit_time: Optional[datetime] = None


class GatepassExitRequest(BaseModel):
    gatepass_id: Optional[str] = None


class GatepassRequest(CommonQueryParams):
    status: Optional[str] = None   # "all" or a GatepassStatus value


class GatepassOut(BaseModel):
    id: UUID
    gatepass_id: str
    requester_id: str
    requester_name: str
    department: str
    reason: str
    items_carried: Optional[str] = None
    exit_time: datetime
    status: GatepassStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    exited_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class GatepassesResponse(BaseModel):
    gatepasses: List[GatepassOut]
    total: int

    model_config = {"from_attributes": True}


class GatepassOverview(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    exited: int
