from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

from ..employees.employee_schemas import EmployeeOut
from .assets_schemas import AssetOut


class AssetAssignRequest(BaseModel):
    employee_id: UUID
    notes: Optional[str] = None


class AssetAssignmentOut(BaseModel):
    id: UUID
    employee_id: UUID
    asset_id: UUID
    assigned_by: Optional[str] = None
    assigned_date: datetime
    returned_date: Optional[datetime] = None
    is_active: bool
    notes: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class AssetAssignmentWithEmployee(AssetAssignmentOut):
    employee: Optional[EmployeeOut] = None


class AssetAssignmentWithAsset(AssetAssignmentOut):
    asset: Optional[AssetOut] = None
