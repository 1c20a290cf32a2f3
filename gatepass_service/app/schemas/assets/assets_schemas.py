from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from shared.core.schemas import CommonQueryParams
from ...enum.asset_enum import AssetStatus, AssetType


class AssetCreate(BaseModel):
    asset_type: AssetType = AssetType.laptop
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    current_location: Optional[str] = None


class AssetStatusUpdate(BaseModel):
    status: AssetStatus


class AssetsRequest(CommonQueryParams):
    status: Optional[str] = None
    asset_type: Optional[str] = None


class AssetOut(BaseModel):
    id: UUID
    asset_id: str
    asset_type: AssetType
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: str
    status: AssetStatus
    current_location: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class AssetsResponse(BaseModel):
    assets: List[AssetOut]
    total: int


class AssetOverview(BaseModel):
    totalAssets: int
    available: int
    assigned: int
    maintenance: int
    retired: int
