from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import Lookup, UserToken
from shared.helpers.json_response_helper import not_found_error
from shared.helpers.notification_helper import notify
from shared.utils.enums import NotificationSeverity
from ...crud.assets import asset_assignment_crud, assets_crud as crud
from ...schemas.assets.asset_assignment_schemas import (
    AssetAssignRequest, AssetAssignmentOut, AssetAssignmentWithEmployee
)
from ...schemas.assets.assets_schemas import (
    AssetCreate, AssetOut, AssetOverview, AssetStatusUpdate, AssetsRequest, AssetsResponse
)

router = APIRouter(
    prefix="/api/assets",
    tags=["assets"],
    dependencies=[Depends(validate_current_token)]
)

# -----------------------------------------------------------------


@router.get("/all", response_model=AssetsResponse)
def get_assets(
        params: AssetsRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_assets(db, params)


@router.get("/overview", response_model=AssetOverview)
def get_asset_overview(db: Session = Depends(get_db)):
    return crud.get_asset_overview(db)


@router.get("/available", response_model=List[AssetOut])
def get_available_assets(db: Session = Depends(get_db)):
    return crud.get_available_assets(db)


@router.get("/type-lookup", response_model=List[Lookup])
def asset_type_lookup():
    return crud.asset_type_lookup()


@router.get("/status-lookup", response_model=List[Lookup])
def asset_status_lookup():
    return crud.asset_status_lookup()


@router.post("/", response_model=AssetOut)
def create_asset(
        data: AssetCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    asset = crud.create_asset(db, data, current_user)
    notify(db, current_user.user_id, "Asset added",
           f"Asset {asset.asset_id} added to inventory",
           NotificationSeverity.success)
    return asset


@router.put("/assignments/{assignment_id}/return", response_model=AssetAssignmentOut)
def return_asset(
        assignment_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    assignment = asset_assignment_crud.return_asset(db, assignment_id, current_user)
    notify(db, current_user.user_id, "Asset returned",
           "Asset returned to inventory",
           NotificationSeverity.success)
    return assignment


@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: UUID, db: Session = Depends(get_db)):
    asset = crud.get_asset_by_id(db, asset_id)
    if not asset:
        return not_found_error("Asset not found")
    return asset


@router.put("/{asset_id}/status", response_model=AssetOut)
def update_asset_status(
        asset_id: UUID,
        data: AssetStatusUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    asset = crud.update_asset_status(db, asset_id, data.status, current_user)
    notify(db, current_user.user_id, "Asset updated",
           f"Asset {asset.asset_id} marked {asset.status.value}",
           NotificationSeverity.success)
    return asset


@router.get("/{asset_id}/assignments", response_model=List[AssetAssignmentWithEmployee])
def get_asset_assignments(asset_id: UUID, db: Session = Depends(get_db)):
    return asset_assignment_crud.get_asset_assignments(db, asset_id)


@router.post("/{asset_id}/assign", response_model=AssetAssignmentOut)
def assign_asset(
        asset_id: UUID,
        data: AssetAssignRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    assignment = asset_assignment_crud.assign_asset(
        db, asset_id, data.employee_id, data.notes, current_user)
    notify(db, current_user.user_id, "Asset assigned",
           "Asset assigned successfully",
           NotificationSeverity.success)
    return assignment
