from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import Lookup, UserToken
from shared.helpers.notification_helper import notify
from shared.utils.enums import NotificationSeverity
from ...crud.gatepass import gatepass_crud as crud
from ...schemas.gatepass.gatepass_schemas import (
    GatepassCreate, GatepassExitRequest, GatepassOut, GatepassOverview,
    GatepassRequest, GatepassesResponse
)

router = APIRouter(
    prefix="/api/gatepasses",
    tags=["gatepasses"],
    dependencies=[Depends(validate_current_token)]
)

# -----------------------------------------------------------------


@router.get("/all", response_model=GatepassesResponse)
def get_gatepasses(
        params: GatepassRequest = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_gatepasses(db, params, current_user)


@router.get("/overview", response_model=GatepassOverview)
def get_gatepass_overview(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_gatepass_overview(db, current_user)


@router.get("/status-lookup", response_model=List[Lookup])
def gatepass_status_lookup():
    return crud.gatepass_status_lookup()


@router.post("/", response_model=GatepassOut)
def create_gatepass(
        data: GatepassCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    gatepass = crud.create_gatepass(db, data, current_user)
    notify(db, current_user.user_id, "Gatepass created",
           f"Gatepass {gatepass.gatepass_id} submitted for approval",
           NotificationSeverity.success)
    return gatepass


@router.post("/exit", response_model=GatepassOut)
def confirm_exit(
        data: GatepassExitRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    gatepass = crud.confirm_exit(db, data.gatepass_id, current_user)
    notify(db, current_user.user_id, "Exit confirmed",
           f"Exit confirmed for {gatepass.requester_name}",
           NotificationSeverity.success)
    return gatepass


@router.put("/{gatepass_id}/approve", response_model=GatepassOut)
def approve_gatepass(
        gatepass_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    gatepass = crud.approve_gatepass(db, gatepass_id, current_user)
    notify(db, current_user.user_id, "Gatepass approved",
           f"Gatepass {gatepass.gatepass_id} approved",
           NotificationSeverity.success)
    return gatepass


@router.put("/{gatepass_id}/reject", response_model=GatepassOut)
def reject_gatepass(
        gatepass_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    gatepass = crud.reject_gatepass(db, gatepass_id, current_user)
    notify(db, current_user.user_id, "Gatepass rejected",
           f"Gatepass {gatepass.gatepass_id} rejected",
           NotificationSeverity.success)
    return gatepass
