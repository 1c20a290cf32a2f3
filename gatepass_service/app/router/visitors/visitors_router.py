from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import Lookup, UserToken
from shared.helpers.notification_helper import notify
from shared.utils.enums import NotificationSeverity
from ...crud.visitors import visitor_crud as crud
from ...schemas.visitors.visitor_schemas import (
    VisitorCreate, VisitorOut, VisitorOverview, VisitorRequest, VisitorsResponse
)

router = APIRouter(
    prefix="/api/visitors",
    tags=["visitors"],
    dependencies=[Depends(validate_current_token)]
)

# -----------------------------------------------------------------


@router.get("/all", response_model=VisitorsResponse)
def get_visitors(
        params: VisitorRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_visitors(db, params)


@router.get("/overview", response_model=VisitorOverview)
def get_visitor_overview(db: Session = Depends(get_db)):
    return crud.get_visitor_overview(db)


@router.get("/status-lookup", response_model=List[Lookup])
def visitor_status_lookup():
    return crud.visitor_status_lookup()


@router.post("/", response_model=VisitorOut)
def register_visitor(
        data: VisitorCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    visitor = crud.register_visitor(db, data, current_user)
    notify(db, current_user.user_id, "Visitor registered",
           f"Visitor {visitor.full_name} registered as {visitor.visitor_id}",
           NotificationSeverity.success)
    return visitor


@router.put("/{visitor_id}/check-in", response_model=VisitorOut)
def check_in_visitor(
        visitor_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    visitor = crud.check_in_visitor(db, visitor_id, current_user)
    notify(db, current_user.user_id, "Visitor checked in",
           f"{visitor.full_name} checked in",
           NotificationSeverity.success)
    return visitor


@router.put("/{visitor_id}/check-out", response_model=VisitorOut)
def check_out_visitor(
        visitor_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    visitor = crud.check_out_visitor(db, visitor_id, current_user)
    notify(db, current_user.user_id, "Visitor checked out",
           f"{visitor.full_name} checked out",
           NotificationSeverity.success)
    return visitor
