from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import CommonQueryParams, Lookup, UserToken
from shared.helpers.notification_helper import notify
from shared.utils.enums import NotificationSeverity
from ...crud.communications import communication_crud as crud
from ...schemas.communications.communication_schemas import (
    CommunicationCreate, CommunicationOut, CommunicationsResponse, ProfileOut
)

router = APIRouter(
    prefix="/api/communications",
    tags=["communications"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/inbox", response_model=CommunicationsResponse)
def get_inbox(
        params: CommonQueryParams = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_inbox(db, params, current_user)


@router.get("/sent", response_model=CommunicationsResponse)
def get_sent(
        params: CommonQueryParams = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_sent(db, params, current_user)


@router.get("/profile-lookup", response_model=List[ProfileOut])
def profile_lookup(db: Session = Depends(get_db)):
    return crud.profile_lookup(db)


@router.get("/department-lookup", response_model=List[Lookup])
def department_lookup(db: Session = Depends(get_db)):
    return crud.department_lookup(db)


@router.post("/", response_model=CommunicationOut)
def send_communication(
        data: CommunicationCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    communication = crud.send_communication(db, data, current_user)
    notify(db, current_user.user_id, "Message sent",
           "Your message has been sent successfully",
           NotificationSeverity.success)
    return communication


@router.put("/{communication_id}/read", response_model=CommunicationOut)
def mark_communication_read(
        communication_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.mark_communication_read(db, communication_id, current_user)
