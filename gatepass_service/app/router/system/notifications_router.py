from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import CommonQueryParams, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.system import notifications_crud as crud
from ...schemas.system.notifications_schemas import NotificationListResponse, NotificationOut


router = APIRouter(prefix="/api/notifications",
                   tags=["notifications"], dependencies=[Depends(validate_current_token)])


@router.get("/all", response_model=NotificationListResponse)
def get_all_notifications(
    params: CommonQueryParams = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_all_notifications(db, current_user.user_id, params)


@router.put("/read-all", response_model=None)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    updated = crud.mark_all_notifications_read(db, current_user.user_id)
    return success_response(
        data={"updated": updated},
        message="Notifications marked as read",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_notification_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.mark_notification_read(db, notification_id, current_user.user_id)
