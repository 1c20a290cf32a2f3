from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.schemas import CommonQueryParams
from shared.helpers.db_helper import commit_or_fail
from shared.helpers.json_response_helper import not_found_error
from shared.models.notifications import Notification
from ...schemas.system.notifications_schemas import NotificationListResponse, NotificationOut


def get_all_notifications(db: Session, user_id: str, params: CommonQueryParams) -> NotificationListResponse:
    notification_query = db.query(Notification).filter(
        Notification.user_id == user_id
    )

    if params.search:
        search_term = f"%{params.search}%"
        notification_query = notification_query.filter(
            Notification.title.ilike(search_term))

    total = notification_query.with_entities(
        func.count(Notification.id.distinct())).scalar()
    notifications = (
        notification_query
        .order_by(Notification.posted_date.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    result = [NotificationOut.model_validate(n) for n in notifications]
    return {"notifications": result, "total": total}


def mark_notification_read(db: Session, notification_id: UUID, user_id: str):
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id
    ).first()
    if not notification:
        return not_found_error("Notification not found")

    if not notification.read:
        notification.read = True
        commit_or_fail(db, "Failed to update notification", refresh=notification)
    return NotificationOut.model_validate(notification)


def mark_all_notifications_read(db: Session, user_id: str) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.read == False)
        .update({Notification.read: True}, synchronize_session=False)
    )
    commit_or_fail(db, "Failed to update notifications")
    return updated
