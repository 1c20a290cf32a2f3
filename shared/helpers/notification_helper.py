import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.models.notifications import Notification
from shared.utils.enums import NotificationSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    NotificationSeverity.info: logging.INFO,
    NotificationSeverity.success: logging.INFO,
    NotificationSeverity.warning: logging.WARNING,
    NotificationSeverity.error: logging.ERROR,
}


def notify(
    db: Session,
    user_id: str,
    title: str,
    description: str,
    severity: NotificationSeverity = NotificationSeverity.info,
) -> None:
    """Fire-and-forget user notification.

    Stores the message in the caller's notification list and logs it. A failure
    here is logged and never reaches the operation that triggered it.
    """
    logger.log(_LOG_LEVELS[severity], "[%s] %s: %s",
               user_id, title, description)
    try:
        db.add(Notification(
            user_id=str(user_id),
            title=title,
            message=description,
            severity=severity,
        ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to store notification for %s", user_id)
