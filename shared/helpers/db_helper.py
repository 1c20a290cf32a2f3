import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import conflict_error, store_error

logger = logging.getLogger(__name__)


def commit_or_fail(db: Session, failure_message: str, refresh: Optional[Any] = None,
                   conflict_message: Optional[str] = None):
    """Commit the unit of work, turning store failures into error responses.

    Everything staged since the last commit is applied together or not at all.
    """
    try:
        db.commit()
        if refresh is not None:
            db.refresh(refresh)
    except IntegrityError:
        db.rollback()
        if conflict_message:
            return conflict_error(conflict_message)
        logger.exception(failure_message)
        return store_error(failure_message)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        return store_error(failure_message)
    return refresh


def require_text(value: Optional[str]) -> Optional[str]:
    """Strip a text field and treat blank as missing."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
