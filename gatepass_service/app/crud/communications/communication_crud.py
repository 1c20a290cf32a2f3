import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import CommonQueryParams, Lookup, UserToken
from shared.helpers.db_helper import commit_or_fail, require_text
from shared.helpers.json_response_helper import not_found_error, validation_error
from shared.models.profiles import Profile
from shared.utils.app_status_code import AppStatusCode
from ...enum.communication_enum import RecipientType
from ...models.communications.communications import Communication
from ...schemas.communications.communication_schemas import (
    CommunicationCreate, CommunicationOut, CommunicationsResponse, ProfileOut
)

logger = logging.getLogger(__name__)


def visible_to(actor: UserToken):
    """Read-time fan-out: one stored row reaches every matching viewer."""
    conditions = [
        Communication.recipient_id == actor.user_id,
        Communication.recipient_type == RecipientType.all_staff,
    ]
    if actor.department:
        conditions.append(and_(
            Communication.recipient_type == RecipientType.department,
            Communication.recipient_department == actor.department
        ))
    return or_(*conditions)


def _to_out(communication: Communication, sender_name=None, recipient_name=None):
    return CommunicationOut.model_validate({
        **{c.name: getattr(communication, c.name) for c in Communication.__table__.columns},
        "sender_name": sender_name,
        "recipient_name": recipient_name,
    })


def get_inbox(db: Session, params: CommonQueryParams, actor: UserToken) -> CommunicationsResponse:
    query = (
        db.query(Communication, Profile.full_name)
        .outerjoin(Profile, Profile.user_id == Communication.sender_id)
        .filter(visible_to(actor))
    )

    if params.search:
        search_term = f"%{params.search}%"
        query = query.filter(or_(
            Communication.subject.ilike(search_term),
            Communication.message.ilike(search_term),
            Profile.full_name.ilike(search_term)
        ))

    total = query.with_entities(func.count(Communication.id)).scalar()
    rows = (
        query
        .order_by(Communication.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {
        "communications": [_to_out(c, sender_name=name) for c, name in rows],
        "total": total
    }


def get_sent(db: Session, params: CommonQueryParams, actor: UserToken) -> CommunicationsResponse:
    query = (
        db.query(Communication, Profile.full_name)
        .outerjoin(Profile, Profile.user_id == Communication.recipient_id)
        .filter(Communication.sender_id == actor.user_id)
    )

    if params.search:
        search_term = f"%{params.search}%"
        query = query.filter(or_(
            Communication.subject.ilike(search_term),
            Communication.message.ilike(search_term),
            Profile.full_name.ilike(search_term)
        ))

    total = query.with_entities(func.count(Communication.id)).scalar()
    rows = (
        query
        .order_by(Communication.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {
        "communications": [_to_out(c, sender_name=actor.name, recipient_name=name) for c, name in rows],
        "total": total
    }


def get_communication_by_id(db: Session, communication_id: UUID):
    return db.query(Communication).filter(Communication.id == communication_id).first()


def send_communication(db: Session, data: CommunicationCreate, actor: UserToken):
    subject = require_text(data.subject)
    message = require_text(data.message)
    if not subject or not message:
        return validation_error("Please fill in subject and message")

    recipient_id = None
    recipient_department = None

    if data.recipient_type == RecipientType.individual:
        recipient_id = require_text(data.recipient_id)
        if not recipient_id:
            return validation_error(
                "Please select a recipient",
                status_code=AppStatusCode.INDIVIDUAL_RECIPIENT_MISSING)
        if not db.query(Profile.id).filter(Profile.user_id == recipient_id).first():
            return not_found_error("Recipient not found")

    elif data.recipient_type == RecipientType.department:
        recipient_department = require_text(data.recipient_department)
        if not recipient_department:
            return validation_error(
                "Please select a department",
                status_code=AppStatusCode.DEPARTMENT_RECIPIENT_MISSING)

    db_communication = Communication(
        sender_id=actor.user_id,
        recipient_type=data.recipient_type,
        recipient_id=recipient_id,
        recipient_department=recipient_department,
        subject=subject,
        message=message,
        priority=data.priority,
        communication_type=data.communication_type,
        is_read=False,
    )
    db.add(db_communication)
    commit_or_fail(db, "Failed to send message", refresh=db_communication)

    logger.info("Communication %s sent by %s to %s", db_communication.id,
                actor.user_id, data.recipient_type.value)
    return _to_out(db_communication, sender_name=actor.name)


def mark_communication_read(db: Session, communication_id: UUID, actor: UserToken):
    visible = (
        db.query(Communication)
        .filter(Communication.id == communication_id, visible_to(actor))
        .first()
    )
    if not visible:
        return not_found_error("Communication not found")

    # already read: nothing to update
    updated = (
        db.query(Communication)
        .filter(Communication.id == communication_id, Communication.is_read == False)
        .update({
            Communication.is_read: True,
            Communication.read_at: datetime.now(timezone.utc),
        }, synchronize_session=False)
    )
    if updated:
        commit_or_fail(db, "Failed to mark as read")

    db.expire_all()
    return _to_out(get_communication_by_id(db, communication_id))


def profile_lookup(db: Session):
    profiles = db.query(Profile).order_by(Profile.full_name.asc()).all()
    return [ProfileOut.model_validate(p) for p in profiles]


def department_lookup(db: Session):
    rows = (
        db.query(Profile.department)
        .filter(Profile.department.isnot(None))
        .distinct()
        .order_by(Profile.department.asc())
        .all()
    )
    return [Lookup(id=r.department, name=r.department) for r in rows]
