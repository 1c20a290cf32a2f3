import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from shared.core.auth import ensure_role
from shared.core.schemas import Lookup, UserToken
from shared.helpers.db_helper import commit_or_fail, require_text
from shared.helpers.json_response_helper import (
    invalid_transition_error, not_found_error, validation_error
)
from shared.utils.enums import UserRole
from ...enum.visitor_enum import VisitorStatus
from ...models.employees.employees import Employee
from ...models.visitors.visitors import Visitor
from ...schemas.visitors.visitor_schemas import (
    VisitorCreate, VisitorOut, VisitorRequest, VisitorsResponse
)
from ..common.code_generator_crud import generate_visitor_id

logger = logging.getLogger(__name__)

VISITOR_DESK_ROLES = (UserRole.admin, UserRole.security_officer)


def build_visitor_filters(params: VisitorRequest):
    filters = []

    if params.status and params.status.lower() != "all":
        filters.append(Visitor.status == VisitorStatus(params.status.lower()))

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(Visitor.full_name.ilike(search_term),
                           Visitor.visitor_id.ilike(search_term),
                           Visitor.company.ilike(search_term),
                           Visitor.purpose_of_visit.ilike(search_term)))

    return filters


def get_visitors(db: Session, params: VisitorRequest) -> VisitorsResponse:
    if params.status and params.status.lower() != "all" \
            and params.status.lower() not in VisitorStatus.__members__:
        return validation_error(f"Unknown visitor status '{params.status}'")

    base_query = db.query(Visitor).filter(*build_visitor_filters(params))
    total = base_query.with_entities(func.count(Visitor.id)).scalar()

    results = (
        base_query
        .order_by(Visitor.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"visitors": [VisitorOut.model_validate(v) for v in results], "total": total}


def get_visitor_overview(db: Session):
    fields = db.query(
        func.count(Visitor.id).label("total_records"),
        func.sum(case((Visitor.status == VisitorStatus.pending, 1), else_=0)).label("pending"),
        func.sum(case((Visitor.status == VisitorStatus.checked_in, 1), else_=0)).label("checked_in"),
        func.sum(case((Visitor.status == VisitorStatus.checked_out, 1), else_=0)).label("checked_out"),
        func.sum(case((Visitor.status == VisitorStatus.expired, 1), else_=0)).label("expired"),
    ).one()

    return {
        "totalVisitors": int(fields.total_records or 0),
        "pending": int(fields.pending or 0),
        "checkedIn": int(fields.checked_in or 0),
        "checkedOut": int(fields.checked_out or 0),
        "expired": int(fields.expired or 0),
    }


def get_visitor_by_id(db: Session, visitor_id: UUID):
    return db.query(Visitor).filter(Visitor.id == visitor_id).first()


def visitor_status_lookup():
    return [
        Lookup(id=status.value, name=status.name.replace("_", " ").capitalize())
        for status in VisitorStatus
    ]


def register_visitor(db: Session, data: VisitorCreate, actor: UserToken):
    ensure_role(actor, *VISITOR_DESK_ROLES)

    full_name = require_text(data.full_name)
    purpose = require_text(data.purpose_of_visit)
    if not full_name or not purpose:
        return validation_error("Visitor name and purpose of visit are required")

    if data.host_employee_id:
        host = db.query(Employee).filter(
            Employee.id == data.host_employee_id).first()
        if not host:
            return not_found_error("Host employee not found")

    db_visitor = Visitor(
        visitor_id=generate_visitor_id(db),
        full_name=full_name,
        company=require_text(data.company),
        phone=require_text(data.phone),
        email=data.email,
        purpose_of_visit=purpose,
        host_employee_id=data.host_employee_id,
        expected_checkout=data.expected_checkout,
        face_encoding=require_text(data.face_encoding),
        status=VisitorStatus.pending,
    )
    db.add(db_visitor)
    commit_or_fail(db, "Failed to add visitor", refresh=db_visitor)

    logger.info("Visitor %s registered by %s",
                db_visitor.visitor_id, actor.user_id)
    return db_visitor


def _move_visitor(db: Session, visitor_id: UUID, actor: UserToken,
                  source: VisitorStatus, target: VisitorStatus, stamp_column):
    ensure_role(actor, *VISITOR_DESK_ROLES)

    if not get_visitor_by_id(db, visitor_id):
        return not_found_error("Visitor not found")

    updated = (
        db.query(Visitor)
        .filter(Visitor.id == visitor_id, Visitor.status == source)
        .update({
            Visitor.status: target,
            stamp_column: datetime.now(timezone.utc),
        }, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        current = get_visitor_by_id(db, visitor_id)
        return invalid_transition_error(
            f"Visitor {current.visitor_id} is {current.status.value}; expected {source.value}"
        )

    commit_or_fail(db, f"Failed to move visitor to {target.value}")
    db_visitor = get_visitor_by_id(db, visitor_id)
    logger.info("Visitor %s %s by %s", db_visitor.visitor_id,
                target.value, actor.user_id)
    return db_visitor


def check_in_visitor(db: Session, visitor_id: UUID, actor: UserToken):
    return _move_visitor(db, visitor_id, actor, VisitorStatus.pending,
                         VisitorStatus.checked_in, Visitor.check_in_time)


def check_out_visitor(db: Session, visitor_id: UUID, actor: UserToken):
    return _move_visitor(db, visitor_id, actor, VisitorStatus.checked_in,
                         VisitorStatus.checked_out, Visitor.check_out_time)
