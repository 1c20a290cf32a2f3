import logging
from datetime import datetime, timezone
from typing import Dict, List
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.auth import ensure_role
from shared.core.schemas import Lookup, UserToken
from shared.helpers.db_helper import commit_or_fail, require_text
from shared.helpers.json_response_helper import (
    invalid_transition_error, not_found_error, validation_error
)
from shared.utils.enums import UserRole
from ...enum.gatepass_enum import GatepassStatus
from ...models.gatepass.gatepasses import Gatepass
from ...schemas.gatepass.gatepass_schemas import (
    GatepassCreate, GatepassOut, GatepassRequest, GatepassesResponse
)
from ..common.code_generator_crud import generate_gatepass_id
from ..overview.analytics_crud import status_counts

logger = logging.getLogger(__name__)

GATEPASS_REVIEWERS = (UserRole.admin, UserRole.security_officer)

# rejected, issued and exited are terminal
GATEPASS_TRANSITIONS: Dict[GatepassStatus, List[GatepassStatus]] = {
    GatepassStatus.pending: [GatepassStatus.approved, GatepassStatus.rejected],
    GatepassStatus.approved: [GatepassStatus.exited],
    GatepassStatus.rejected: [],
    GatepassStatus.issued: [],
    GatepassStatus.exited: [],
}


def allowed_next_statuses(current: GatepassStatus) -> List[GatepassStatus]:
    return list(GATEPASS_TRANSITIONS.get(GatepassStatus(current), []))


def source_statuses(target: GatepassStatus) -> List[GatepassStatus]:
    """Statuses from which ``target`` may be reached."""
    return [source for source, targets in GATEPASS_TRANSITIONS.items() if target in targets]


# ----------------------------------------------------------------------
# QUERIES
# ----------------------------------------------------------------------

def build_gatepass_filters(params: GatepassRequest, actor: UserToken):
    filters = []

    # staff only ever see their own requests
    if actor.role == UserRole.staff:
        filters.append(Gatepass.requester_id == actor.user_id)

    if params.status and params.status.lower() != "all":
        filters.append(Gatepass.status == GatepassStatus(params.status.lower()))

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Gatepass.gatepass_id.ilike(search_term),
            Gatepass.requester_name.ilike(search_term),
            Gatepass.department.ilike(search_term)
        ))

    return filters


def get_gatepasses(db: Session, params: GatepassRequest, actor: UserToken) -> GatepassesResponse:
    if params.status and params.status.lower() != "all" \
            and params.status.lower() not in GatepassStatus.__members__:
        return validation_error(f"Unknown gatepass status '{params.status}'")

    base_query = db.query(Gatepass).filter(
        *build_gatepass_filters(params, actor))
    total = base_query.with_entities(func.count(Gatepass.id)).scalar()

    results = (
        base_query
        .order_by(Gatepass.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {
        "gatepasses": [GatepassOut.model_validate(g) for g in results],
        "total": total
    }


def get_gatepass_by_id(db: Session, gatepass_id: UUID):
    return db.query(Gatepass).filter(Gatepass.id == gatepass_id).first()


def get_gatepass_overview(db: Session, actor: UserToken):
    query = db.query(Gatepass.status)
    if actor.role == UserRole.staff:
        query = query.filter(Gatepass.requester_id == actor.user_id)
    counts = status_counts(query.all())

    return {
        "total": sum(counts.values()),
        "pending": counts.get(GatepassStatus.pending.value, 0),
        # issued passes are shown alongside approved ones
        "approved": counts.get(GatepassStatus.approved.value, 0)
        + counts.get(GatepassStatus.issued.value, 0),
        "rejected": counts.get(GatepassStatus.rejected.value, 0),
        "exited": counts.get(GatepassStatus.exited.value, 0),
    }


def gatepass_status_lookup():
    return [
        Lookup(id=status.value, name=status.name.capitalize())
        for status in GatepassStatus
    ]


# ----------------------------------------------------------------------
# LIFECYCLE
# ----------------------------------------------------------------------

def create_gatepass(db: Session, data: GatepassCreate, actor: UserToken):
    reason = require_text(data.reason)
    if not reason or data.exit_time is None:
        return validation_error("Reason and exit time are required")

    if not actor.department:
        return validation_error("Requester has no department on their profile")

    db_gatepass = Gatepass(
        gatepass_id=generate_gatepass_id(db),
        requester_id=actor.user_id,
        requester_name=actor.name or actor.user_id,
        department=actor.department,
        reason=reason,
        items_carried=require_text(data.items_carried),
        exit_time=data.exit_time,
        status=GatepassStatus.pending,
    )
    db.add(db_gatepass)
    commit_or_fail(db, "Failed to create gatepass", refresh=db_gatepass)

    logger.info("Gatepass %s requested by %s",
                db_gatepass.gatepass_id, actor.user_id)
    return db_gatepass


def _review_gatepass(db: Session, gatepass_id: UUID, actor: UserToken, target: GatepassStatus):
    ensure_role(actor, *GATEPASS_REVIEWERS)

    db_gatepass = get_gatepass_by_id(db, gatepass_id)
    if not db_gatepass:
        return not_found_error("Gatepass not found")

    sources = source_statuses(target)
    # conditional update; a concurrent reviewer leaves zero rows to touch
    updated = (
        db.query(Gatepass)
        .filter(Gatepass.id == gatepass_id, Gatepass.status.in_(sources))
        .update({
            Gatepass.status: target,
            Gatepass.approved_by: actor.user_id,
            Gatepass.approved_at: datetime.now(timezone.utc),
        }, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        current = get_gatepass_by_id(db, gatepass_id)
        return invalid_transition_error(
            f"Gatepass {current.gatepass_id} is {current.status.value}; "
            f"only {'/'.join(s.value for s in sources)} gatepasses can be {target.value}"
        )

    commit_or_fail(db, f"Failed to mark gatepass {target.value}")
    db_gatepass = get_gatepass_by_id(db, gatepass_id)
    logger.info("Gatepass %s %s by %s", db_gatepass.gatepass_id,
                target.value, actor.user_id)
    return db_gatepass


def approve_gatepass(db: Session, gatepass_id: UUID, actor: UserToken):
    return _review_gatepass(db, gatepass_id, actor, GatepassStatus.approved)


def reject_gatepass(db: Session, gatepass_id: UUID, actor: UserToken):
    return _review_gatepass(db, gatepass_id, actor, GatepassStatus.rejected)


def confirm_exit(db: Session, code: str, actor: UserToken):
    ensure_role(actor, *GATEPASS_REVIEWERS)

    code = require_text(code)
    if not code:
        return validation_error("Gatepass ID is required")
    code = code.upper()
    sources = source_statuses(GatepassStatus.exited)

    db_gatepass = (
        db.query(Gatepass)
        .filter(Gatepass.gatepass_id == code, Gatepass.status.in_(sources))
        .first()
    )
    if not db_gatepass:
        return not_found_error("No approved gatepass found with this ID")

    updated = (
        db.query(Gatepass)
        .filter(Gatepass.id == db_gatepass.id, Gatepass.status.in_(sources))
        .update({
            Gatepass.status: GatepassStatus.exited,
            Gatepass.exited_at: datetime.now(timezone.utc),
        }, synchronize_session=False)
    )
    if updated == 0:
        # another officer confirmed it first
        db.rollback()
        return not_found_error("No approved gatepass found with this ID")

    commit_or_fail(db, "Failed to confirm exit")
    db_gatepass = get_gatepass_by_id(db, db_gatepass.id)
    logger.info("Exit confirmed for gatepass %s by %s",
                db_gatepass.gatepass_id, actor.user_id)
    return db_gatepass
