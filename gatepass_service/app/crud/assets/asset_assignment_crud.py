import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from shared.core.auth import ensure_role
from shared.core.schemas import UserToken
from shared.helpers.db_helper import commit_or_fail, require_text
from shared.helpers.json_response_helper import conflict_error, invalid_transition_error, not_found_error
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ...enum.asset_enum import AssetStatus
from ...models.assets.assets import Asset
from ...models.assets.employee_assets import EmployeeAsset
from ...models.employees.employees import Employee
from ...schemas.assets.asset_assignment_schemas import AssetAssignmentWithEmployee
from .assets_crud import get_asset_by_id

logger = logging.getLogger(__name__)


def get_assignment_by_id(db: Session, assignment_id: UUID):
    return db.query(EmployeeAsset).filter(EmployeeAsset.id == assignment_id).first()


def get_asset_assignments(db: Session, asset_id: UUID):
    if not get_asset_by_id(db, asset_id):
        return not_found_error("Asset not found")

    assignments = (
        db.query(EmployeeAsset)
        .options(joinedload(EmployeeAsset.employee))
        .filter(EmployeeAsset.asset_id == asset_id)
        .order_by(EmployeeAsset.assigned_date.desc())
        .all()
    )
    return [AssetAssignmentWithEmployee.model_validate(a) for a in assignments]


def assign_asset(db: Session, asset_id: UUID, employee_id: UUID, notes: Optional[str], actor: UserToken):
    """Bind an available asset to an active employee.

    The asset status flip and the assignment insert share one transaction, so
    either both land or neither does.
    """
    ensure_role(actor, UserRole.admin)

    db_asset = get_asset_by_id(db, asset_id)
    if not db_asset:
        return not_found_error("Asset not found")

    employee = db.query(Employee).filter(
        Employee.id == employee_id, Employee.is_active == True).first()
    if not employee:
        return not_found_error("Active employee not found")

    updated = (
        db.query(Asset)
        .filter(Asset.id == asset_id, Asset.status == AssetStatus.available)
        .update({Asset.status: AssetStatus.assigned}, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        current = get_asset_by_id(db, asset_id)
        return conflict_error(
            f"Asset {current.asset_id} is {current.status.value}; only available assets can be assigned",
            status_code=AppStatusCode.ASSET_NOT_AVAILABLE
        )

    assignment = EmployeeAsset(
        employee_id=employee_id,
        asset_id=asset_id,
        assigned_by=actor.user_id,
        assigned_date=datetime.now(timezone.utc),
        is_active=True,
        notes=require_text(notes),
    )
    db.add(assignment)
    commit_or_fail(db, "Failed to assign asset", refresh=assignment,
                   conflict_message="Asset already has an active assignment")

    logger.info("Asset %s assigned to employee %s by %s",
                db_asset.asset_id, employee.employee_id, actor.user_id)
    return assignment


def return_asset(db: Session, assignment_id: UUID, actor: UserToken):
    """Close an active assignment and make the asset available again."""
    ensure_role(actor, UserRole.admin)

    assignment = get_assignment_by_id(db, assignment_id)
    if not assignment:
        return not_found_error("Assignment not found")

    asset_id = assignment.asset_id
    closed = (
        db.query(EmployeeAsset)
        .filter(EmployeeAsset.id == assignment_id, EmployeeAsset.is_active == True)
        .update({
            EmployeeAsset.is_active: False,
            EmployeeAsset.returned_date: datetime.now(timezone.utc),
        }, synchronize_session=False)
    )
    if closed == 0:
        db.rollback()
        return invalid_transition_error("Assignment has already been returned")

    db.query(Asset).filter(Asset.id == asset_id).update(
        {Asset.status: AssetStatus.available}, synchronize_session=False)

    commit_or_fail(db, "Failed to return asset")
    logger.info("Assignment %s closed by %s", assignment_id, actor.user_id)
    return get_assignment_by_id(db, assignment_id)
