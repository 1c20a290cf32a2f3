import logging
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from shared.core.auth import ensure_role
from shared.core.schemas import UserToken
from shared.helpers.db_helper import commit_or_fail, require_text
from shared.helpers.json_response_helper import conflict_error, not_found_error, validation_error
from shared.utils.enums import UserRole
from ...models.assets.employee_assets import EmployeeAsset
from ...models.employees.employees import Employee
from ...schemas.employees.employee_schemas import (
    EmployeeCreate, EmployeeOut, EmployeeRequest, EmployeeUpdate, EmployeesResponse
)
from ...schemas.assets.asset_assignment_schemas import AssetAssignmentWithAsset
from ..common.code_generator_crud import generate_employee_id

logger = logging.getLogger(__name__)


def build_employee_filters(params: EmployeeRequest):
    filters = []

    if params.active_only:
        filters.append(Employee.is_active == True)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Employee.employee_id.ilike(search_term),
            Employee.department.ilike(search_term),
            Employee.position.ilike(search_term)
        ))

    return filters


def get_employees(db: Session, params: EmployeeRequest) -> EmployeesResponse:
    base_query = db.query(Employee).filter(*build_employee_filters(params))
    total = base_query.with_entities(func.count(Employee.id)).scalar()

    order = Employee.employee_id.asc() if params.active_only else Employee.created_at.desc()
    results = (
        base_query
        .order_by(order)
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"employees": [EmployeeOut.model_validate(e) for e in results], "total": total}


def get_employee_by_id(db: Session, employee_id: UUID):
    return db.query(Employee).filter(Employee.id == employee_id).first()


def create_employee(db: Session, data: EmployeeCreate, actor: UserToken):
    ensure_role(actor, UserRole.admin)

    department = require_text(data.department)
    if not department:
        return validation_error("Department is required")

    code = require_text(data.employee_id)
    if code:
        code = code.upper()
        if db.query(Employee).filter(Employee.employee_id == code).first():
            return conflict_error(f"Employee with ID '{code}' already exists")
    else:
        code = generate_employee_id(db)

    db_employee = Employee(
        employee_id=code,
        user_id=require_text(data.user_id),
        department=department,
        position=require_text(data.position),
        hire_date=data.hire_date,
        face_encoding=require_text(data.face_encoding),
        is_active=True,
    )
    db.add(db_employee)
    commit_or_fail(db, "Failed to add employee", refresh=db_employee,
                   conflict_message=f"Employee with ID '{code}' already exists")

    logger.info("Employee %s added by %s", code, actor.user_id)
    return db_employee


def update_employee(db: Session, employee_id: UUID, data: EmployeeUpdate, actor: UserToken):
    ensure_role(actor, UserRole.admin)

    db_employee = get_employee_by_id(db, employee_id)
    if not db_employee:
        return not_found_error("Employee not found")

    update_data = data.model_dump(exclude_unset=True)
    if "department" in update_data:
        update_data["department"] = require_text(update_data["department"])
        if not update_data["department"]:
            return validation_error("Department cannot be empty")
    if "is_active" in update_data and update_data["is_active"] is None:
        return validation_error("Active flag cannot be empty")
    if "face_encoding" in update_data:
        update_data["face_encoding"] = require_text(update_data["face_encoding"])

    for field, value in update_data.items():
        setattr(db_employee, field, value)

    return commit_or_fail(db, "Failed to update employee", refresh=db_employee)


def get_employee_assets(db: Session, employee_id: UUID):
    if not get_employee_by_id(db, employee_id):
        return not_found_error("Employee not found")

    assignments = (
        db.query(EmployeeAsset)
        .options(joinedload(EmployeeAsset.asset))
        .filter(EmployeeAsset.employee_id == employee_id, EmployeeAsset.is_active == True)
        .order_by(EmployeeAsset.assigned_date.desc())
        .all()
    )
    return [AssetAssignmentWithAsset.model_validate(a) for a in assignments]
