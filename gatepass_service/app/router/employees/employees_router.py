from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.notification_helper import notify
from shared.utils.enums import NotificationSeverity
from ...crud.employees import employee_crud as crud
from ...schemas.assets.asset_assignment_schemas import AssetAssignmentWithAsset
from ...schemas.employees.employee_schemas import (
    EmployeeCreate, EmployeeOut, EmployeeRequest, EmployeeUpdate, EmployeesResponse
)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/all", response_model=EmployeesResponse)
def get_employees(
        params: EmployeeRequest = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_employees(db, params)


@router.post("/", response_model=EmployeeOut)
def create_employee(
        data: EmployeeCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    employee = crud.create_employee(db, data, current_user)
    notify(db, current_user.user_id, "Employee added",
           f"Employee {employee.employee_id} added",
           NotificationSeverity.success)
    return employee


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
        employee_id: UUID,
        data: EmployeeUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.update_employee(db, employee_id, data, current_user)


@router.get("/{employee_id}/assets", response_model=List[AssetAssignmentWithAsset])
def get_employee_assets(employee_id: UUID, db: Session = Depends(get_db)):
    return crud.get_employee_assets(db, employee_id)
