import uuid

import pytest
from fastapi import HTTPException

from gatepass_service.app.crud.employees import employee_crud
from gatepass_service.app.crud.visitors import visitor_crud as crud
from gatepass_service.app.enum.visitor_enum import VisitorStatus
from gatepass_service.app.schemas.employees.employee_schemas import EmployeeCreate
from gatepass_service.app.schemas.visitors.visitor_schemas import VisitorCreate, VisitorRequest
from shared.utils.app_status_code import AppStatusCode
from .conftest import ADMIN, OFFICER, STAFF, auth_headers


def register_jane(db, **extra):
    return crud.register_visitor(
        db, VisitorCreate(full_name="Jane Doe", purpose_of_visit="Interview", **extra), OFFICER)


def test_jane_doe_interview_scenario(db):
    visitor = register_jane(db)
    assert visitor.status == VisitorStatus.pending
    assert visitor.visitor_id == "VIS000001"

    checked_in = crud.check_in_visitor(db, visitor.id, OFFICER)
    assert checked_in.status == VisitorStatus.checked_in
    assert checked_in.check_in_time is not None

    checked_out = crud.check_out_visitor(db, visitor.id, OFFICER)
    assert checked_out.status == VisitorStatus.checked_out
    assert checked_out.check_out_time is not None

    with pytest.raises(HTTPException) as exc:
        crud.check_out_visitor(db, visitor.id, OFFICER)
    assert exc.value.status_code == 409
    assert exc.value.detail["status_code"] == AppStatusCode.INVALID_STATUS_TRANSITION


def test_check_out_requires_check_in(db):
    visitor = register_jane(db)
    with pytest.raises(HTTPException) as exc:
        crud.check_out_visitor(db, visitor.id, ADMIN)
    assert exc.value.status_code == 409

    db.expire_all()
    assert crud.get_visitor_by_id(db, visitor.id).status == VisitorStatus.pending


def test_register_validation(db):
    with pytest.raises(HTTPException) as exc:
        crud.register_visitor(db, VisitorCreate(full_name="Jane Doe"), OFFICER)
    assert exc.value.status_code == 400

    with pytest.raises(HTTPException) as exc:
        register_jane(db, host_employee_id=uuid.uuid4())
    assert exc.value.status_code == 404


def test_register_with_host(db):
    host = employee_crud.create_employee(
        db, EmployeeCreate(department="Engineering", position="Lead"), ADMIN)
    visitor = register_jane(db, host_employee_id=host.id, company="Acme")
    assert visitor.host_employee_id == host.id
    assert visitor.host_employee.employee_id == host.employee_id


def test_register_with_face_id(db, client):
    assert register_jane(db).has_face_id is False

    enrolled = register_jane(db, face_encoding="enc-jane")
    assert enrolled.face_encoding == "enc-jane"
    assert enrolled.has_face_id is True

    created = client.post(
        "/api/visitors/",
        json={"full_name": "Sam Lee", "purpose_of_visit": "Delivery", "face_encoding": "enc-sam"},
        headers=auth_headers(OFFICER),
    )
    visitor = created.json()["data"]
    assert visitor["has_face_id"] is True
    assert "face_encoding" not in visitor


def test_staff_cannot_run_the_desk(db):
    with pytest.raises(HTTPException) as exc:
        crud.register_visitor(
            db, VisitorCreate(full_name="Jane Doe", purpose_of_visit="Interview"), STAFF)
    assert exc.value.status_code == 403


def test_unknown_visitor(db):
    with pytest.raises(HTTPException) as exc:
        crud.check_in_visitor(db, uuid.uuid4(), OFFICER)
    assert exc.value.status_code == 404


def test_listing_and_overview(db):
    first = register_jane(db)
    crud.register_visitor(
        db, VisitorCreate(full_name="John Roe", purpose_of_visit="Delivery", company="Parcel Co"), OFFICER)
    crud.check_in_visitor(db, first.id, OFFICER)

    assert crud.get_visitors(db, VisitorRequest(search="parcel"))["total"] == 1
    assert crud.get_visitors(db, VisitorRequest(status="checked_in"))["total"] == 1
    assert crud.get_visitors(db, VisitorRequest(status="all"))["total"] == 2

    overview = crud.get_visitor_overview(db)
    assert overview == {"totalVisitors": 2, "pending": 1, "checkedIn": 1,
                        "checkedOut": 0, "expired": 0}


def test_visitor_api_flow(client):
    created = client.post(
        "/api/visitors/",
        json={"full_name": "Jane Doe", "purpose_of_visit": "Interview", "email": "jane@example.com"},
        headers=auth_headers(OFFICER),
    )
    assert created.status_code == 200
    visitor_id = created.json()["data"]["id"]

    res = client.put(f"/api/visitors/{visitor_id}/check-in", headers=auth_headers(OFFICER))
    assert res.json()["data"]["status"] == "checked_in"

    res = client.put(f"/api/visitors/{visitor_id}/check-in", headers=auth_headers(OFFICER))
    assert res.status_code == 409

    bad_email = client.post(
        "/api/visitors/",
        json={"full_name": "Jane Doe", "purpose_of_visit": "Interview", "email": "not-an-email"},
        headers=auth_headers(OFFICER),
    )
    assert bad_email.status_code == 422
    assert bad_email.json()["status_code"] == AppStatusCode.INVALID_INPUT
