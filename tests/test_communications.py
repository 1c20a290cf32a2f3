import uuid

import pytest
from fastapi import HTTPException

from gatepass_service.app.crud.communications import communication_crud as crud
from gatepass_service.app.enum.communication_enum import RecipientType
from gatepass_service.app.schemas.communications.communication_schemas import CommunicationCreate
from shared.core.schemas import CommonQueryParams
from shared.utils.app_status_code import AppStatusCode
from .conftest import ADMIN, OFFICER, OTHER_STAFF, STAFF, auth_headers


def send(db, sender=ADMIN, **fields):
    fields.setdefault("subject", "Fire drill")
    fields.setdefault("message", "Assemble at the car park at 3pm")
    return crud.send_communication(db, CommunicationCreate(**fields), sender)


def inbox(db, viewer):
    return crud.get_inbox(db, CommonQueryParams(), viewer)


def test_individual_message_reaches_only_recipient(db):
    sent = send(db, recipient_type=RecipientType.individual, recipient_id=STAFF.user_id,
                recipient_department="Ignored")
    assert sent.is_read is False
    assert sent.recipient_department is None
    assert sent.sender_name == ADMIN.name

    assert inbox(db, STAFF)["total"] == 1
    assert inbox(db, OTHER_STAFF)["total"] == 0
    assert inbox(db, STAFF)["communications"][0].sender_name == ADMIN.name


def test_department_message(db):
    sent = send(db, recipient_type=RecipientType.department,
                recipient_department="Engineering", recipient_id=OTHER_STAFF.user_id)
    assert sent.recipient_id is None

    assert inbox(db, STAFF)["total"] == 1
    assert inbox(db, OTHER_STAFF)["total"] == 0


def test_broadcast_reaches_everyone(db):
    send(db, recipient_type=RecipientType.all_staff)
    for viewer in (ADMIN, OFFICER, STAFF, OTHER_STAFF):
        assert inbox(db, viewer)["total"] == 1


def test_recipient_validation(db):
    with pytest.raises(HTTPException) as exc:
        send(db, recipient_type=RecipientType.individual)
    assert exc.value.status_code == 400
    assert exc.value.detail["status_code"] == AppStatusCode.INDIVIDUAL_RECIPIENT_MISSING

    with pytest.raises(HTTPException) as exc:
        send(db, recipient_type=RecipientType.department, recipient_department=" ")
    assert exc.value.detail["status_code"] == AppStatusCode.DEPARTMENT_RECIPIENT_MISSING

    with pytest.raises(HTTPException) as exc:
        send(db, recipient_type=RecipientType.individual, recipient_id="nobody")
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        send(db, recipient_type=RecipientType.all_staff, subject="")
    assert exc.value.detail["status_code"] == AppStatusCode.REQUIRED_VALIDATION_ERROR


def test_mark_read_is_idempotent(db):
    sent = send(db, recipient_type=RecipientType.individual, recipient_id=STAFF.user_id)

    first = crud.mark_communication_read(db, sent.id, STAFF)
    assert first.is_read is True
    assert first.read_at is not None

    second = crud.mark_communication_read(db, sent.id, STAFF)
    assert second.is_read is True
    assert second.read_at == first.read_at


def test_only_viewers_mark_read(db):
    sent = send(db, recipient_type=RecipientType.individual, recipient_id=STAFF.user_id)
    with pytest.raises(HTTPException) as exc:
        crud.mark_communication_read(db, sent.id, OTHER_STAFF)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        crud.mark_communication_read(db, uuid.uuid4(), STAFF)
    assert exc.value.status_code == 404


def test_sent_box_and_lookups(db):
    send(db, sender=STAFF, recipient_type=RecipientType.individual, recipient_id=OFFICER.user_id)
    sent = crud.get_sent(db, CommonQueryParams(), STAFF)
    assert sent["total"] == 1
    assert sent["communications"][0].recipient_name == OFFICER.name
    assert crud.get_sent(db, CommonQueryParams(), ADMIN)["total"] == 0

    departments = [item.id for item in crud.department_lookup(db)]
    assert departments == ["Administration", "Engineering", "Sales", "Security"]
    assert len(crud.profile_lookup(db)) == 4


def test_inbox_search_by_sender(db):
    send(db, recipient_type=RecipientType.all_staff)
    send(db, sender=OFFICER, recipient_type=RecipientType.all_staff, subject="Parking")

    found = crud.get_inbox(db, CommonQueryParams(search="omar"), STAFF)
    assert found["total"] == 1
    assert found["communications"][0].subject == "Parking"


def test_communication_api(client):
    res = client.post(
        "/api/communications/",
        json={"recipient_type": "department", "recipient_department": "Sales",
              "subject": "Targets", "message": "Q3 targets are out", "priority": "high"},
        headers=auth_headers(ADMIN),
    )
    assert res.status_code == 200
    message_id = res.json()["data"]["id"]

    box = client.get("/api/communications/inbox", headers=auth_headers(OTHER_STAFF))
    assert box.json()["data"]["total"] == 1

    read = client.put(f"/api/communications/{message_id}/read", headers=auth_headers(OTHER_STAFF))
    assert read.json()["data"]["is_read"] is True

    missing = client.post(
        "/api/communications/",
        json={"recipient_type": "individual", "subject": "Hi", "message": "Hello"},
        headers=auth_headers(STAFF),
    )
    assert missing.status_code == 400
    assert missing.json()["status_code"] == AppStatusCode.INDIVIDUAL_RECIPIENT_MISSING
