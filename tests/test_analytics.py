from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from gatepass_service.app.crud.gatepass import gatepass_crud
from gatepass_service.app.crud.overview.analytics_crud import (
    completion_rate, department_counts, get_gatepass_analytics, status_counts
)
from gatepass_service.app.enum.gatepass_enum import GatepassStatus
from gatepass_service.app.schemas.gatepass.gatepass_schemas import GatepassCreate
from .conftest import ADMIN, OFFICER, OTHER_STAFF, STAFF, auth_headers


def row(status, department="Engineering"):
    return {"status": status, "department": department}


def test_status_counts():
    rows = [row("pending"), row(GatepassStatus.pending), row("exited")]
    assert status_counts(rows) == {"pending": 2, "exited": 1}
    assert status_counts([]) == {}


def test_department_counts_partition_and_order():
    rows = [row("pending", d) for d in ["Sales", "Ops", "Ops", "HR", "Sales", "Ops", "IT"]]
    stats = department_counts(rows)

    assert sum(s["count"] for s in stats) == len(rows)
    assert [s["department"] for s in stats] == ["Ops", "Sales", "HR", "IT"]
    assert [s["count"] for s in stats] == [3, 2, 1, 1]


def test_completion_rate():
    assert completion_rate([]) == 0
    assert completion_rate([row("exited")] * 5) == 100
    assert completion_rate([row("exited"), row("pending")]) == 50
    # 1/8 = 12.5 rounds half up
    assert completion_rate([row("exited")] + [row("pending")] * 7) == 13
    assert completion_rate([row("exited")] + [row("pending")] * 2) == 33


def make_gatepass(db, actor):
    return gatepass_crud.create_gatepass(
        db, GatepassCreate(reason="Client visit",
                           exit_time=datetime.now(timezone.utc) + timedelta(hours=1)), actor)


def test_gatepass_analytics(db):
    first = make_gatepass(db, STAFF)
    second = make_gatepass(db, STAFF)
    make_gatepass(db, OTHER_STAFF)
    gatepass_crud.approve_gatepass(db, first.id, OFFICER)
    gatepass_crud.confirm_exit(db, first.gatepass_id, OFFICER)
    gatepass_crud.reject_gatepass(db, second.id, OFFICER)

    stats = get_gatepass_analytics(db, ADMIN)
    assert stats["totalGatepasses"] == 3
    assert stats["exited"] == 1
    assert stats["rejected"] == 1
    assert stats["pending"] == 1
    assert stats["totalUsers"] == 4
    assert stats["completionRate"] == 33
    assert stats["departmentStats"] == [
        {"department": "Engineering", "count": 2},
        {"department": "Sales", "count": 1},
    ]


def test_analytics_is_admin_only(db, client):
    with pytest.raises(HTTPException) as exc:
        get_gatepass_analytics(db, OFFICER)
    assert exc.value.status_code == 403

    assert client.get("/api/analytics/gatepasses", headers=auth_headers(OFFICER)).status_code == 403
    res = client.get("/api/analytics/gatepasses", headers=auth_headers(ADMIN))
    assert res.status_code == 200
    assert res.json()["data"]["completionRate"] == 0
