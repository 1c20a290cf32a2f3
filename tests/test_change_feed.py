import threading
import time
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import WebSocketDisconnect

from gatepass_service.app.crud.gatepass import gatepass_crud
from gatepass_service.app.models.employees.employees import Employee
from gatepass_service.app.models.gatepass.gatepasses import Gatepass
from gatepass_service.app.schemas.gatepass.gatepass_schemas import GatepassCreate
from shared.core.auth import create_access_token
from shared.core.change_feed import ChangeFeed, LiveQuery, change_feed
from .conftest import OFFICER, STAFF, TestingSessionLocal


def make_gatepass(db):
    return gatepass_crud.create_gatepass(
        db, GatepassCreate(reason="Client visit",
                           exit_time=datetime.now(timezone.utc) + timedelta(hours=1)), STAFF)


def gatepass_codes():
    session = TestingSessionLocal()
    try:
        return [g.gatepass_id for g in session.query(Gatepass).order_by(Gatepass.gatepass_id).all()]
    finally:
        session.close()


def test_subscribe_and_unsubscribe():
    feed = ChangeFeed()
    seen = []
    unsubscribe = feed.subscribe("assets", lambda table, event: seen.append((table, event)))
    assert feed.subscriber_count("assets") == 1

    feed.publish("assets")
    feed.publish("visitors")
    unsubscribe()
    feed.publish("assets")

    assert seen == [("assets", "changed")]
    assert feed.subscriber_count("assets") == 0


def test_broken_listener_does_not_block_others():
    feed = ChangeFeed()
    seen = []

    def broken(table, event):
        raise RuntimeError("listener bug")

    feed.subscribe("assets", broken)
    feed.subscribe("assets", lambda table, event: seen.append(table))
    feed.publish("assets")
    assert seen == ["assets"]


def test_commit_publishes_touched_tables(db):
    seen = []
    unsubscribe = change_feed.subscribe("gatepasses", lambda table, event: seen.append(table))
    try:
        gatepass = make_gatepass(db)
        gatepass_crud.approve_gatepass(db, gatepass.id, OFFICER)
    finally:
        unsubscribe()

    # one for the insert, one for the conditional update
    assert seen == ["gatepasses", "gatepasses"]


def test_rollback_publishes_nothing(db):
    seen = []
    unsubscribe = change_feed.subscribe("employees", lambda table, event: seen.append(table))
    try:
        db.add(Employee(employee_id="EMP-X", department="Ops"))
        db.flush()
        db.rollback()
        db.commit()
    finally:
        unsubscribe()

    assert seen == []


def test_rapid_changes_converge_to_latest_state(db):
    live = LiveQuery(change_feed, "gatepasses", gatepass_codes)
    try:
        assert live.rows == []
        for _ in range(5):
            make_gatepass(db)
        assert live.refetch_count == 5
        assert live.rows == gatepass_codes()
        assert live.rows == [f"GP00000{n}" for n in range(1, 6)]
    finally:
        live.close()
    assert change_feed.subscriber_count("gatepasses") == 0


def test_live_query_keeps_latest_fetch():
    feed = ChangeFeed()
    versions = iter(range(100))
    live = LiveQuery(feed, "visitors", lambda: [next(versions)])
    for _ in range(10):
        feed.publish("visitors")
    assert live.rows == [10]
    assert live.refetch_count == 10
    live.close()


def test_live_query_ignores_refetch_that_finishes_late():
    feed = ChangeFeed()
    store = {"version": 0}
    slow_started = threading.Event()
    release = threading.Event()

    def fetch():
        version = store["version"]
        if version == 1:
            slow_started.set()
            release.wait(timeout=5)
        return [version]

    live = LiveQuery(feed, "gatepasses", fetch)
    store["version"] = 1
    slow = threading.Thread(target=feed.publish, args=("gatepasses",))
    slow.start()
    assert slow_started.wait(timeout=5)

    store["version"] = 2
    feed.publish("gatepasses")
    assert live.rows == [2]

    release.set()
    slow.join(timeout=5)
    assert live.rows == [2]
    assert live.refetch_count == 1
    live.close()


def test_realtime_socket_forwards_commits(client, db):
    token = create_access_token({"user_id": STAFF.user_id})
    with client.websocket_connect(f"/api/realtime/gatepasses?token={token}") as websocket:
        make_gatepass(db)
        assert websocket.receive_json() == {"table": "gatepasses", "event": "changed"}


@pytest.mark.parametrize("path", [
    "/api/realtime/gatepasses?token=not-a-token",
    "/api/realtime/unknown_table?token={token}",
])
def test_realtime_socket_rejections(client, path):
    token = create_access_token({"user_id": STAFF.user_id})
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(path.format(token=token)):
            pass


def test_realtime_socket_unsubscribes_when_idle_client_leaves(client):
    token = create_access_token({"user_id": STAFF.user_id})
    with client.websocket_connect(f"/api/realtime/visitors?token={token}") as websocket:
        assert change_feed.subscriber_count("visitors") == 1
        websocket.close()

    deadline = time.monotonic() + 5
    while change_feed.subscriber_count("visitors") and time.monotonic() < deadline:
        time.sleep(0.05)
    assert change_feed.subscriber_count("visitors") == 0
