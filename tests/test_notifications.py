from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from shared.helpers.notification_helper import notify
from shared.models.notifications import Notification
from shared.utils.enums import NotificationSeverity
from .conftest import STAFF, auth_headers


class FailingSession:
    rolled_back = False

    def add(self, obj):
        pass

    def commit(self):
        raise OperationalError("INSERT INTO notifications", {}, Exception("disk I/O error"))

    def rollback(self):
        self.rolled_back = True


def test_notify_stores_notification(db):
    notify(db, STAFF.user_id, "Gatepass created", "GP000001 submitted",
           NotificationSeverity.success)
    stored = db.query(Notification).filter(Notification.user_id == STAFF.user_id).one()
    assert stored.title == "Gatepass created"
    assert stored.severity == NotificationSeverity.success
    assert stored.read is False


def test_notify_never_raises():
    session = FailingSession()
    notify(session, STAFF.user_id, "Gatepass created", "GP000001 submitted")
    assert session.rolled_back is True


def test_lifecycle_actions_notify_the_actor(client):
    headers = auth_headers(STAFF)
    exit_time = (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat()
    res = client.post("/api/gatepasses/", json={"reason": "Client visit", "exit_time": exit_time},
                      headers=headers)
    assert res.status_code == 200

    listing = client.get("/api/notifications/all", headers=headers).json()["data"]
    assert listing["total"] == 1
    notification = listing["notifications"][0]
    assert notification["title"] == "Gatepass created"
    assert notification["read"] is False

    marked = client.put(f"/api/notifications/{notification['id']}/read", headers=headers)
    assert marked.json()["data"]["read"] is True

    res = client.put("/api/notifications/read-all", headers=headers)
    assert res.json()["data"] == {"updated": 0}
