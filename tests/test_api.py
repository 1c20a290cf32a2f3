from types import SimpleNamespace

from shared.core.auth import create_access_token
from shared.core.config import settings
from shared.core.schemas import Lookup
from shared.utils.app_status_code import AppStatusCode
from .conftest import ADMIN, STAFF, auth_headers


def test_success_envelope(client):
    res = client.get("/api/gatepasses/status-lookup", headers=auth_headers(STAFF))
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "Success"
    assert body["status_code"] == AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY
    assert {item["id"] for item in body["data"]} == {
        "pending", "approved", "rejected", "issued", "exited"}


def test_invalid_token(client):
    res = client.get("/api/gatepasses/all", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.json()["status"] == "Failure"


def test_token_without_profile(client):
    token = create_access_token({"user_id": "ghost"})
    res = client.get("/api/gatepasses/all", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 404
    assert res.json()["status_code"] == AppStatusCode.AUTHENTICATION_USER_INVALID


def test_role_comes_from_profile_not_token(client):
    # a staff member claiming admin in the token is still staff
    token = create_access_token({"user_id": STAFF.user_id, "role": "admin"})
    res = client.get("/api/analytics/gatepasses", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 403


def test_lookups(client):
    headers = auth_headers(ADMIN)
    types = client.get("/api/assets/type-lookup", headers=headers).json()["data"]
    assert "laptop" in {item["id"] for item in types}

    departments = client.get("/api/communications/department-lookup", headers=headers).json()["data"]
    assert [item["name"] for item in departments] == ["Administration", "Engineering", "Sales", "Security"]

    visitor_statuses = client.get("/api/visitors/status-lookup", headers=headers).json()["data"]
    assert {item["id"] for item in visitor_statuses} == {
        "pending", "checked_in", "checked_out", "expired"}


def test_lookup_reads_from_attributes():
    row = SimpleNamespace(id="Engineering", name="Engineering")
    lookup = Lookup.model_validate(row)
    assert lookup.id == "Engineering"
    assert Lookup.model_config["from_attributes"] is True


def test_settings_ignore_unknown_env_keys():
    assert settings.model_config["extra"] == "ignore"
    assert settings.model_config["env_file"] == ".env"
