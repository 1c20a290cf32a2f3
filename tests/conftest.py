import os
os.environ["DATABASE_URL"] = "sqlite:///./test_gatepass.db"
os.environ.setdefault("JWT_SECRET", "test-secret")
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gatepass_service.app.main import app
from shared.core.auth import create_access_token
from shared.core.database import Base, get_facility_db
from shared.core.schemas import UserToken
from shared.models.profiles import Profile
from shared.utils.enums import UserRole

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False, "timeout": 30},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_facility_db] = override_get_db

ADMIN = UserToken(user_id="admin-1", name="Alice Admin", email="alice@example.com",
                  department="Administration", role=UserRole.admin)
OFFICER = UserToken(user_id="officer-1", name="Omar Officer", email="omar@example.com",
                    department="Security", role=UserRole.security_officer)
STAFF = UserToken(user_id="staff-1", name="Sara Staff", email="sara@example.com",
                  department="Engineering", role=UserRole.staff)
OTHER_STAFF = UserToken(user_id="staff-2", name="Tom Sales", email="tom@example.com",
                        department="Sales", role=UserRole.staff)

USERS = [ADMIN, OFFICER, STAFF, OTHER_STAFF]


def auth_headers(user: UserToken):
    token = create_access_token({"user_id": user.user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def seeded_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    for user in USERS:
        session.add(Profile(
            user_id=user.user_id,
            full_name=user.name,
            email=user.email,
            department=user.department,
            role=user.role,
        ))
    session.commit()
    session.close()
    yield


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
