from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from shared.models.profiles import Profile
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response, forbidden_error
from shared.core.schemas import UserToken
from shared.core.database import get_facility_db as get_db

security = HTTPBearer()


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    """Mint a token the way the external identity provider does.

    Used by seed scripts and tests; the service itself never logs users in.
    """
    payload = data.copy()
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    if 'name' not in payload and 'full_name' in payload:
        payload['name'] = payload.pop('full_name')

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not payload.get("user_id"):
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return UserToken(**payload)


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
):
    user_data = verify_token(credentials.credentials)

    # role and department are owned by the store, not by the token
    profile = db.query(Profile).filter(
        Profile.user_id == user_data.user_id).first()

    if not profile:
        return error_response(
            message="User not found",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INVALID),
            http_status=404
        )

    user_data.name = profile.full_name
    user_data.email = profile.email
    user_data.department = profile.department
    user_data.role = profile.role
    return user_data


def ensure_role(actor: UserToken, *roles: UserRole):
    if actor is None or actor.role not in roles:
        allowed = ", ".join(role.value for role in roles)
        return forbidden_error(
            f"Access forbidden: requires one of the roles [{allowed}]")
    return actor


def allow_admin(current_user: UserToken = Depends(validate_current_token)):
    return ensure_role(current_user, UserRole.admin)
