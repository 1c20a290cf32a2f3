from pydantic import BaseModel
from typing import Generic, Optional, TypeVar, Union
from uuid import UUID

from shared.utils.enums import UserRole

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    role: UserRole = UserRole.staff
    exp: Optional[int] = None


class CommonQueryParams(BaseModel):
    search: Optional[str] = None
    skip: Optional[int] = 0
    limit: Optional[int] = 100


class Lookup(BaseModel):
    id: Union[str, UUID]  # accepts both UUID and str
    name: str

    model_config = {"from_attributes": True}


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
