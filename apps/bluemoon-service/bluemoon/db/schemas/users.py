import uuid
from datetime import datetime
from pydantic import Field

from bluemoon.utils.role_permissions import RoleEnum
from .base import APIModel


class UserBase(APIModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class LoginRequest(APIModel):
    email: str
    password: str


class User(UserBase):
    id: uuid.UUID
    role: RoleEnum
    created_at: datetime | None = None


class LoginResponse(User):
    token: str


class UserSummary(APIModel):
    id: uuid.UUID
    name: str
