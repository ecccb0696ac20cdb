from datetime import datetime
from pydantic import BaseModel


class UserRegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: str | None = None
    date: datetime | None = None
