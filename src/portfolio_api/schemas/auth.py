"""Admin authentication schemas."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginUser(BaseModel):
    id: int
    username: str
    name: str


class LoginResponse(BaseModel):
    token: str
    user: LoginUser


class AdminIdentity(BaseModel):
    """Claims of a verified access token, available for the rest of the request."""

    id: int
    username: str
    role: str
