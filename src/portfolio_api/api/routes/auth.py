"""Admin authentication endpoint."""

from typing import Annotated

from fastapi import APIRouter, Body
from starlette.requests import Request

from src.portfolio_api.api.dependencies import AuthServiceDep
from src.portfolio_api.core.rate_limit import limiter, login_rate_limit
from src.portfolio_api.schemas.auth import LoginRequest, LoginResponse

router = APIRouter(prefix="/admin", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "user": {"id": 1, "username": "admin", "name": "Administrator"},
                    }
                }
            },
        },
        400: {"description": "Username and password required"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(login_rate_limit)
async def login(
    request: Request,
    service: AuthServiceDep,
    login_data: Annotated[LoginRequest | None, Body()] = None,
) -> LoginResponse:
    """Exchange admin credentials for an access token valid for 24 hours."""
    credentials = login_data or LoginRequest()
    return await service.authenticate(credentials.username, credentials.password)
