"""Public contact form endpoint."""

from typing import Annotated

from fastapi import APIRouter, Body, Request, status

from src.portfolio_api.api.dependencies import MessageServiceDep
from src.portfolio_api.schemas.message import (
    ContactSubmission,
    ContactSubmissionData,
    ContactSubmissionResponse,
)

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post(
    "",
    response_model=ContactSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit contact form",
    responses={
        201: {"description": "Message stored"},
        400: {"description": "Missing fields or invalid email format"},
    },
)
async def submit_contact(
    request: Request,
    service: MessageServiceDep,
    payload: Annotated[ContactSubmission | None, Body()] = None,
) -> ContactSubmissionResponse:
    """Store a message from the public contact form."""
    message = await service.submit(
        payload or ContactSubmission(),
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return ContactSubmissionResponse(
        message="Your message has been sent. Thank you!",
        data=ContactSubmissionData.model_validate(message),
    )
