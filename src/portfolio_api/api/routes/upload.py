"""Image upload endpoint."""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from src.portfolio_api.api.dependencies import CurrentAdmin, UploadServiceDep
from src.portfolio_api.schemas.upload import UploadResponse

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post(
    "",
    response_model=UploadResponse,
    summary="Upload an image",
    description="Accepts one JPEG, PNG, GIF or WebP file in the ``image`` field.",
    responses={
        400: {"description": "No file, or not an image"},
        413: {"description": "File size exceeds limit (5MB)"},
    },
)
async def upload_image(
    _admin: CurrentAdmin,
    service: UploadServiceDep,
    image: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    return await service.store_image(image)
