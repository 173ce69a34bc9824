"""Image upload schemas."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    filename: str
    path: str
    size: int
    mimetype: str
