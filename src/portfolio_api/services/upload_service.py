"""Image upload service."""

import asyncio
import time

from fastapi import UploadFile

from src.portfolio_api.core.exceptions import InputValidationError, UploadTooLargeError
from src.portfolio_api.core.logging import get_logger
from src.portfolio_api.core.security import sanitize_filename
from src.portfolio_api.core.storage import ImageStorage
from src.portfolio_api.schemas.upload import UploadResponse

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)


def build_stored_filename(original: str | None, now_ms: int | None = None) -> str:
    """``<epoch-ms>_<sanitized original name>``."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{timestamp}_{sanitize_filename(original or '')}"


class UploadService:
    """Validates an uploaded image and hands it to the storage collaborator."""

    def __init__(self, storage: ImageStorage, max_bytes: int):
        self.storage = storage
        self.max_bytes = max_bytes

    async def store_image(self, upload: UploadFile | None) -> UploadResponse:
        if upload is None or not upload.filename:
            raise InputValidationError("No files were uploaded")

        mimetype = upload.content_type or ""
        if mimetype not in ALLOWED_IMAGE_TYPES:
            raise InputValidationError("Only image files are allowed")

        # Read one byte past the limit to detect oversize files without buffering them whole
        data = await upload.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            logger.info("Rejected oversize upload", filename=upload.filename, limit=self.max_bytes)
            raise UploadTooLargeError()

        filename = build_stored_filename(upload.filename)
        path = await asyncio.to_thread(self.storage.store, filename, data)

        logger.info("File uploaded", filename=filename, size=len(data), mimetype=mimetype)
        return UploadResponse(
            message="File uploaded successfully",
            filename=filename,
            path=path,
            size=len(data),
            mimetype=mimetype,
        )
