"""Dependencies for objects created once per application in ``create_app``."""

from typing import Annotated

from fastapi import Depends, Request

from src.portfolio_api.core.config import Settings
from src.portfolio_api.core.storage import ImageStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.storage  # type: ignore[no-any-return]


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Storage = Annotated[ImageStorage, Depends(get_image_storage)]
