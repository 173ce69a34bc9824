"""Authentication service - admin login."""

from src.portfolio_api.core.exceptions import InputValidationError, InvalidCredentialsError
from src.portfolio_api.core.logging import get_logger
from src.portfolio_api.core.security import (
    create_access_token,
    get_dummy_password_hash,
    verify_password,
)
from src.portfolio_api.repositories import AdminUserRepository
from src.portfolio_api.schemas.auth import LoginResponse, LoginUser

logger = get_logger(__name__)


class AuthService:
    """Verifies admin credentials and issues access tokens."""

    def __init__(self, admin_repo: AdminUserRepository):
        self.admin_repo = admin_repo

    async def authenticate(self, username: str | None, password: str | None) -> LoginResponse:
        """Authenticate an admin and return a signed access token.

        Unknown usernames and wrong passwords raise the same
        InvalidCredentialsError so responses do not reveal which accounts exist.
        """
        if not username or not password:
            raise InputValidationError("Username and password required")

        admin = await self.admin_repo.get_by_username(username)

        # Always verify against some hash so unknown usernames cost the same
        password_hash = admin.password_hash if admin else get_dummy_password_hash()
        password_valid = verify_password(password, password_hash)

        if admin is None or not password_valid:
            logger.info("Admin login failed", username=username)
            raise InvalidCredentialsError()

        token = create_access_token(admin.id, admin.username)  # type: ignore[arg-type]
        logger.info("Admin logged in", admin_id=admin.id, username=admin.username)

        return LoginResponse(
            token=token,
            user=LoginUser(
                id=admin.id,  # type: ignore[arg-type]
                username=admin.username,
                name=admin.display_name,
            ),
        )
