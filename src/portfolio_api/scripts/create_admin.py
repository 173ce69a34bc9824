"""Create (or reset the password of) the admin account used to log in.

Usage:
    python -m src.portfolio_api.scripts.create_admin --username admin --email admin@example.com

The password is prompted for unless ``--password`` is given.
Pass ``--migrate`` on a fresh database to create the tables first.
"""

import argparse
import asyncio
import getpass
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.portfolio_api.core.config import get_settings
from src.portfolio_api.core.db import (
    create_engine_from_settings,
    create_session_factory,
    dispose_engine,
    get_session,
    run_migrations_async,
)
from src.portfolio_api.core.logging import get_logger, setup_logging
from src.portfolio_api.core.security import hash_password, normalize_email
from src.portfolio_api.models import AdminUser
from src.portfolio_api.repositories import AdminUserRepository

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


async def create_admin(
    session_factory: async_sessionmaker[AsyncSession],
    username: str,
    password: str,
    email: str | None = None,
    full_name: str | None = None,
    reset_password: bool = False,
) -> tuple[AdminUser, bool]:
    """Create an admin user.

    Returns:
        ``(admin, created)``. When the username already exists nothing is
        created; its password is replaced only if ``reset_password`` is set.
    """
    async with get_session(session_factory) as session:
        repo = AdminUserRepository(session)
        existing = await repo.get_by_username(username)

        if existing is not None:
            if reset_password:
                existing.password_hash = hash_password(password)
                await repo.commit()
                logger.info("Admin password reset", username=username)
            else:
                logger.info("Admin already exists", username=username)
            return existing, False

        admin = AdminUser(
            username=username,
            email=normalize_email(email) if email else None,
            password_hash=hash_password(password),
            full_name=full_name or None,
        )
        repo.add(admin)
        await repo.commit()
        await repo.refresh(admin)
        logger.info("Admin created", admin_id=admin.id, username=username)
        return admin, True


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the portfolio admin account.")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email")
    parser.add_argument("--full-name", dest="full_name")
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Replace the password if the username already exists",
    )
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Upgrade the database schema to head before creating the admin",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace, password: str) -> bool:
    if args.migrate:
        await run_migrations_async()
        logger.info("Database migrated to head")

    settings = get_settings()
    engine = create_engine_from_settings(settings)
    try:
        _, created = await create_admin(
            create_session_factory(engine),
            username=args.username,
            password=password,
            email=args.email,
            full_name=args.full_name,
            reset_password=args.reset_password,
        )
    finally:
        await dispose_engine(engine)
    return created


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=True)

    password = args.password or getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", file=sys.stderr)
        return 1

    created = asyncio.run(_run(args, password))
    if created:
        print(f"Admin user {args.username!r} created")
    elif args.reset_password:
        print(f"Password reset for {args.username!r}")
    else:
        print(f"Admin user {args.username!r} already exists; use --reset-password to change it")
    return 0


if __name__ == "__main__":
    sys.exit(main())
