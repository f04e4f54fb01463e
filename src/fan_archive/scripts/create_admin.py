"""Create an administrator account, or promote an existing one."""
from __future__ import annotations

import argparse
import getpass
import logging
import sys
from collections.abc import Sequence

from sqlalchemy.orm import Session

from fan_archive.core.errors import ConflictError
from fan_archive.core.security import hash_password
from fan_archive.core.settings import settings
from fan_archive.db.session import SessionLocal
from fan_archive.models import User, UserRole
from fan_archive.repositories import UserRepository

logger = logging.getLogger(__name__)


def ensure_admin(
    db: Session,
    *,
    email: str,
    username: str | None = None,
    password: str | None = None,
) -> tuple[User, bool]:
    """Promote the account registered under `email`, creating it if needed.

    Returns the account and whether it was newly created.

    Raises:
        ValueError: If the account must be created but no username or
            password was given.
        ConflictError: If the username belongs to another account.
    """
    users = UserRepository(db)
    user = users.get_by_email(email)
    if user is not None:
        if user.user_role is not UserRole.ADMIN:
            user = users.set_role(user, UserRole.ADMIN)
        return user, False

    if not username or not password:
        raise ValueError("username and password are required to create a new account")
    users.ensure_available(email, username)
    user = users.create(
        email=email,
        username=username,
        password_hash=hash_password(password),
        role=UserRole.ADMIN,
    )
    return user, True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email", help="Email address of the administrator account")
    parser.add_argument("--username", help="Username for a new account")
    parser.add_argument(
        "--password",
        help="Password for a new account (prompted when omitted)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level.upper())
    args = build_parser().parse_args(argv)

    password = args.password
    with SessionLocal() as db:
        if password is None and UserRepository(db).get_by_email(args.email) is None:
            password = getpass.getpass("Password: ")
        try:
            user, created = ensure_admin(
                db, email=args.email, username=args.username, password=password
            )
        except (ValueError, ConflictError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    action = "Created" if created else "Promoted"
    print(f"{action} administrator {user.username} <{user.email}>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
