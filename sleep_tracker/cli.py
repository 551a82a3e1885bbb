"""Administrative commands for the sleep tracker database."""
from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .db import Base, SessionLocal
from .logging_config import setup_logging
from .models import User
from .security import MIN_PASSWORD_LENGTH, hash_password

logger = logging.getLogger("sleep_tracker.cli")


def list_users(db: Session) -> list[str]:
    return list(db.scalars(select(User.email).order_by(User.email)))


def reset_password(db: Session, email: str, new_password: str) -> User:
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    user = db.scalars(select(User).where(User.email == email.lower())).one_or_none()
    if user is None:
        raise LookupError(f"User not found: {email}")

    user.password_hash = hash_password(new_password)
    db.add(user)
    db.commit()
    logger.info("password reset | user_id=%s", user.id)
    return user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sleep-tracker", description="Sleep tracker administration"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list-users", help="Print registered e-mail addresses")

    reset = sub.add_parser("reset-password", help="Set a new password for a user")
    reset.add_argument("--email", required=True)
    reset.add_argument(
        "--password", help="New password; prompted for when omitted"
    )
    return parser


def main(
    argv: Optional[list[str]] = None, session_factory: sessionmaker = SessionLocal
) -> int:
    setup_logging(settings.log_level, settings.services_log_level, settings.sql_log_level)
    args = build_parser().parse_args(argv)

    db = session_factory()
    try:
        Base.metadata.create_all(bind=db.get_bind())
        if args.command == "list-users":
            emails = list_users(db)
            if not emails:
                print("No users found in the database.")
                return 1
            for index, email in enumerate(emails, start=1):
                print(f"{index}. {email}")
            return 0

        password = args.password or getpass.getpass("New password: ")
        try:
            reset_password(db, args.email, password)
        except (LookupError, ValueError) as exc:
            print(exc, file=sys.stderr)
            return 1
        print(f"Password successfully reset for {args.email}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
