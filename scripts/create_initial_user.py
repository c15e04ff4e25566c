"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import create_user
from app.domain.entities import ROLE_ADMIN, ROLES
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the notifications API.",
    )
    parser.add_argument("--username", default="admin", help="Login name (default: admin)")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="E-mail address (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=ROLES,
        help="Role of the account (default: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            email=args.email,
            password=password,
            role=args.role,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
