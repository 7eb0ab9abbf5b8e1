"""Utility script to create a notification recipient in the database."""

from __future__ import annotations

import argparse

import anyio
from sqlalchemy.exc import SQLAlchemyError

from notifyhub.domain.entities import User
from notifyhub.infrastructure.database import SessionLocal, initialize_database
from notifyhub.infrastructure.repositories import UserRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(description="Create a notification recipient.")
    parser.add_argument("--name", required=True, help="Display name of the user")
    parser.add_argument("--email", default=None, help="Email address used for the Email channel")
    parser.add_argument("--phone", default=None, help="Phone number used for the Sms channel")
    parser.add_argument(
        "--device-token", default=None, help="Device token used for the Push channel"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_database()

    user = User(
        id=None,
        name=args.name,
        email=args.email,
        phone_number=args.phone,
        device_token=args.device_token,
    )
    try:
        created = anyio.run(UserRepository(SessionLocal).create, user)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not store the user: {exc}") from exc

    print(
        "User created:\n"
        f"  ID: {created.id}\n"
        f"  Name: {created.name}\n"
        f"  Email: {created.email or '-'}\n"
        f"  Phone: {created.phone_number or '-'}"
    )


if __name__ == "__main__":
    main()
