"""Delete notifications older than the configured retention period."""

from __future__ import annotations

import argparse

import anyio

from notifyhub.application.use_cases.notifications import cleanup_old_notifications
from notifyhub.config import get_settings
from notifyhub.infrastructure.database import SessionLocal, initialize_database
from notifyhub.infrastructure.repositories import NotificationRepository
from notifyhub.logging_config import configure_logging


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Remove old notifications.")
    parser.add_argument(
        "--retention-days",
        type=int,
        default=settings.notification_retention_days,
        help=f"Keep notifications newer than this many days (default: {settings.notification_retention_days})",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(get_settings().log_level)
    initialize_database()

    store = NotificationRepository(SessionLocal)
    deleted = anyio.run(cleanup_old_notifications, store, args.retention_days)
    print(f"Deleted {deleted} notification(s)")


if __name__ == "__main__":
    main()
