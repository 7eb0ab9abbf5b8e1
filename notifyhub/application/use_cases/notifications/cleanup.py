"""Retention cleanup for old notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from notifyhub.domain.ports import NotificationStore
from notifyhub.utils import utc_now

logger = logging.getLogger(__name__)


async def cleanup_old_notifications(
    store: NotificationStore, retention_days: int, *, now: datetime | None = None
) -> int:
    """Delete notifications created more than ``retention_days`` ago."""

    if retention_days <= 0:
        logger.warning(
            "Invalid retention period: %s. Must be greater than 0.", retention_days
        )
        return 0

    cutoff = (now or utc_now()) - timedelta(days=retention_days)
    logger.info(
        "Deleting notifications older than %s (retention period: %s days)",
        cutoff.isoformat(),
        retention_days,
    )
    deleted = await store.delete_older_than(cutoff)
    if deleted:
        logger.info("Deleted %d notifications older than %s", deleted, cutoff.isoformat())
    else:
        logger.info("No old notifications found to delete")
    return deleted


__all__ = ["cleanup_old_notifications"]
