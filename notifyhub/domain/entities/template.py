"""Domain entity representing a notification template."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .channel import Channel


@dataclass
class NotificationTemplate:
    """Named subject and body text, optionally overridden per channel."""

    name: str
    subject: str = ""
    common_content: str = ""
    channel_overrides: dict[Channel, str] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def content_template_for(self, channel: Channel | None = None) -> str:
        """Return the body template used for ``channel``.

        The channel override wins when it has text; otherwise the common
        content is used. Without a channel the common content is returned.
        """

        if channel is not None:
            override = self.channel_overrides.get(channel)
            if override and override.strip():
                return override
        return self.common_content or ""

    def has_override(self, channel: Channel) -> bool:
        override = self.channel_overrides.get(channel)
        return bool(override and override.strip())


__all__ = ["NotificationTemplate"]
