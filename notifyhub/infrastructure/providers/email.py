"""Email delivery through the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

import anyio
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

logger = logging.getLogger(__name__)


def _describe_sendgrid_error(body: Any) -> str | None:
    """Turn a SendGrid error payload into a single readable line."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        messages = []
        for item in body.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            help_link = item.get("help")
            messages.append(
                f"{item['message']} (help: {help_link})" if help_link else str(item["message"])
            )
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)

    if isinstance(body, list):
        return "; ".join(str(item) for item in body)

    return None


class SendGridEmailProvider:
    """Send notification emails; every failure is reported as ``False``."""

    def __init__(self, api_key: str, sender: str) -> None:
        self._api_key = api_key
        self._sender = sender

    async def send_email(self, to: str, subject: str, body: str) -> bool:
        return await anyio.to_thread.run_sync(self._send, to, subject, body)

    def _send(self, to: str, subject: str, body: str) -> bool:
        message = Mail(
            from_email=self._sender,
            to_emails=to,
            subject=subject,
            html_content=body,
        )

        try:
            response = SendGridAPIClient(self._api_key).send(message)
        except Exception as exc:
            self._log_failure(
                "SendGrid API request failed",
                getattr(exc, "status_code", None),
                getattr(exc, "body", None),
                exc,
            )
            return False

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            self._log_failure(
                "SendGrid API responded with an error",
                status_code,
                getattr(response, "body", None),
            )
            return False

        logger.debug("Email '%s' accepted by SendGrid for %s", subject, to)
        return True

    @staticmethod
    def _log_failure(
        prefix: str, status_code: Any, body: Any, exc: Exception | None = None
    ) -> None:
        details = _describe_sendgrid_error(body)
        if status_code and details:
            logger.error("%s with status %s: %s", prefix, status_code, details)
        elif status_code:
            logger.error("%s with status %s", prefix, status_code)
        elif details:
            logger.error("%s: %s", prefix, details)
        else:
            logger.error("%s: %s", prefix, exc, exc_info=exc)


__all__ = ["SendGridEmailProvider"]
