"""Channel delivery providers."""

from notifyhub.config import Settings

from .email import SendGridEmailProvider
from .http_gateway import HttpGatewayClient
from .push import HttpPushProvider
from .sms import HttpSmsProvider


def build_email_provider(settings: Settings) -> SendGridEmailProvider | None:
    if not settings.email_enabled:
        return None
    return SendGridEmailProvider(settings.sendgrid_api_key, settings.sendgrid_sender)


def build_sms_provider(settings: Settings) -> HttpSmsProvider | None:
    if not settings.sms_enabled:
        return None
    return HttpSmsProvider(
        settings.sms_gateway_url,
        settings.sms_gateway_token,
        sender=settings.sms_sender,
        timeout=settings.provider_timeout_seconds,
    )


def build_push_provider(settings: Settings) -> HttpPushProvider | None:
    if not settings.push_enabled:
        return None
    return HttpPushProvider(
        settings.push_gateway_url,
        settings.push_gateway_token,
        timeout=settings.provider_timeout_seconds,
    )


__all__ = [
    "HttpGatewayClient",
    "HttpPushProvider",
    "HttpSmsProvider",
    "SendGridEmailProvider",
    "build_email_provider",
    "build_push_provider",
    "build_sms_provider",
]
