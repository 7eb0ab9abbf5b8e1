"""Jinja2-based template engine for notification rendering."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

import jinja2
from jinja2.sandbox import SandboxedEnvironment

from notifyhub.domain.errors import TemplateRenderError
from notifyhub.utils import parse_iso_datetime

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def format_date(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format ``value`` with ``strftime``; values that are not dates render empty."""

    parsed = parse_iso_datetime(value)
    if parsed is None or not isinstance(fmt, str):
        return ""
    return parsed.strftime(fmt)


def template_context(data: Any) -> dict[str, Any]:
    """Return a fresh mapping view of ``data`` for use as a template context.

    Mappings, dataclasses, pydantic models and plain objects are supported.
    ``data`` itself is never modified.
    """

    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
    model_dump = getattr(data, "model_dump", None)
    if callable(model_dump):
        return model_dump()
    if hasattr(data, "__dict__"):
        return {k: v for k, v in vars(data).items() if not k.startswith("_")}
    return {"value": data}


class JinjaTemplateRenderer:
    """Render template text against an arbitrary data object.

    Output depends only on ``(template_text, data, html)``: each call builds
    its context from scratch and the environments carry no mutable globals.
    HTML bodies escape interpolated values; plain-text output (subjects,
    SMS and push copy) does not.
    """

    def __init__(self) -> None:
        self._html_environment = self._build_environment(autoescape=True)
        self._text_environment = self._build_environment(autoescape=False)

    @staticmethod
    def _build_environment(*, autoescape: bool) -> SandboxedEnvironment:
        environment = SandboxedEnvironment(
            autoescape=autoescape,
            keep_trailing_newline=True,
            undefined=jinja2.Undefined,
        )
        environment.filters["format_date"] = format_date
        environment.globals["formatDate"] = format_date
        return environment

    def render(self, template_text: str | None, data: Any, *, html: bool = True) -> str:
        if template_text is None or not template_text.strip():
            return ""

        environment = self._html_environment if html else self._text_environment
        try:
            compiled = environment.from_string(template_text)
            return compiled.render(template_context(data))
        except jinja2.TemplateError as exc:
            logger.error("Template rendering failed: %s", exc)
            raise TemplateRenderError(f"Template rendering failed: {exc}") from exc
        except Exception as exc:
            logger.exception("Unexpected error while rendering template")
            raise TemplateRenderError("Template rendering failed") from exc


__all__ = ["JinjaTemplateRenderer", "format_date", "template_context", "DEFAULT_DATE_FORMAT"]
