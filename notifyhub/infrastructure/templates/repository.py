"""Template storage backed by memory and by a directory of template folders."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from notifyhub.domain.entities import NotificationTemplate, parse_channel

logger = logging.getLogger(__name__)

MANIFEST_FILE = "template.json"
BUNDLED_TEMPLATES_PATH = Path(__file__).resolve().parents[2] / "notification_templates"


class _ChannelTemplateManifest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    channel: str
    file_path: str | None = None
    content: str | None = None


class _TemplateManifest(BaseModel):
    """Shape of ``template.json`` inside a template folder."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    subject: str = ""
    file_path: str | None = None
    content: str | None = None
    channels: list[_ChannelTemplateManifest] = Field(default_factory=list)


class InMemoryTemplateRepository:
    """Keep templates in a dictionary keyed by template name."""

    def __init__(self, templates: Iterable[NotificationTemplate] = ()) -> None:
        self._templates: dict[str, NotificationTemplate] = {}
        for template in templates:
            self.add(template)

    def add(self, template: NotificationTemplate) -> None:
        self._templates[template.name] = template

    def names(self) -> list[str]:
        return sorted(self._templates)

    def exists(self, name: str) -> bool:
        return name in self._templates

    async def get_by_name(self, name: str) -> NotificationTemplate | None:
        return self._templates.get(name)


class FileSystemTemplateRepository(InMemoryTemplateRepository):
    """Templates loaded once from ``<root>/<TemplateName>/template.json`` folders.

    The manifest names the common body file through ``filePath`` and lists
    per-channel overrides under ``channels``. Paths are relative to the
    template folder.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        super().__init__(self._load_all(self.root))
        logger.info("Loaded %d notification templates from %s", len(self.names()), self.root)

    @classmethod
    def bundled(cls) -> "FileSystemTemplateRepository":
        return cls(BUNDLED_TEMPLATES_PATH)

    @staticmethod
    def _load_all(root: Path) -> list[NotificationTemplate]:
        if not root.is_dir():
            msg = f"Template directory '{root}' does not exist"
            raise FileNotFoundError(msg)

        templates: list[NotificationTemplate] = []
        for folder in sorted(p for p in root.iterdir() if p.is_dir()):
            manifest_path = folder / MANIFEST_FILE
            if not manifest_path.is_file():
                logger.debug("Skipping %s: no %s", folder, MANIFEST_FILE)
                continue
            templates.append(FileSystemTemplateRepository._load_folder(folder, manifest_path))
        return templates

    @staticmethod
    def _load_folder(folder: Path, manifest_path: Path) -> NotificationTemplate:
        raw = manifest_path.read_text(encoding="utf-8")
        try:
            manifest = _TemplateManifest.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            msg = f"Invalid template manifest {manifest_path}: {exc}"
            raise ValueError(msg) from exc

        common_content = manifest.content or ""
        if manifest.file_path:
            common_content = (folder / manifest.file_path).read_text(encoding="utf-8")

        overrides = {}
        for entry in manifest.channels:
            content = entry.content or ""
            if entry.file_path:
                content = (folder / entry.file_path).read_text(encoding="utf-8")
            overrides[parse_channel(entry.channel)] = content

        stat = manifest_path.stat()
        return NotificationTemplate(
            name=manifest.name,
            subject=manifest.subject,
            common_content=common_content,
            channel_overrides=overrides,
            created_at=datetime.fromtimestamp(stat.st_ctime, tz=timezone.utc),
            updated_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )


__all__ = [
    "BUNDLED_TEMPLATES_PATH",
    "FileSystemTemplateRepository",
    "InMemoryTemplateRepository",
    "MANIFEST_FILE",
]
