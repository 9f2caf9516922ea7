# hotboot/content/bundle.py
from __future__ import annotations
import io
import logging
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

import json5
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hotboot.core.errors import ContentDecodeError, TemplateNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["ComponentSpec", "TemplateSpec", "Template", "ContentBundle", "decodeBundle", "TEMPLATE_SUFFIXES"]

TEMPLATE_SUFFIXES = (".json5", ".json")



class ComponentSpec(BaseModel):
    """A script to restore on the spawned object; `script` names a type in the dynamic module."""
    model_config = ConfigDict(extra="forbid")

    script: str = Field(min_length=1)
    fields: dict[str, Any] = Field(default_factory=dict)



class TemplateSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tags: list[str] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)
    components: list[ComponentSpec] = Field(default_factory=list)



@dataclass(frozen=True, slots=True)
class Template:
    """Spawnable template decoded from a bundle entry."""
    name: str
    entry: str
    spec: TemplateSpec



class ContentBundle:
    def __init__(self, templates: dict[str, Template]):
        self._templates = dict(templates)

    def getTemplate(self, name: str) -> Template:
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(f"Template '{name}' not found in content bundle")
        return template

    def templateNames(self) -> list[str]:
        return sorted(self._templates.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._templates



def _decodeTemplate(entry: str, raw: bytes) -> Template:
    name = PurePosixPath(entry).stem
    try:
        payload = json5.loads(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, ValueError) as err:
        raise ContentDecodeError(f"Template '{entry}' is not valid JSON5: {err}") from err
    try:
        spec = TemplateSpec.model_validate(payload)
    except ValidationError as err:
        raise ContentDecodeError(f"Template '{entry}' has invalid shape: {err}") from err
    return Template(name=name, entry=entry, spec=spec)



def decodeBundle(data: bytes) -> ContentBundle:
    """
    Decode a content bundle: a ZIP archive where every *.json5 / *.json
    entry is one template, named after the entry's file stem.
    Other entries are ignored.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as err:
        raise ContentDecodeError(f"Content bundle is not a valid archive: {err}") from err

    templates: dict[str, Template] = {}
    with archive:
        for info in archive.infolist():
            if info.is_dir() or not info.filename.lower().endswith(TEMPLATE_SUFFIXES):
                continue
            try:
                raw = archive.read(info)
            except (zipfile.BadZipFile, OSError, zlib.error, RuntimeError, NotImplementedError) as err:
                raise ContentDecodeError(f"Cannot read bundle entry '{info.filename}': {err}") from err
            template = _decodeTemplate(info.filename, raw)
            if template.name in templates:
                raise ContentDecodeError(
                    f"Duplicate template '{template.name}' ('{templates[template.name].entry}' and '{info.filename}')"
                )
            templates[template.name] = template

    logger.debug("Decoded content bundle with %d template(s): %s", len(templates), sorted(templates))
    return ContentBundle(templates)
