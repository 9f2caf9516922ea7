# hotboot/runtime/host.py
from __future__ import annotations
import importlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any

import json5
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hotboot.core.dictpath import getByPath
from hotboot.core.errors import UnresolvedSymbolError

logger = logging.getLogger(__name__)

__all__ = [
    "HomologousImageMode", "LoadImageErrorCode", "MetadataImage",
    "decodeMetadataImage", "PatchedModule", "HostRuntime",
]



class HomologousImageMode(str, Enum):
    # Image must describe only what the base module already implements
    CONSISTENT = "consistent"
    # Image may add instantiations the base build never compiled
    SUPERSET = "superset"



class LoadImageErrorCode(str, Enum):
    OK = "OK"
    BAD_IMAGE_FORMAT = "BAD_IMAGE_FORMAT"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
    BASE_MODULE_NOT_FOUND = "BASE_MODULE_NOT_FOUND"
    HOMOLOGOUS_ONLY_SUPPORT_BASE_MODULE = "HOMOLOGOUS_ONLY_SUPPORT_BASE_MODULE"
    HOMOLOGOUS_MODULE_HAS_LOADED = "HOMOLOGOUS_MODULE_HAS_LOADED"
    INVALID_HOMOLOGOUS_MODE = "INVALID_HOMOLOGOUS_MODE"



class MetadataImage(BaseModel):
    """
    Supplementary metadata for one base module.

    `instantiations` maps a concrete symbol that dynamic code may ask for
    (e.g. "fsum[float]") to the generic definition on the base module that
    serves it (e.g. "fsum").
    """
    model_config = ConfigDict(extra="forbid")

    module: str = Field(min_length=1)
    version: str | None = None
    instantiations: dict[str, str] = Field(default_factory=dict)



def decodeMetadataImage(data: bytes) -> MetadataImage:
    """Parse UTF-8 JSON5 bytes into a MetadataImage. Raises ValueError on any malformed input."""
    try:
        raw = json5.loads(data.decode("utf-8-sig"))
    except (UnicodeDecodeError, ValueError) as err:
        raise ValueError(f"Metadata image is not valid JSON5: {err}") from err
    try:
        return MetadataImage.model_validate(raw)
    except ValidationError as err:
        raise ValueError(f"Metadata image has invalid shape: {err}") from err



@dataclass(frozen=True, slots=True)
class PatchedModule:
    name: str
    module: ModuleType
    image: MetadataImage
    mode: HomologousImageMode



class HostRuntime:
    """
    Process-side registry of base-module metadata.

    The patch phase merges metadata images in; dynamically loaded code
    resolves base-module symbols out of it through resolve().
    """
    def __init__(self, *, importer: Callable[[str], ModuleType] = importlib.import_module):
        self._importer = importer
        self._patched: dict[str, PatchedModule] = {}
        self._dynamicModules: set[str] = set()

    # ----------------------------------------------
    #                 metadata merge
    # ----------------------------------------------

    def loadMetadataForBaseModule(self, data: bytes, mode: HomologousImageMode | str) -> LoadImageErrorCode:
        try:
            mode = HomologousImageMode(mode)
        except ValueError:
            return LoadImageErrorCode.INVALID_HOMOLOGOUS_MODE

        try:
            image = decodeMetadataImage(data)
        except ValueError as err:
            logger.debug("Rejected metadata image: %s", err)
            return LoadImageErrorCode.BAD_IMAGE_FORMAT

        if image.module in self._dynamicModules:
            return LoadImageErrorCode.HOMOLOGOUS_ONLY_SUPPORT_BASE_MODULE
        if image.module in self._patched:
            return LoadImageErrorCode.HOMOLOGOUS_MODULE_HAS_LOADED

        try:
            module = self._importer(image.module)
        except ImportError as err:
            logger.debug("Base module '%s' not importable: %s", image.module, err)
            return LoadImageErrorCode.BASE_MODULE_NOT_FOUND

        if mode is HomologousImageMode.CONSISTENT:
            missing = [
                definition for definition in image.instantiations.values()
                if getByPath(module, definition) is None
            ]
            if missing:
                logger.debug("Base module '%s' lacks definitions %s", image.module, sorted(set(missing)))
                return LoadImageErrorCode.NOT_IMPLEMENTED

        self._patched[image.module] = PatchedModule(name=image.module, module=module, image=image, mode=mode)
        return LoadImageErrorCode.OK

    def registerDynamicModule(self, name: str) -> None:
        self._dynamicModules.add(name)

    def isPatched(self, moduleName: str) -> bool:
        return moduleName in self._patched

    def patchedModules(self) -> list[str]:
        return list(self._patched.keys())

    # ----------------------------------------------
    #                  resolution
    # ----------------------------------------------

    def resolve(self, moduleName: str, symbol: str) -> Any:
        """
        Look up `symbol` on base module `moduleName`.

        Native attributes win. Otherwise a patched module's image may map the
        symbol onto a generic definition, which then serves the call
        (interpreted fallback). Anything else raises UnresolvedSymbolError.
        """
        patched = self._patched.get(moduleName)
        if patched is not None:
            module = patched.module
        else:
            try:
                module = self._importer(moduleName)
            except ImportError as err:
                raise UnresolvedSymbolError(moduleName, symbol) from err

        native = getByPath(module, symbol)
        if native is not None:
            return native

        if patched is None:
            raise UnresolvedSymbolError(moduleName, symbol)

        definition = patched.image.instantiations.get(symbol)
        fallback = getByPath(module, definition) if definition else None
        if fallback is None:
            raise UnresolvedSymbolError(moduleName, symbol)
        logger.debug("Resolved '%s.%s' through generic definition '%s'", moduleName, symbol, definition)
        return fallback
