# hotboot/app/config.py
from __future__ import annotations
import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from hotboot.app.paths import streamingAssetsDir
from hotboot.app.settings import deepMerge, loadSettings

logger = logging.getLogger(__name__)

__all__ = [
    "ResourcesConfig", "MetadataConfig", "ActivationConfig", "ContentConfig",
    "SentinelConfig", "LifecycleConfig", "MirrorConfig", "LoggingConfig",
    "BootstrapConfig", "loadConfig",
]



class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")



class ResourcesConfig(_Section):
    """Where resources come from and which ones the bootstrap needs."""
    baseLocation: str = Field(default_factory=lambda: streamingAssetsDir().as_posix())
    contentBundle: str = "prefabs"
    dynamicModule: str = "HotUpdate.dll.bytes"
    baseModules: list[str] = Field(default_factory=lambda: [
        "mscorlib.dll.bytes",
        "System.dll.bytes",
        "System.Core.dll.bytes",
    ])

    def declaredResources(self) -> list[str]:
        """Fetch order: content bundle, dynamic module, then every base module."""
        return [self.contentBundle, self.dynamicModule, *self.baseModules]



class MetadataConfig(_Section):
    mode: Literal["superset", "consistent"] = "superset"



class ActivationConfig(_Section):
    # "inline" locates an already-resident module instead of loading bytes (development runs)
    mode: Literal["bytes", "inline"] = "bytes"
    moduleName: str | None = None
    entryType: str = "Entry"
    entryMethod: str = "Start"



class ContentConfig(_Section):
    template: str = "Cube"



class SentinelConfig(_Section):
    fileName: str = "run.log"
    content: str = "ok"
    platforms: list[str] = Field(default_factory=lambda: ["win32"])



class LifecycleConfig(_Section):
    countdownStart: int = Field(default=10, ge=0)
    tickSeconds: float = Field(default=1.0, ge=0)
    sentinel: SentinelConfig = Field(default_factory=SentinelConfig)



class MirrorConfig(_Section):
    enabled: bool = True
    maxLines: int = Field(default=50, ge=1)
    maxLineLength: int = Field(default=120, ge=1)



class LoggingConfig(_Section):
    devModeEnabled: bool = True
    file: str | None = "bootstrap.log"
    mirror: MirrorConfig = Field(default_factory=MirrorConfig)



class BootstrapConfig(BaseModel):
    """Validated view over the merged JSON5 settings."""
    model_config = ConfigDict(extra="ignore")

    resources: ResourcesConfig = Field(default_factory=ResourcesConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    activation: ActivationConfig = Field(default_factory=ActivationConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)



def loadConfig(overrides: dict[str, Any] | None = None) -> BootstrapConfig:
    """
    Build the bootstrap configuration from shipped defaults, user settings
    and the optional `overrides` (highest precedence).
    """
    merged = loadSettings()
    if overrides:
        merged = deepMerge(merged, overrides)
    cfg = BootstrapConfig.model_validate(merged)
    logger.debug("Bootstrap config resolved (baseLocation='%s')", cfg.resources.baseLocation)
    return cfg
