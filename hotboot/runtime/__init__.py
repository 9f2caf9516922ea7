# hotboot/runtime/__init__.py
from .host import HomologousImageMode, HostRuntime, LoadImageErrorCode, MetadataImage
from .patcher import MetadataPatcher
from .activator import DynamicModule, ModuleActivator

__all__ = [
    "HomologousImageMode",
    "HostRuntime",
    "LoadImageErrorCode",
    "MetadataImage",
    "MetadataPatcher",
    "DynamicModule",
    "ModuleActivator",
]
