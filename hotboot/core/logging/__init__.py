# hotboot/core/logging/__init__.py
from __future__ import annotations

from .context import setLogContext, getLogContext, logContext
from .handlers import LogMirrorHandler, getLogMirror
from .setup import configureLogging

__all__ = [
    "configureLogging",
    "getLogMirror",
    "LogMirrorHandler",
    "setLogContext",
    "getLogContext",
    "logContext",
]
