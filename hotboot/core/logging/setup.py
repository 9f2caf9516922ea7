# hotboot/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from hotboot.app.config import LoggingConfig
from .formatters import DevFormatter, JsonFormatter
from .handlers import getLogMirror

__all__ = [
    "NO_PROPAGATE",
    "configureLogging",
]



# Disable propagation from common libraries
NO_PROPAGATE = [
    "asyncio",
    "httpcore.connection", "httpcore.http11", "httpcore.http2",
    "httpx", "hpack",
]



def configureLogging(cfg: LoggingConfig | None = None):
    """
    Initiate the global logging configuration.

    Dev:
      - Console pretty logs (DEBUG)
      - JSON file log (DEBUG)
      - Log mirror (DEBUG)

    Prod:
      - Console INFO
      - JSON file logs INFO with rotation
      - Log mirror INFO
    """
    cfg = cfg or LoggingConfig()
    rootLevel = logging.DEBUG if cfg.devModeEnabled else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)

    for name in NO_PROPAGATE:
        logging.getLogger(name).propagate = False

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(DevFormatter())
    root.addHandler(consoleHandler)

    if cfg.file:
        fileHandler = logging.handlers.RotatingFileHandler(
            cfg.file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(JsonFormatter())
        root.addHandler(fileHandler)

    if cfg.mirror.enabled:
        mirror = getLogMirror()
        mirror.configure(maxLines=cfg.mirror.maxLines, maxLineLength=cfg.mirror.maxLineLength)
        mirror.setLevel(rootLevel)
        root.addHandler(mirror)

    # Per-logger tweaks (reduce noise)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
