# hotboot/main.py
from __future__ import annotations
import asyncio
import logging

from hotboot.app.config import loadConfig
from hotboot.app.pipeline import BootstrapPipeline
from hotboot.core.logging import configureLogging

logger = logging.getLogger(__name__)



def main() -> None:
    """Run the bootstrap once with settings from disk."""
    cfg = loadConfig()
    configureLogging(cfg.logging)
    logger.debug("Settings loaded, starting bootstrap")
    asyncio.run(BootstrapPipeline(cfg).run())



if __name__ == "__main__":
    main()
