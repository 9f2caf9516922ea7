# hotboot/lifecycle/timer.py
from __future__ import annotations
import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from hotboot.app.config import LifecycleConfig

logger = logging.getLogger(__name__)

__all__ = ["LifecycleTimer", "quitProcess"]



def quitProcess() -> None:
    logger.info("Quitting application")
    sys.exit(0)



class LifecycleTimer:
    """
    Countdown that ends the process once the bootstrap reached steady state.

    Counting(n) logs n and waits one tick, for n = start..1, then
    Terminated calls `terminate`. There is no way to cancel it.
    """
    def __init__(
        self,
        cfg: LifecycleConfig,
        *,
        terminate: Callable[[], None] = quitProcess,
        workDir: Path | None = None,
        platform: str | None = None,
    ):
        self._cfg = cfg
        self._terminate = terminate
        self._workDir = workDir
        self._platform = platform or sys.platform
        self.remaining: int | None = None
        self.terminated = False

    @property
    def state(self) -> str:
        if self.terminated:
            return "terminated"
        if self.remaining is None:
            return "idle"
        return f"counting({self.remaining})"

    def writeSentinel(self) -> Path | None:
        """Write the steady-state marker file, on configured platforms only."""
        sentinel = self._cfg.sentinel
        if self._platform not in sentinel.platforms:
            return None
        path = (self._workDir or Path.cwd()) / sentinel.fileName
        path.write_text(sentinel.content, encoding="utf-8")
        logger.debug("Wrote sentinel '%s'", path)
        return path

    async def run(self) -> None:
        if self.remaining is not None or self.terminated:
            raise RuntimeError("Lifecycle countdown already started")

        self.writeSentinel()

        for remaining in range(self._cfg.countdownStart, 0, -1):
            self.remaining = remaining
            logger.info("Exiting automatically in %d second(s)", remaining)
            await asyncio.sleep(self._cfg.tickSeconds)

        self.remaining = 0
        self.terminated = True
        self._terminate()
