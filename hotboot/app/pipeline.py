# hotboot/app/pipeline.py
from __future__ import annotations
import logging
from collections.abc import Callable
from pathlib import Path

from hotboot.app.config import BootstrapConfig
from hotboot.content.instantiator import ContentInstantiator
from hotboot.content.scene import Scene, SceneObject
from hotboot.core.errors import PhaseOrderError
from hotboot.core.logging import logContext
from hotboot.lifecycle.timer import LifecycleTimer, quitProcess
from hotboot.resources.fetcher import FetchFn, ResourceFetcher
from hotboot.resources.store import ResourceStore
from hotboot.runtime.activator import DynamicModule, ModuleActivator
from hotboot.runtime.host import HostRuntime
from hotboot.runtime.patcher import MetadataPatcher

logger = logging.getLogger(__name__)

__all__ = ["BootstrapPipeline"]



class BootstrapPipeline:
    """
    Owns the ResourceStore and runs every phase once, strictly in order:

        fetch → patch → activate → instantiate → countdown

    Fetch failures are logged and skipped. The first failure in any later
    phase is logged and re-raised, ending the bootstrap.
    """
    def __init__(
        self,
        cfg: BootstrapConfig,
        *,
        fetch: FetchFn | None = None,
        runtime: HostRuntime | None = None,
        scene: Scene | None = None,
        terminate: Callable[[], None] = quitProcess,
        workDir: Path | None = None,
        platform: str | None = None,
    ):
        self.cfg = cfg
        self.store = ResourceStore()
        self.runtime = runtime or HostRuntime()
        self.scene = scene or Scene()

        resources = cfg.resources
        self.fetcher = ResourceFetcher(self.store, resources.baseLocation, fetch=fetch)
        self.patcher = MetadataPatcher(self.store, self.runtime, resources.baseModules, mode=cfg.metadata.mode)
        self.activator = ModuleActivator(
            self.store,
            self.runtime,
            cfg.activation,
            resources.dynamicModule,
            patcher=self.patcher,
        )
        self.instantiator = ContentInstantiator(self.store, self.scene, resources.contentBundle, cfg.content.template)
        self.timer = LifecycleTimer(cfg.lifecycle, terminate=terminate, workDir=workDir, platform=platform)

        self.phase = "idle"
        self.dynamicModule: DynamicModule | None = None
        self.spawned: SceneObject | None = None

    async def run(self) -> None:
        if self.phase != "idle":
            raise PhaseOrderError(f"Bootstrap already started (phase '{self.phase}')")
        self._enter("fetch")
        names = self.cfg.resources.declaredResources()
        logger.info("Bootstrap starting: %d resource(s) from '%s'", len(names), self.fetcher.baseLocation)
        await self.fetcher.fetchAll(names, self.startApp)

    async def startApp(self) -> None:
        if self.phase != "fetch":
            raise PhaseOrderError(f"startApp() called during phase '{self.phase}'")
        try:
            self._enter("patch")
            with logContext(phase="patch"):
                self.patcher.patchAll()

            self._enter("activate")
            with logContext(phase="activate"):
                self.dynamicModule = await self.activator.activate()

            self._enter("instantiate")
            with logContext(phase="instantiate"):
                self.spawned = self.instantiator.instantiate(self.dynamicModule)
        except Exception as err:
            logger.exception("Bootstrap aborted during '%s': %s", self.phase, err)
            self._enter("failed")
            raise

        self._enter("running")
        with logContext(phase="lifecycle"):
            await self.timer.run()

    def _enter(self, phase: str) -> None:
        logger.debug("Bootstrap phase: %s → %s", self.phase, phase)
        self.phase = phase
