# hotboot/runtime/patcher.py
from __future__ import annotations
import logging
from collections.abc import Sequence

from hotboot.core.errors import PhaseOrderError
from hotboot.core.logging import logContext
from hotboot.resources.store import ResourceStore
from hotboot.runtime.host import HomologousImageMode, HostRuntime, LoadImageErrorCode

logger = logging.getLogger(__name__)

__all__ = ["MetadataPatcher"]



class MetadataPatcher:
    """
    Merges metadata for every base module in manifest order.

    A resource missing from the store raises MissingResourceError and ends
    the phase. Non-OK merge results are only logged.
    """
    def __init__(
        self,
        store: ResourceStore,
        runtime: HostRuntime,
        manifest: Sequence[str],
        *,
        mode: HomologousImageMode | str = HomologousImageMode.SUPERSET,
    ):
        self._store = store
        self._runtime = runtime
        self._manifest = tuple(manifest)
        self._mode = HomologousImageMode(mode)
        self._started = False
        self.completed = False
        self.results: dict[str, LoadImageErrorCode] = {}

    @property
    def manifest(self) -> tuple[str, ...]:
        return self._manifest

    def patchAll(self) -> dict[str, LoadImageErrorCode]:
        if self._started:
            raise PhaseOrderError("Metadata patch phase already ran for this process")
        self._started = True

        for name in self._manifest:
            with logContext(phase="patch", resource=name):
                data = self._store.require(name)
                code = self._runtime.loadMetadataForBaseModule(data, self._mode)
                self.results[name] = code
                level = logging.INFO if code is LoadImageErrorCode.OK else logging.WARNING
                logger.log(level, "Loaded base module metadata: %s, mode: %s, result: %s", name, self._mode.value, code.value)

        self.completed = True
        return dict(self.results)
