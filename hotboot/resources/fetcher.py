# hotboot/resources/fetcher.py
from __future__ import annotations
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable

from hotboot.core.errors import FetchError
from hotboot.core.logging import logContext
from hotboot.http.client import FILE_SCHEME_PREFIX, fetchBytes
from hotboot.resources.store import ResourceStore

logger = logging.getLogger(__name__)

__all__ = ["FetchFn", "CompletionCallback", "buildAddress", "ResourceFetcher"]

SCHEME_DELIMITER = "://"

FetchFn = Callable[[str], Awaitable[bytes]]
CompletionCallback = Callable[[], Awaitable[None] | None]



def buildAddress(baseLocation: str, name: str) -> str:
    """
    baseLocation + "/" + name, with "file://" put in front when the
    result carries no scheme.
    """
    address = f"{baseLocation}/{name}"
    if SCHEME_DELIMITER not in address:
        address = FILE_SCHEME_PREFIX + address
    return address



class ResourceFetcher:
    """
    Downloads declared resources one at a time into a ResourceStore.

    A failed resource is logged and skipped; whoever needs it later finds
    it missing from the store.
    """
    def __init__(self, store: ResourceStore, baseLocation: str, *, fetch: FetchFn | None = None):
        self._store = store
        self._baseLocation = str(baseLocation)
        self._fetch: FetchFn = fetch or fetchBytes
        self.failures: dict[str, str] = {}

    @property
    def baseLocation(self) -> str:
        return self._baseLocation

    async def fetchAll(self, names: Iterable[str], onComplete: CompletionCallback) -> None:
        for name in names:
            with logContext(phase="fetch", resource=name):
                await self._fetchOne(name)

        if inspect.iscoroutinefunction(onComplete):
            await onComplete()
        else:
            result = onComplete()
            if inspect.isawaitable(result):
                await result

    async def _fetchOne(self, name: str) -> None:
        address = buildAddress(self._baseLocation, name)
        logger.info("Downloading resource: %s", address)
        try:
            data = await self._fetch(address)
        except FetchError as err:
            self.failures[name] = str(err)
            logger.error("Download failed for '%s': %s", name, err)
            return
        except Exception as err:
            self.failures[name] = str(err)
            logger.exception("Download failed for '%s': %s", name, err)
            return

        self.failures.pop(name, None)
        descriptor = self._store.put(name, data)
        logger.info("Downloaded: %s size: %d bytes", name, descriptor.size)
