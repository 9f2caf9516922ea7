# hotboot/resources/store.py
from __future__ import annotations
import logging
from dataclasses import dataclass

from hotboot.core.errors import MissingResourceError

logger = logging.getLogger(__name__)

__all__ = ["ResourceDescriptor", "ResourceStore"]



@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)



class ResourceStore:
    """
    In-memory name → bytes cache for one bootstrap run.

    Written only by the fetch phase, read only after it has finished.
    A second put() of the same name replaces the earlier entry.
    """
    def __init__(self) -> None:
        self._entries: dict[str, ResourceDescriptor] = {}

    def put(self, name: str, data: bytes) -> ResourceDescriptor:
        if not name or not isinstance(name, str):
            raise ValueError("Resource name must be a non-empty string")
        if name in self._entries:
            logger.debug("Replacing resource '%s' in store", name)
        descriptor = ResourceDescriptor(name=name, data=bytes(data))
        self._entries[name] = descriptor
        return descriptor

    def get(self, name: str) -> bytes | None:
        descriptor = self._entries.get(name)
        return descriptor.data if descriptor is not None else None

    def require(self, name: str) -> bytes:
        descriptor = self._entries.get(name)
        if descriptor is None:
            raise MissingResourceError(name)
        return descriptor.data

    def names(self) -> list[str]:
        return list(self._entries.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
