# hotboot/resources/__init__.py
from .store import ResourceDescriptor, ResourceStore
from .fetcher import ResourceFetcher, buildAddress

__all__ = [
    "ResourceDescriptor",
    "ResourceStore",
    "ResourceFetcher",
    "buildAddress",
]
