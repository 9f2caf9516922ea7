# hotboot/content/__init__.py
from .bundle import ContentBundle, Template, decodeBundle
from .scene import Placement, Scene, SceneObject
from .instantiator import ContentInstantiator

__all__ = [
    "ContentBundle",
    "Template",
    "decodeBundle",
    "Placement",
    "Scene",
    "SceneObject",
    "ContentInstantiator",
]
