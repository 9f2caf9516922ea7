# hotboot/content/scene.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any

from hotboot.content.bundle import Template

logger = logging.getLogger(__name__)

__all__ = ["Placement", "SceneObject", "Scene"]

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]



@dataclass(frozen=True, slots=True)
class Placement:
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = (0.0, 0.0, 0.0, 1.0)
    scale: Vector3 = (1.0, 1.0, 1.0)



@dataclass
class SceneObject:
    name: str
    templateName: str
    placement: Placement
    tags: list[str] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    components: list[Any] = field(default_factory=list)

    def addComponent(self, component: Any) -> None:
        self.components.append(component)

    def getComponent(self, typeOrName: type | str) -> Any | None:
        for component in self.components:
            if isinstance(typeOrName, str):
                if type(component).__name__ == typeOrName:
                    return component
            elif isinstance(component, typeOrName):
                return component
        return None



class Scene:
    """The live application's object list. Spawned objects stay until the process ends."""
    def __init__(self) -> None:
        self._objects: list[SceneObject] = []

    @property
    def objects(self) -> list[SceneObject]:
        return list(self._objects)

    def spawn(self, template: Template, placement: Placement | None = None) -> SceneObject:
        obj = SceneObject(
            name=f"{template.name}(Clone)",
            templateName=template.name,
            placement=placement or Placement(),
            tags=list(template.spec.tags),
            properties=dict(template.spec.properties),
        )
        self._objects.append(obj)
        logger.debug("Spawned '%s' at %s", obj.name, obj.placement.position)
        return obj

    def remove(self, obj: SceneObject) -> None:
        self._objects = [other for other in self._objects if other is not obj]
        logger.debug("Removed '%s'", obj.name)

    def find(self, name: str) -> SceneObject | None:
        return next((obj for obj in self._objects if obj.name == name), None)
