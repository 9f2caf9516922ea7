# hotboot/content/instantiator.py
from __future__ import annotations
import logging
from typing import Any

from hotboot.content.bundle import ComponentSpec, ContentBundle, decodeBundle
from hotboot.content.scene import Scene, SceneObject
from hotboot.core.errors import ContentDecodeError
from hotboot.resources.store import ResourceStore
from hotboot.runtime.activator import DynamicModule

logger = logging.getLogger(__name__)

__all__ = ["ContentInstantiator"]



class ContentInstantiator:
    """
    Decodes the content bundle and spawns one template into the scene,
    restoring the dynamic-module scripts its components name.
    """
    def __init__(self, store: ResourceStore, scene: Scene, resourceName: str, templateName: str):
        self._store = store
        self._scene = scene
        self._resourceName = resourceName
        self._templateName = templateName
        self.bundle: ContentBundle | None = None

    def instantiate(self, dynamicModule: DynamicModule | None = None) -> SceneObject:
        data = self._store.require(self._resourceName)
        self.bundle = decodeBundle(data)
        template = self.bundle.getTemplate(self._templateName)

        if template.spec.components and dynamicModule is None:
            raise ContentDecodeError(
                f"Template '{template.name}' carries scripts but no dynamic module is active"
            )

        obj = self._scene.spawn(template)
        try:
            for componentSpec in template.spec.components:  # dynamicModule is set whenever this is non-empty
                obj.addComponent(self._restoreScript(obj, componentSpec, dynamicModule))
        except Exception:
            # A half-restored object never stays in the scene
            self._scene.remove(obj)
            raise

        logger.info("Instantiated '%s' from '%s' with %d script(s)", obj.name, self._resourceName, len(obj.components))
        return obj

    def _restoreScript(self, obj: SceneObject, spec: ComponentSpec, dynamicModule: DynamicModule) -> Any:
        scriptType = dynamicModule.getType(spec.script)
        component = scriptType()
        component.sceneObject = obj
        for key, value in spec.fields.items():
            setattr(component, key, value)
        start = getattr(component, "Start", None)
        if callable(start):
            start()
        return component
