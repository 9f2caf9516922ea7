# hotboot/runtime/activator.py
from __future__ import annotations
import importlib
import importlib.abc
import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from hotboot.app.config import ActivationConfig
from hotboot.core.errors import (
    ActivationError,
    EntryPointError,
    ModuleLoadError,
    PhaseOrderError,
)
from hotboot.resources.store import ResourceStore
from hotboot.runtime.host import HostRuntime
from hotboot.runtime.patcher import MetadataPatcher

logger = logging.getLogger(__name__)

__all__ = ["DynamicModule", "ModuleActivator", "moduleNameFor", "HOST_BINDING"]

# Name under which dynamic code finds the HostRuntime in its globals
HOST_BINDING = "host"



def moduleNameFor(resourceName: str) -> str:
    """'HotUpdate.dll.bytes' → 'HotUpdate'"""
    name = resourceName.split("/")[-1].split(".", 1)[0].strip()
    if not name.isidentifier():
        raise ModuleLoadError(f"Cannot derive a module name from resource '{resourceName}'")
    return name



@dataclass(frozen=True)
class DynamicModule:
    """The single handle to the activated code module."""
    name: str
    module: ModuleType
    origin: str

    def getType(self, name: str) -> type:
        tp = getattr(self.module, name, None)
        if tp is None:
            raise EntryPointError(f"Type '{name}' not found in dynamic module '{self.name}'")
        if not inspect.isclass(tp):
            raise EntryPointError(f"'{name}' in dynamic module '{self.name}' is not a type")
        return tp

    def getMethod(self, tp: type, name: str) -> Callable[[], Any]:
        """
        Returns a callable that takes no arguments: a staticmethod or
        classmethod whose parameters all have defaults.
        """
        if name.startswith("_"):
            raise EntryPointError(f"Method '{tp.__name__}.{name}' is not public")
        raw = inspect.getattr_static(tp, name, None)
        if raw is None:
            raise EntryPointError(f"Method '{tp.__name__}.{name}' not found in dynamic module '{self.name}'")
        if not isinstance(raw, (staticmethod, classmethod)):
            raise EntryPointError(f"Method '{tp.__name__}.{name}' must be static")

        method = getattr(tp, name)
        try:
            sig = inspect.signature(method)
        except (TypeError, ValueError) as err:
            raise EntryPointError(f"Cannot inspect '{tp.__name__}.{name}': {err}") from err
        required = [
            param.name for param in sig.parameters.values()
            if param.default is inspect.Parameter.empty
            and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        if required:
            raise EntryPointError(
                f"Method '{tp.__name__}.{name}' must be parameterless, requires {', '.join(required)}"
            )
        return method



class _SourceBytesLoader(importlib.abc.Loader):
    """Executes Python source held in memory as a module."""
    def __init__(self, source: bytes, origin: str, namespace: dict[str, Any]):
        self._source = source
        self._origin = origin
        self._namespace = namespace

    def create_module(self, spec):
        return None # default module creation

    def exec_module(self, module: ModuleType) -> None:
        module.__dict__.update(self._namespace)
        code = compile(self._source, self._origin, "exec", dont_inherit=True)
        exec(code, module.__dict__)



class ModuleActivator:
    """
    Loads the dynamic module once and invokes its entry point.

    bytes mode:  source comes from the store and is executed as a new module
    inline mode: the module is already part of the process and is looked up by name
    """
    def __init__(
        self,
        store: ResourceStore,
        runtime: HostRuntime,
        cfg: ActivationConfig,
        resourceName: str,
        *,
        patcher: MetadataPatcher | None = None,
    ):
        self._store = store
        self._runtime = runtime
        self._cfg = cfg
        self._resourceName = resourceName
        self._patcher = patcher
        self._module: DynamicModule | None = None
        self._activating = False

    @property
    def module(self) -> DynamicModule | None:
        return self._module

    @property
    def moduleName(self) -> str:
        return self._cfg.moduleName or moduleNameFor(self._resourceName)

    async def activate(self) -> DynamicModule:
        if self._module is not None or self._activating:
            # Covers a failed earlier attempt too: one activation per process
            raise ActivationError(f"Activation of dynamic module '{self.moduleName}' was already attempted")
        if self._patcher is not None and not self._patcher.completed:
            raise PhaseOrderError("Base module metadata must be patched before activation")
        self._activating = True

        if self._cfg.mode == "inline":
            dynamicModule = self._locateResident()
        else:
            dynamicModule = self._loadFromBytes()
        self._module = dynamicModule
        self._runtime.registerDynamicModule(dynamicModule.name)
        logger.info("Dynamic module '%s' loaded from %s", dynamicModule.name, dynamicModule.origin)

        entryType = dynamicModule.getType(self._cfg.entryType)
        entry = dynamicModule.getMethod(entryType, self._cfg.entryMethod)
        logger.info("Invoking %s.%s", self._cfg.entryType, self._cfg.entryMethod)
        result = entry()
        if inspect.isawaitable(result):
            await result
        return dynamicModule

    def _loadFromBytes(self) -> DynamicModule:
        name = self.moduleName
        source = self._store.require(self._resourceName)
        if name in sys.modules:
            raise ModuleLoadError(f"A module named '{name}' is already resident; use inline activation")

        origin = f"<hotboot:{self._resourceName}>"
        loader = _SourceBytesLoader(source, origin, {HOST_BINDING: self._runtime})
        spec = importlib.util.spec_from_loader(name, loader, origin=origin)
        if spec is None:
            raise ModuleLoadError(f"Could not build a module spec for '{name}'")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            loader.exec_module(module)
        except Exception as err:
            sys.modules.pop(name, None)
            raise ModuleLoadError(f"Failed to load dynamic module '{name}': {err}") from err
        return DynamicModule(name=name, module=module, origin=origin)

    def _locateResident(self) -> DynamicModule:
        name = self.moduleName
        module = sys.modules.get(name)
        if module is None:
            try:
                module = importlib.import_module(name)
            except ImportError as err:
                raise ModuleLoadError(f"Resident module '{name}' not found: {err}") from err
        if not hasattr(module, HOST_BINDING):
            setattr(module, HOST_BINDING, self._runtime)
        origin = getattr(module, "__file__", None) or f"<resident:{name}>"
        return DynamicModule(name=name, module=module, origin=origin)
