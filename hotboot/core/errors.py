# hotboot/core/errors.py
from __future__ import annotations

__all__ = [
    "BootstrapError", "MissingResourceError", "FetchError", "ModuleLoadError",
    "EntryPointError", "ActivationError", "ContentDecodeError",
    "TemplateNotFoundError", "UnresolvedSymbolError", "PhaseOrderError",
]



class BootstrapError(Exception):
    """Base class for everything that stops the bootstrap from reaching the running state."""
    pass



class MissingResourceError(BootstrapError, KeyError):
    """Raised when a consumer asks the store for a resource that was never fetched."""
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Resource '{self.name}' is not in the store"



class FetchError(BootstrapError):
    def __init__(self, address: str, reason: str, *, status: int | None = None):
        super().__init__(f"Fetch of '{address}' failed: {reason}")
        self.address = address
        self.reason = reason
        self.status = status



class ModuleLoadError(BootstrapError):
    """Dynamic module bytes could not be compiled or executed, or the inline module is absent."""
    pass



class EntryPointError(BootstrapError):
    """Entry type or entry function is missing or has the wrong shape."""
    pass



class ActivationError(BootstrapError):
    """Raised on a second activation attempt within one process."""
    pass



class ContentDecodeError(BootstrapError):
    pass



class TemplateNotFoundError(BootstrapError, LookupError):
    pass



class UnresolvedSymbolError(BootstrapError, LookupError):
    """Dynamic code referenced a base-module symbol with neither a native nor a patched definition."""
    def __init__(self, module: str, symbol: str):
        super().__init__(f"Cannot resolve '{symbol}' in base module '{module}'")
        self.module = module
        self.symbol = symbol



class PhaseOrderError(BootstrapError):
    """A pipeline phase was started out of order or more than once."""
    pass
