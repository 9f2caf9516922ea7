import io
import sys
import zipfile
from pathlib import Path

import json5
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from hotboot.app.config import BootstrapConfig

HOT_MODULE = "HotUpdate"

# Dynamic module used across tests. `host` is bound by the activator.
HOT_MODULE_SOURCE = b'''
CALLS = []

class Entry:
    @staticmethod
    def Start():
        fsum = host.resolve("math", "fsum[float]")
        CALLS.append(("Entry.Start", fsum([0.5, 0.25])))

class Rotate:
    speed = 0.0

    def Start(self):
        CALLS.append(("Rotate.Start", self.speed))
'''

# Base module resource → (importable module, instantiations)
BASE_IMAGES = {
    "mscorlib.dll.bytes": ("math", {"fsum[float]": "fsum"}),
    "System.dll.bytes": ("collections", {"OrderedDict[str,int]": "OrderedDict"}),
    "System.Core.dll.bytes": ("itertools", {"chain[int]": "chain"}),
}



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



def _imageBytes(module: str, instantiations: dict[str, str] | None = None) -> bytes:
    return json5.dumps({"module": module, "instantiations": instantiations or {}}).encode("utf-8")



def _bundleBytes(templates: dict[str, dict], extra: dict[str, bytes] | None = None) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        for name, payload in templates.items():
            archive.writestr(f"prefabs/{name}.json5", json5.dumps(payload))
        for entry, raw in (extra or {}).items():
            archive.writestr(entry, raw)
    return buf.getvalue()



@pytest.fixture()
def imageBytes():
    return _imageBytes



@pytest.fixture()
def bundleBytes():
    return _bundleBytes



@pytest.fixture()
def resourcePayloads() -> dict[str, bytes]:
    """Every resource of the default declared list, all valid."""
    payloads = {
        "prefabs": _bundleBytes({
            "Cube": {
                "tags": ["demo"],
                "properties": {"color": "red"},
                "components": [{"script": "Rotate", "fields": {"speed": 90.0}}],
            },
        }),
        "HotUpdate.dll.bytes": HOT_MODULE_SOURCE,
    }
    for name, (module, instantiations) in BASE_IMAGES.items():
        payloads[name] = _imageBytes(module, instantiations)
    return payloads



@pytest.fixture()
def bootstrapConfig(tmp_path) -> BootstrapConfig:
    return BootstrapConfig.model_validate({
        "resources": {"baseLocation": str(tmp_path / "StreamingAssets")},
        "lifecycle": {"countdownStart": 3},
        "logging": {"file": None},
    })



@pytest.fixture(autouse=True)
def _dropHotModule():
    sys.modules.pop(HOT_MODULE, None)
    yield
    sys.modules.pop(HOT_MODULE, None)
