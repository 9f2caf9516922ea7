# hotboot/app/paths.py
from __future__ import annotations
from pathlib import Path



# Root directory structure constants
PACKAGE_DIR = Path(__file__).resolve().parent.parent # hotboot/
USER_SETTINGS_PATH = Path("~/.hotboot/hotboot.json5")



def streamingAssetsDir() -> Path:
    """Default location of downloadable resources: ./StreamingAssets under the working directory."""
    return Path.cwd() / "StreamingAssets"
