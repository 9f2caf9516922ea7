# hotboot/app/settings.py
from __future__ import annotations
import json5, os
from pydantic import JsonValue
from pathlib import Path
from typing import cast
from functools import lru_cache

from hotboot.app.paths import PACKAGE_DIR, USER_SETTINGS_PATH

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_DEFAULT_PATH", "SETTINGS_ENV_VAR", "SETTINGS", "loadUserSettings",
    "loadSettings", "deepMerge",
]


SETTINGS_DEFAULT_PATH = PACKAGE_DIR / "settings_default.json5"
SETTINGS_ENV_VAR = "HOTBOOT_SETTINGS"
# Anything missing here is filled in by the defaults on hotboot.app.config models
SETTINGS: JsonValue = (
    json5.loads(SETTINGS_DEFAULT_PATH.read_text(encoding="utf-8"))
    if SETTINGS_DEFAULT_PATH.exists()
    else {"__source": "BUILTIN_DEFAULTS"}
)



def _readSettingsFile(filePath: Path) -> JsonValue:
    if not filePath.exists():
        return {}
    try:
        return json5.loads(filePath.read_text(encoding="utf-8"))
    except Exception as err:
        logger.error("Failed to parse '%s': %s", filePath, err)
    return {}



def loadUserSettings() -> JsonValue:
    """
    User overrides: ~/.hotboot/hotboot.json5 first, then the file named by
    $HOTBOOT_SETTINGS on top of it.
    """
    merged = _readSettingsFile(USER_SETTINGS_PATH.expanduser())
    envPath = os.environ.get(SETTINGS_ENV_VAR, "").strip()
    if envPath:
        merged = deepMerge(merged, _readSettingsFile(Path(envPath).expanduser()))
    return merged



@lru_cache(maxsize=1)
def loadSettings() -> JsonValue:
    return deepMerge(SETTINGS, loadUserSettings())



def deepMerge(first: JsonValue, second: JsonValue) -> JsonValue:
    """
    Returns a new JsonValue where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are JSON objects (dicts).
    For all other JSON types (lists, strings, numbers, booleans, null),
    the right-hand value `second` replaces `first`.
    """
    if isinstance(first, dict) and isinstance(second, dict):
        out: dict[str, JsonValue] = {}
        for key, value in first.items():
            out[key] = cast(JsonValue, value)
        for key, value in second.items():
            if key in out:
                out[key] = deepMerge(out[key], cast(JsonValue, value))
            else:
                out[key] = cast(JsonValue, value)
        return cast(JsonValue, out)

    # If not both dicts, replace with right-hand side
    return cast(JsonValue, second)
