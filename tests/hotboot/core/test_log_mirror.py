# tests/hotboot/core/test_log_mirror.py
from __future__ import annotations

import logging

from hotboot.core.logging import LogMirrorHandler, logContext, getLogContext
from hotboot.core.logging.formatters import DevFormatter


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("hotboot.test", logging.INFO, __file__, 1, msg, None, None)


def test_mirror_splits_multiline_messages():
    mirror = LogMirrorHandler(maxLines=10, maxLineLength=120)
    mirror.emit(_record("first\nsecond"))
    assert mirror.lines() == ["first", "second"]
    assert mirror.text() == "first\nsecond"


def test_mirror_wraps_long_lines():
    mirror = LogMirrorHandler(maxLines=10, maxLineLength=4)
    mirror.emit(_record("abcdefghij"))
    assert mirror.lines() == ["abcd", "efgh", "ij"]


def test_mirror_keeps_only_newest_lines():
    mirror = LogMirrorHandler(maxLines=3, maxLineLength=120)
    for idx in range(5):
        mirror.emit(_record(f"line {idx}"))
    assert mirror.lines() == ["line 2", "line 3", "line 4"]


def test_mirror_reconfigure_shrinks_buffer():
    mirror = LogMirrorHandler(maxLines=5, maxLineLength=120)
    for idx in range(5):
        mirror.emit(_record(str(idx)))
    mirror.configure(maxLines=2, maxLineLength=120)
    assert mirror.lines() == ["3", "4"]


def test_log_context_is_scoped_and_rendered():
    formatter = DevFormatter()
    with logContext(phase="fetch", resource="prefabs"):
        assert getLogContext() == {"phase": "fetch", "resource": "prefabs"}
        rendered = formatter.format(_record("hello"))
    assert rendered == "INFO: [hotboot.test] hello [fetch/prefabs]"
    assert not getLogContext()


def test_configure_logging_installs_console_file_and_mirror(tmp_path):
    import json

    from hotboot.app.config import LoggingConfig
    from hotboot.core.logging import configureLogging, getLogMirror

    root = logging.getLogger()
    savedHandlers, savedLevel = list(root.handlers), root.level
    logFile = tmp_path / "bootstrap.log"
    mirror = getLogMirror()
    mirror.clear()
    try:
        configureLogging(LoggingConfig(devModeEnabled=False, file=str(logFile)))
        assert root.level == logging.INFO
        assert mirror in root.handlers

        with logContext(phase="patch", resource="mscorlib.dll.bytes"):
            logging.getLogger("hotboot.test").info("Loaded %s", "math")
        logging.getLogger("hotboot.test").debug("hidden")

        for handler in root.handlers:
            handler.flush()
        entries = [json.loads(line) for line in logFile.read_text(encoding="utf-8").splitlines()]
        assert [entry["msg"] for entry in entries] == ["Loaded math"]
        assert entries[0]["level"] == "info"
        assert entries[0]["ctx"] == {"phase": "patch", "resource": "mscorlib.dll.bytes"}
        assert mirror.lines() == ["Loaded math"]
        assert logging.getLogger("httpx").propagate is False
    finally:
        for handler in root.handlers:
            if handler not in savedHandlers and handler is not mirror:
                handler.close()
        root.handlers[:] = savedHandlers
        root.setLevel(savedLevel)
        mirror.clear()
