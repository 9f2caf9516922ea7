# hotboot/core/logging/handlers.py
from __future__ import annotations
from collections import deque
import logging
import threading

DEFAULT_MAX_LINES = 50
DEFAULT_MAX_LINE_LENGTH = 120



class LogMirrorHandler(logging.Handler):
    """
    Keeps the tail of the log as display lines for an on-screen overlay.

    - Multi-line messages are split on newlines
    - Lines longer than `maxLineLength` are wrapped into several display lines
    - Only the newest `maxLines` display lines are kept
    """
    def __init__(self, *, maxLines: int = DEFAULT_MAX_LINES, maxLineLength: int = DEFAULT_MAX_LINE_LENGTH):
        super().__init__()
        self._maxLineLength = max(1, int(maxLineLength))
        self._lines: deque[str] = deque(maxlen=max(1, int(maxLines)))
        self._linesLock = threading.Lock()
        self.setFormatter(logging.Formatter("%(message)s"))

    def configure(self, *, maxLines: int, maxLineLength: int) -> None:
        with self._linesLock:
            self._maxLineLength = max(1, int(maxLineLength))
            self._lines = deque(self._lines, maxlen=max(1, int(maxLines)))

    def emit(self, record: logging.LogRecord):
        try:
            rendered = self.format(record)
        except Exception:
            self.handleError(record)
            return

        with self._linesLock:
            for line in rendered.split("\n"):
                if len(line) <= self._maxLineLength:
                    self._lines.append(line)
                    continue
                for start in range(0, len(line), self._maxLineLength):
                    self._lines.append(line[start:start + self._maxLineLength])

    def lines(self) -> list[str]:
        with self._linesLock:
            return list(self._lines)

    def text(self) -> str:
        """Buffer as one string, newest line last (what the overlay draws)."""
        return "\n".join(self.lines())

    def clear(self) -> None:
        with self._linesLock:
            self._lines.clear()



# Singleton accessor
__logMirror = LogMirrorHandler()



def getLogMirror() -> LogMirrorHandler:
    return __logMirror
