# src/sketchtabs/utils/log.py
import sys
from typing import List, Protocol


class Log(Protocol):
    """Sink for human-readable messages. Must never raise into the caller."""

    def log(self, message: str) -> None:
        ...


class StderrLog:
    """Default sink: one line per message on stderr."""

    def log(self, message: str) -> None:
        # No stderr at all under pythonw or a detached process
        if sys.stderr is not None:
            print(message, file=sys.stderr)


class MemoryLog:
    """Keeps messages in memory, handy for tests."""

    def __init__(self):
        self.messages: List[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)

    def __contains__(self, fragment: str) -> bool:
        return any(fragment in m for m in self.messages)
