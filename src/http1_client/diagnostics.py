"""
Diagnostic hook for http1_client.

The protocol code never talks to a logger directly. It reports its
decision points (request serialized, headers received, body decoded)
through a DiagnosticHook, which by default forwards to the standard
logging module.
"""

import logging
from typing import List, Tuple

from typing_extensions import Protocol

logger = logging.getLogger("http1_client")


class DiagnosticHook(Protocol):
    """Callable receiving a logging level and a message."""

    def __call__(self, level: int, message: str) -> None:
        ...


def log_diagnostic(level: int, message: str) -> None:
    """Default hook: forward the message to the http1_client logger."""
    logger.log(level, message)


class DiagnosticRecorder:
    """
    Hook that keeps every reported message in memory.

    Useful in tests and for callers that want to attach the
    protocol trace of a single exchange to their own error reports.
    """

    def __init__(self) -> None:
        self.records: List[Tuple[int, str]] = []

    def __call__(self, level: int, message: str) -> None:
        self.records.append((level, message))

    def messages(self, level: int = logging.NOTSET) -> List[str]:
        """Return the recorded messages at or above level."""
        return [message for lvl, message in self.records if lvl >= level]
