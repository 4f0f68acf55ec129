"""Log sinks — the explicit output channel of the engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog


@runtime_checkable
class LogSink(Protocol):
    """Receives the human-readable progress lines of a run."""

    def log(self, message: str) -> None: ...


class StructlogSink:
    """Forward each line to a structlog logger at info level."""

    def __init__(self, logger_name: str = "workspace_dedupe.engine") -> None:
        self._log = structlog.get_logger(logger_name)

    def log(self, message: str) -> None:
        self._log.info(message)


class CollectingSink:
    """Record every line, optionally forwarding to an inner sink."""

    def __init__(self, inner: LogSink | None = None) -> None:
        self.messages: list[str] = []
        self._inner = inner

    def log(self, message: str) -> None:
        self.messages.append(message)
        if self._inner is not None:
            self._inner.log(message)
