"""Logging setup and the contract for telemetry sinks."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console
from rich.logging import RichHandler


class Telemetry(Protocol):
    """Reports operational events such as generated or decoded plots."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Telemetry sink writing events as structured log records."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("landgen.telemetry")

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.info(event_name, extra={"payload": payload})


class NullTelemetry:
    def emit(self, event_name: str, payload: dict) -> None:
        return None


def configure_logging(level: str = "INFO") -> None:
    """Route ``landgen`` loggers to a rich console handler."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )
