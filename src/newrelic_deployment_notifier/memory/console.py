"""Console diagnostics sink for development debugging."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from newrelic_deployment_notifier.ports.diagnostics import IDiagnosticsSink

logger = logging.getLogger(__name__)


class ConsoleDiagnosticsSink(IDiagnosticsSink):
    """
    Development adapter that prints diagnostics the way a build console does.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def info(self, message: str) -> None:
        logger.info(message)
        self._write(message)

    def error(self, message: str) -> None:
        logger.error(message)
        self._write(f"ERROR: {message}")

    def fatal_error(self, message: str) -> None:
        logger.critical(message)
        self._write(f"FATAL: {message}")

    def _write(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)
