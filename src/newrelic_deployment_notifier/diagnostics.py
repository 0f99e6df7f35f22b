"""Diagnostics sink backed by the standard logging module."""

from __future__ import annotations

import logging

from .ports.diagnostics import IDiagnosticsSink


class LoggingDiagnosticsSink(IDiagnosticsSink):
    """
    Forwards build diagnostics to a logger.

    Fatal errors are logged at CRITICAL.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("newrelic_deployment_notifier.console")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def fatal_error(self, message: str) -> None:
        self.logger.critical(message)
