"""Telemetry: logging setup."""

from prehistoric_db.shared.telemetry.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
