"""
Package logger for the graph client.

Importing this module configures logging once for the ``gdsgraph`` loggers
(see gdsgraph.config.logging) and exposes the shared logger instances.
"""

from typing import Optional

from .config.logging import (
  get_logger,
  log_error,
  log_http_request,
  setup_logging,
)

setup_logging()

logger = get_logger("gdsgraph")
http_logger = get_logger("gdsgraph.http")
cli_logger = get_logger("gdsgraph.cli")


def log_request(
  method: str,
  url: str,
  status_code: int,
  duration_ms: float,
  graph_id: Optional[str] = None,
) -> None:
  """Log a completed HTTP call with structured data."""
  log_http_request(http_logger, method, url, status_code, duration_ms, graph_id)


def log_client_error(
  error: Exception,
  action: str,
  metadata: Optional[dict] = None,
) -> None:
  """Log a client-side failure with context."""
  log_error(logger, error, "client", action, metadata=metadata)


__all__ = [
  "cli_logger",
  "http_logger",
  "log_client_error",
  "log_request",
  "logger",
]
