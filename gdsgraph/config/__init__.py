"""
Configuration package for the graph client.

Provides environment access, protocol constants and logging setup.
"""

from .constants import (
  DEFAULT_SERVICE_NAME,
  DEFAULT_TIMEOUT,
  GRAPH_ID_PATTERN,
  MAX_GRAPHSON_BYTES,
  NOT_FOUND_CODE,
)
from .env import EnvConfig, env

__all__ = [
  "DEFAULT_SERVICE_NAME",
  "DEFAULT_TIMEOUT",
  "GRAPH_ID_PATTERN",
  "MAX_GRAPHSON_BYTES",
  "NOT_FOUND_CODE",
  "EnvConfig",
  "env",
]
