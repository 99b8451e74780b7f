"""
Centralized environment variable configuration.

This module provides a single source of truth for the environment variables
read by the graph client, with type conversions and default values.

Organization:
- Helper functions for type-safe env var access
- Core settings (environment, logging)
- Service binding (Cloud Foundry VCAP_SERVICES)
"""

import os
from typing import Optional

from .constants import DEFAULT_SERVICE_NAME, DEFAULT_TIMEOUT


# ==========================================================================
# HELPER FUNCTIONS FOR TYPE-SAFE ENVIRONMENT VARIABLE ACCESS
# ==========================================================================


def get_int_env(key: str, default: int) -> int:
  """
  Get an integer environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Integer value from environment or default
  """
  try:
    return int(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    # Use print instead of logger to avoid circular import
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_float_env(key: str, default: float) -> float:
  """
  Get a float environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Float value from environment or default
  """
  try:
    return float(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_bool_env(key: str, default: bool = False) -> bool:
  """
  Get a boolean environment variable.

  Args:
      key: Environment variable name
      default: Default value if not set

  Returns:
      Boolean value from environment or default
  """
  value = os.getenv(key, str(default)).lower()
  return value in ("true", "1", "yes", "on")


def get_str_env(key: str, default: str = "") -> str:
  """Get a string environment variable."""
  return os.getenv(key, default)


def get_optional_env(key: str) -> Optional[str]:
  """Get a string environment variable, or None when it is not defined."""
  return os.environ.get(key)


# ==========================================================================
# MAIN CONFIGURATION CLASS
# ==========================================================================


class EnvConfig:
  """
  Centralized environment variable configuration.

  Values are read once at import time. Code that needs to observe later
  changes to the environment (tests, long-running processes picking up a new
  binding) should call the helper functions directly.
  """

  # ==========================================================================
  # CORE SETTINGS
  # ==========================================================================

  ENVIRONMENT = get_str_env("ENVIRONMENT", "dev")
  LOG_LEVEL = get_optional_env("LOG_LEVEL")

  # ==========================================================================
  # SERVICE BINDING
  # ==========================================================================

  # Name of the service entry inside VCAP_SERVICES
  GRAPH_SERVICE_NAME = get_str_env("GRAPH_SERVICE_NAME", DEFAULT_SERVICE_NAME)
  GRAPH_CLIENT_TIMEOUT = get_float_env("GRAPH_CLIENT_TIMEOUT", DEFAULT_TIMEOUT)


env = EnvConfig
