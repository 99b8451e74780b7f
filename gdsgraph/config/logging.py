"""
Structured Logging Configuration for the graph client.

Output depends on the ENVIRONMENT setting:
- dev: human-readable console output, DEBUG unless LOG_LEVEL overrides
- test: WARNING and above only, for clean test runs
- staging/prod: one JSON object per line, errors to stderr
"""

import json
import logging
import logging.config
import traceback
from datetime import datetime, timezone
from typing import Any

from gdsgraph.config.env import EnvConfig

APP_LOGGERS = ("gdsgraph", "gdsgraph.http", "gdsgraph.cli")


class StructuredFormatter(logging.Formatter):
  """
  JSON formatter producing one searchable object per record.

  Optional fields are only emitted when present on the record, so callers
  attach them through ``extra={...}``.
  """

  OPTIONAL_FIELDS = (
    "action",
    "method",
    "url",
    "graph_id",
    "status_code",
    "duration_ms",
    "metadata",
  )

  def format(self, record: logging.LogRecord) -> str:
    log_entry = {
      "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
      .replace(tzinfo=None)
      .isoformat()
      + "Z",
      "level": record.levelname,
      "component": getattr(record, "component", record.name),
      "message": record.getMessage(),
    }

    for field_name in self.OPTIONAL_FIELDS:
      if hasattr(record, field_name):
        log_entry[field_name] = getattr(record, field_name)

    if record.levelno >= logging.ERROR:
      if record.exc_info:
        log_entry["error"] = {
          "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
          "message": str(record.exc_info[1]) if record.exc_info[1] else "",
          "traceback": traceback.format_exception(*record.exc_info),
        }
      if hasattr(record, "error_category"):
        log_entry["error_category"] = record.error_category

    return json.dumps(log_entry, default=str, separators=(",", ":"))


class LevelBandFilter:
  """
  Route records by level band.

  "errors" keeps ERROR and above, "operational" keeps INFO and WARNING,
  "debug" keeps DEBUG only.
  """

  def __init__(self, band: str):
    self.band = band

  def filter(self, record: logging.LogRecord) -> bool:
    if self.band == "errors":
      return record.levelno >= logging.ERROR
    elif self.band == "operational":
      return logging.INFO <= record.levelno < logging.ERROR
    elif self.band == "debug":
      return record.levelno == logging.DEBUG
    return True


def get_logging_config(environment: str | None = None) -> dict[str, Any]:
  """Build the dictConfig for the given (or configured) environment."""
  env = environment or EnvConfig.ENVIRONMENT
  log_level_override = getattr(EnvConfig, "LOG_LEVEL", None)

  if env == "prod":
    default_level = "INFO"
    enable_debug = False
  elif env == "staging":
    default_level = "INFO"
    enable_debug = True
  elif env == "test":
    default_level = "WARNING"
    enable_debug = False
  else:  # dev
    default_level = log_level_override or "DEBUG"
    enable_debug = default_level == "DEBUG"

  app_handlers = ["errors", "operational"] if env != "dev" else ["console"]

  config: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
      "structured": {
        "()": StructuredFormatter,
      },
      "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
    },
    "filters": {
      "errors_filter": {"()": LevelBandFilter, "band": "errors"},
      "operational_filter": {"()": LevelBandFilter, "band": "operational"},
      "debug_filter": {"()": LevelBandFilter, "band": "debug"},
    },
    "handlers": {
      "errors": {
        "class": "logging.StreamHandler",
        "level": "ERROR",
        "formatter": "structured",
        "filters": ["errors_filter"],
        "stream": "ext://sys.stderr",
      },
      "operational": {
        "class": "logging.StreamHandler",
        "level": "INFO",
        "formatter": "structured",
        "filters": ["operational_filter"],
        "stream": "ext://sys.stdout",
      },
      "console": {
        "class": "logging.StreamHandler",
        "level": default_level,
        "formatter": "simple",
        "stream": "ext://sys.stderr",
      },
    },
    "loggers": {
      name: {
        "level": default_level,
        "handlers": list(app_handlers),
        "propagate": False,
      }
      for name in APP_LOGGERS
    },
  }

  # httpx logs every request at INFO; the client already does
  config["loggers"]["httpx"] = {"level": "WARNING"}
  config["loggers"]["httpcore"] = {"level": "WARNING"}

  if enable_debug and env != "dev":
    config["handlers"]["debug"] = {
      "class": "logging.StreamHandler",
      "level": "DEBUG",
      "formatter": "structured",
      "filters": ["debug_filter"],
      "stream": "ext://sys.stdout",
    }
    for name in APP_LOGGERS:
      config["loggers"][name]["handlers"].append("debug")

  return config


def setup_logging(environment: str | None = None) -> None:
  """Initialize structured logging configuration."""
  logging.config.dictConfig(get_logging_config(environment))


def get_logger(name: str) -> logging.Logger:
  return logging.getLogger(name)


def log_http_request(
  logger: logging.Logger,
  method: str,
  url: str,
  status_code: int,
  duration_ms: float,
  graph_id: str | None = None,
) -> None:
  """Log a completed call to the graph service."""
  extra = {
    "component": "http",
    "action": "request_completed",
    "method": method,
    "url": url,
    "status_code": status_code,
    "duration_ms": duration_ms,
  }
  if graph_id:
    extra["graph_id"] = graph_id

  level = logging.WARNING if status_code >= 500 else logging.DEBUG
  logger.log(
    level, f"{method} {url} - {status_code} ({duration_ms:.2f}ms)", extra=extra
  )


def log_error(
  logger: logging.Logger,
  error: Exception,
  component: str,
  action: str,
  error_category: str = "client",
  metadata: dict[str, Any] | None = None,
) -> None:
  """Log an error with structured context."""
  logger.error(
    f"Error in {component}.{action}: {error!s}",
    exc_info=True,
    extra={
      "component": component,
      "action": action,
      "error_category": error_category,
      "metadata": metadata or {},
    },
  )
