"""
Graph Client Configuration.

Connection settings for a single graph service instance. The api_url names
both the service and the graph the client starts on: for
``https://graph.example.net/service/1234/g`` the base_url is
``https://graph.example.net/service/1234`` and the graph_id is ``g``.
"""

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

import httpx

from gdsgraph.config.constants import DEFAULT_SERVICE_NAME, DEFAULT_TIMEOUT
from gdsgraph.config.env import get_optional_env
from gdsgraph.exceptions import GraphConfigurationError


@dataclass
class GraphClientConfig:
  """Configuration for graph service clients."""

  # Connection settings
  api_url: str = ""
  username: Optional[str] = None
  password: Optional[str] = field(default=None, repr=False)
  timeout: float = DEFAULT_TIMEOUT

  # Request settings
  headers: Dict[str, str] = field(default_factory=dict)
  verify_ssl: bool = True

  # Custom transport (e.g. httpx.MockTransport); None uses the network
  transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)

  @classmethod
  def from_env(cls, prefix: str = "GRAPH_CLIENT_") -> "GraphClientConfig":
    """
    Create configuration from environment variables.

    Args:
        prefix: Environment variable prefix

    Returns:
        GraphClientConfig instance

    Raises:
        GraphConfigurationError: If a numeric variable does not parse
    """
    config = cls()

    env_mappings = {
      "api_url": "API_URL",
      "username": "USERNAME",
      "password": "PASSWORD",
      "timeout": "TIMEOUT",
      "verify_ssl": "VERIFY_SSL",
    }

    for attr, env_suffix in env_mappings.items():
      value = get_optional_env(prefix + env_suffix)
      if value is None:
        continue

      attr_type = type(getattr(config, attr))
      if attr_type is bool:
        setattr(config, attr, value.lower() in ("true", "1", "yes"))
      elif attr_type in (int, float):
        try:
          setattr(config, attr, float(value))
        except ValueError as e:
          raise GraphConfigurationError(
            f"Invalid value {value!r} for {prefix + env_suffix}"
          ) from e
      else:
        setattr(config, attr, value)

    return config

  @classmethod
  def from_vcap_services(
    cls,
    vcap: Optional[str] = None,
    service_name: str = DEFAULT_SERVICE_NAME,
    **overrides: Any,
  ) -> "GraphClientConfig":
    """
    Create configuration from a Cloud Foundry service binding.

    Credentials are taken from the first entry bound under service_name.

    Args:
        vcap: VCAP_SERVICES JSON; read from the environment when omitted
        service_name: Name of the service entry
        **overrides: Other config values (timeout, verify_ssl, ...)

    Raises:
        GraphConfigurationError: If the binding is missing or invalid
    """
    if vcap is None:
      vcap = get_optional_env("VCAP_SERVICES")
    if vcap is None:
      raise GraphConfigurationError(
        "Graph client cannot be initialized. "
        "Environment variable VCAP_SERVICES is not defined."
      )

    try:
      services = json.loads(vcap)
      bindings = services.get(service_name) if isinstance(services, dict) else None
      if not bindings:
        raise GraphConfigurationError(
          f"Graph client cannot be initialized. "
          f"VCAP_SERVICES has no binding for service {service_name!r}."
        )
      credentials = bindings[0]["credentials"]
      config = cls(
        api_url=credentials["apiURL"],
        username=credentials["username"],
        password=credentials["password"],
      )
    except GraphConfigurationError:
      raise
    except (ValueError, KeyError, IndexError, TypeError) as e:
      raise GraphConfigurationError(
        f"Graph client cannot be initialized. VCAP_SERVICES is invalid: {e}"
      ) from e

    return config.with_overrides(**overrides) if overrides else config

  def with_overrides(self, **kwargs: Any) -> "GraphClientConfig":
    """
    Create a new config with overridden values.

    Args:
        **kwargs: Values to override

    Returns:
        New GraphClientConfig instance
    """
    known = {f.name for f in fields(self)}
    unknown = set(kwargs) - known
    if unknown:
      raise TypeError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
    changes: Dict[str, Any] = {"headers": self.headers.copy()}
    changes.update(kwargs)
    return replace(self, **changes)

  @property
  def normalized_api_url(self) -> str:
    return (self.api_url or "").strip().rstrip("/")

  @property
  def base_url(self) -> str:
    """Service URL without the graph segment."""
    url = self.normalized_api_url
    return url[: url.rfind("/")] if "/" in url else ""

  @property
  def graph_id(self) -> str:
    url = self.normalized_api_url
    return url[url.rfind("/") + 1 :] if "/" in url else ""

  def validate(self) -> None:
    """
    Check that credentials and api_url are usable.

    Raises:
        GraphConfigurationError: If anything is missing
    """
    if not self.api_url or not self.username or not self.password:
      raise GraphConfigurationError(
        "Graph client cannot be initialized. apiURL, username and password are "
        f"required (apiURL: {self.api_url or None}, username: "
        f"{self.username or None}, password: {'set' if self.password else None})"
      )

    try:
      url = httpx.URL(self.normalized_api_url)
    except httpx.InvalidURL as e:
      raise GraphConfigurationError(f"apiURL {self.api_url!r} is invalid: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
      raise GraphConfigurationError(f"apiURL {self.api_url!r} is not an http(s) URL")
    if url.path in ("", "/") or not self.graph_id:
      raise GraphConfigurationError(
        f"apiURL {self.api_url!r} does not name a graph (expected .../<graph id>)"
      )
