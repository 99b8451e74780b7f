"""
Base Graph Client.

Shared functionality for the async and sync clients: configuration, URL
building, argument validation and mapping of failures to exceptions.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from gdsgraph.exceptions import (
  GraphClientError,
  GraphServiceError,
  GraphTimeoutError,
)
from gdsgraph.logger import logger

from .config import GraphClientConfig
from .response import GraphResponse
from .session import GraphSession


class BaseGraphClient:
  """Base class for graph service clients."""

  def __init__(
    self,
    api_url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    config: Optional[GraphClientConfig] = None,
    **kwargs: Any,
  ):
    """
    Initialize the client.

    Args:
        api_url: Service API URL, ending in the graph id
        username: Service user name
        password: Service password
        config: Client configuration (read from the environment if omitted)
        **kwargs: Additional config overrides (timeout, verify_ssl, headers,
            transport)

    Raises:
        GraphConfigurationError: If api_url or the credentials are missing
    """
    self.config = config or GraphClientConfig.from_env()

    explicit = {
      key: value
      for key, value in (
        ("api_url", api_url),
        ("username", username),
        ("password", password),
      )
      if value is not None
    }
    explicit.update(kwargs)
    if explicit:
      self.config = self.config.with_overrides(**explicit)

    self.config.validate()

    self._api_url = self.config.normalized_api_url
    self._base_url = self.config.base_url
    self._graph_id = self.config.graph_id
    self.session = GraphSession(self.config.username, self.config.password)

    logger.debug(
      f"Graph client configured for {self._base_url} (graph {self._graph_id})"
    )

  # Current graph

  @property
  def api_url(self) -> str:
    return self._api_url

  @property
  def base_url(self) -> str:
    return self._base_url

  @property
  def graph_id(self) -> str:
    return self._graph_id

  def get_graph_id(self) -> str:
    """Return the id of the graph this client operates on."""
    return self._graph_id

  def _switch_graph(self, graph_id: str) -> None:
    self._graph_id = graph_id
    self._api_url = f"{self._base_url}/{graph_id}"
    logger.info(f"Switched to graph {graph_id}")

  # URLs

  def _graph_url(self, path: str) -> str:
    """URL under the current graph."""
    if not path.startswith("/"):
      path = "/" + path
    return self._api_url + path

  def _service_url(self, path: str) -> str:
    """URL under the service, outside any graph."""
    if not path.startswith("/"):
      path = "/" + path
    return self._base_url + path

  @staticmethod
  def _segment(value: Any) -> str:
    """Quote an id for use as one path segment."""
    return quote(str(value), safe="")

  # Validation

  @staticmethod
  def _require_text(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
      raise ValueError(f"Parameter {name} is null or empty.")
    return str(value).strip()

  @staticmethod
  def _require(value: Any, name: str) -> Any:
    if value is None:
      raise ValueError(f"{name} parameter is missing")
    return value

  # Errors

  @staticmethod
  def _mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    masked = dict(headers)
    for key in list(masked):
      if key.lower() == "authorization":
        scheme = masked[key].split(" ", 1)[0]
        masked[key] = f"{scheme} ..."
    return masked

  @staticmethod
  def _convert_transport_error(error: httpx.HTTPError, url: str) -> GraphClientError:
    """Convert an httpx failure to the client exception hierarchy."""
    if isinstance(error, httpx.TimeoutException):
      return GraphTimeoutError(f"Request to {url} timed out: {error}")
    return GraphClientError(f"Error processing HTTP request to {url}: {error}")

  @staticmethod
  def _unexpected_response(message: str, response: GraphResponse) -> GraphClientError:
    """A reply the client cannot act on."""
    return GraphClientError(
      f"{message} Graph service responded with {response.describe()}.",
      status_code=response.http_status.code,
      response_data=response.json if response.is_json else response.body,
    )

  @staticmethod
  def _service_error(
    response: GraphResponse,
    message: Optional[str] = None,
  ) -> GraphServiceError:
    """An error reported by the service."""
    return GraphServiceError(
      message,
      graph_status=response.graph_status,
      http_status=response.http_status,
      response_data=response.json if response.is_json else response.body,
    )
