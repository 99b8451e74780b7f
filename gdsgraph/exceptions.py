"""
Graph Client Exceptions.

Defines the exception hierarchy for graph service operations. Two branches
matter to callers:

- GraphClientError: the client could not complete or interpret a call
  (bad configuration, failed session handshake, transport failure, a reply
  the client cannot make sense of).
- GraphServiceError: the service answered and reported an error.

Input validation failures raise the built-in ValueError before any request
is made.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
  from .client.response import GraphStatus, HTTPStatusInfo


class GraphAPIError(Exception):
  """Base exception for all graph client errors."""

  def __init__(
    self,
    message: str,
    status_code: Optional[int] = None,
    response_data: Optional[Any] = None,
  ):
    super().__init__(message)
    self.message = message
    self.status_code = status_code
    self.response_data = response_data

  def to_dict(self) -> Dict[str, Any]:
    return {
      "error": self.__class__.__name__,
      "message": self.message,
      "status_code": self.status_code,
    }


class GraphClientError(GraphAPIError):
  """
  The client encountered a fatal error.

  Examples: connection refused, unparseable reply, success reply without the
  expected payload.
  """

  pass


class GraphConfigurationError(GraphClientError):
  """Credentials or service binding are missing or invalid."""

  pass


class GraphSessionError(GraphClientError):
  """The session handshake did not yield a token."""

  pass


class GraphTimeoutError(GraphClientError):
  """Request timeout errors."""

  pass


class GraphServiceError(GraphAPIError):
  """
  The graph service reported an error.

  Carries both the HTTP status and the status the service put in the body
  (e.g. code "NotFoundError" with a message).
  """

  def __init__(
    self,
    message: Optional[str] = None,
    graph_status: Optional["GraphStatus"] = None,
    http_status: Optional["HTTPStatusInfo"] = None,
    response_data: Optional[Any] = None,
  ):
    if message is None:
      message = _describe(graph_status, http_status)
    super().__init__(
      message,
      status_code=http_status.code if http_status is not None else None,
      response_data=response_data,
    )
    self.graph_status = graph_status
    self.http_status = http_status

  @property
  def graph_code(self) -> Optional[str]:
    return self.graph_status.code if self.graph_status is not None else None

  @property
  def graph_message(self) -> Optional[str]:
    return self.graph_status.message if self.graph_status is not None else None

  def to_dict(self) -> Dict[str, Any]:
    data = super().to_dict()
    data["graph_code"] = self.graph_code
    data["graph_message"] = self.graph_message
    return data


class GraphNotFoundError(GraphServiceError):
  """The requested graph or element does not exist."""

  pass


def _describe(
  graph_status: Optional["GraphStatus"], http_status: Optional["HTTPStatusInfo"]
) -> str:
  parts = []
  if graph_status is not None and (graph_status.code or graph_status.message):
    parts.append(f"code: {graph_status.code} message: {graph_status.message}")
  if http_status is not None:
    parts.append(f"HTTP {http_status.code} {http_status.reason}".rstrip())
  if not parts:
    return "Graph service returned an error"
  return "Graph service returned an error (" + "; ".join(parts) + ")"
