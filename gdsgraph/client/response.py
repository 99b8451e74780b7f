"""
Response normalization for graph service replies.

The service answers in several JSON shapes depending on the endpoint:

- envelope: ``{"requestId": .., "status": {"code": 200, "message": ""},
  "result": {"data": [...], "meta": {}}}``
- error: ``{"code": "NotFoundError", "message": "..."}``
- plain objects such as ``{"graphs": [...]}`` or ``{"graphId": ..}``
- an empty body

GraphResponse captures the HTTP status and raw body of one call; ResultSet
reduces any of the shapes above to a status code, a status message and an
indexed list of results.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from gdsgraph.config.constants import NOT_FOUND_CODE
from gdsgraph.exceptions import GraphClientError
from gdsgraph.models import Edge, Vertex


class HTTPStatusInfo:
  """HTTP status code and reason phrase, with status classification."""

  def __init__(self, code: int, reason: str = ""):
    if code < 100:
      raise ValueError(f"{code} is not a valid HTTP status code.")
    self.code = code
    self.reason = reason or ""

  def is_informational(self) -> bool:
    return self.code < 200

  def is_success(self) -> bool:
    return 200 <= self.code < 300

  def is_redirect(self) -> bool:
    return 300 <= self.code < 400

  def is_client_error(self) -> bool:
    return 400 <= self.code < 500

  def is_server_error(self) -> bool:
    return self.code >= 500

  def __repr__(self) -> str:
    return f"HTTPStatusInfo({self.code}, {self.reason!r})"


@dataclass
class GraphStatus:
  """Status as reported by the graph service in the response body."""

  code: Optional[str] = None
  message: Optional[str] = None


_NO_JSON = object()


class GraphResponse:
  """HTTP status and body of a single call to the graph service."""

  def __init__(self, http_status: HTTPStatusInfo, body: Optional[str] = None):
    self.http_status = http_status
    self.body = body or ""
    self._json: Any = None
    self._parsed = False
    self._result_set: Optional["ResultSet"] = None

  @property
  def json(self) -> Any:
    """Parsed body, or None when the body is empty or not JSON."""
    if not self._parsed:
      self._parsed = True
      if self.body.strip():
        try:
          self._json = json.loads(self.body)
        except ValueError:
          self._json = _NO_JSON
      else:
        self._json = _NO_JSON
    return None if self._json is _NO_JSON else self._json

  @property
  def is_json(self) -> bool:
    return self.json is not None

  @property
  def graph_status(self) -> GraphStatus:
    return GraphStatus(self.result_set.status_code, self.result_set.status_message)

  @property
  def result_set(self) -> "ResultSet":
    if self._result_set is None:
      self._result_set = ResultSet(self)
    return self._result_set

  def describe(self) -> str:
    """One-line summary for error messages."""
    return (
      f'HTTP code "{self.http_status.code}" and message body "{self.body}"'
    )

  def __repr__(self) -> str:
    return f"GraphResponse({self.http_status.code}, body={self.body[:200]!r})"


class ResultSet:
  """
  Normalized view of a graph service reply.

  Attributes:
      status_code: Service status code (e.g. "200", "NotFoundError"), or the
          HTTP status code when the body carries none
      status_message: Service status message, or the HTTP reason phrase
      results: Returned data items
  """

  def __init__(self, response: GraphResponse):
    self.http_status = response.http_status
    self.status_code: str = str(response.http_status.code)
    self.status_message: str = response.http_status.reason
    self.results: List[Any] = []
    self._has_service_code = False

    body = response.json
    if body is None:
      if response.body.strip():
        self.status_message = (
          f"{self.status_message}: {response.body.strip()}"
          if self.status_message
          else response.body.strip()
        )
      return

    if isinstance(body, dict) and isinstance(body.get("status"), dict) and (
      "result" in body
    ):
      self._load_envelope(body)
    elif isinstance(body, dict) and "code" in body and "message" in body:
      self.status_code = str(body["code"])
      self.status_message = str(body["message"] or "")
      self._has_service_code = True
    elif isinstance(body, list):
      self.results = list(body)
    else:
      self.results = [body]

  def _load_envelope(self, body: Dict[str, Any]) -> None:
    status = body["status"]
    if status.get("code") is not None:
      self.status_code = str(status["code"])
      self._has_service_code = True
    if status.get("message"):
      self.status_message = str(status["message"])

    result = body.get("result")
    data = result.get("data") if isinstance(result, dict) else result
    if isinstance(data, list):
      self.results = data
    elif data is not None:
      self.results = [data]

  # Status

  @property
  def has_results(self) -> bool:
    return len(self.results) > 0

  @property
  def is_not_found(self) -> bool:
    if self.status_code.lower() == NOT_FOUND_CODE.lower():
      return True
    return self.http_status.code == 404 and not self._has_service_code

  def __len__(self) -> int:
    return len(self.results)

  def __iter__(self) -> Iterator[Any]:
    return iter(self.results)

  def __bool__(self) -> bool:
    return True

  # Indexed access

  def get_result(self, index: int) -> Any:
    if index < 0 or index >= len(self.results):
      raise IndexError(
        f"result index {index} out of range (result set has {len(self.results)})"
      )
    return self.results[index]

  def get_result_as_dict(self, index: int) -> Dict[str, Any]:
    result = self.get_result(index)
    if not isinstance(result, dict):
      raise GraphClientError(
        f"Result {index} is a {type(result).__name__}, not a JSON object"
      )
    return result

  def get_result_as_bool(self, index: int) -> bool:
    result = self.get_result(index)
    if isinstance(result, bool):
      return result
    if isinstance(result, str) and result.lower() in ("true", "false"):
      return result.lower() == "true"
    raise GraphClientError(f"Result {index} is not a boolean: {result!r}")

  def get_result_as_str(self, index: int) -> str:
    result = self.get_result(index)
    if isinstance(result, (dict, list)):
      return json.dumps(result)
    if isinstance(result, bool):
      return "true" if result else "false"
    return str(result)

  def get_result_as_vertex(self, index: int) -> Vertex:
    try:
      return Vertex.from_json(self.get_result_as_dict(index))
    except ValueError as e:
      raise GraphClientError(f"Result {index} is not a vertex: {e}") from e

  def get_result_as_edge(self, index: int) -> Edge:
    try:
      return Edge.from_json(self.get_result_as_dict(index))
    except ValueError as e:
      raise GraphClientError(f"Result {index} is not an edge: {e}") from e

  def to_dict(self) -> Dict[str, Any]:
    return {
      "status_code": self.status_code,
      "status_message": self.status_message,
      "results": self.results,
    }

  def __repr__(self) -> str:
    return (
      f"ResultSet(status_code={self.status_code!r}, "
      f"status_message={self.status_message!r}, results={len(self.results)})"
    )
