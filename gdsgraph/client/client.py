"""
Asynchronous Graph Client.

Provides an asynchronous interface to a graph service instance: graph
management, schema, vertices, edges, indexes, GraphSON bulk loading and
Gremlin traversals.

Each request opens its own HTTP connection; the only state kept between
requests is the session token and the current graph.
"""

import os
import time
from typing import Any, Dict, List, Optional

import httpx

from gdsgraph.config.constants import (
  GRAPH_ID_PATTERN,
  GRAPHS_PATH,
  GRAPHSON_FIELD,
  GREMLIN_PRELUDE,
  MAX_GRAPHSON_BYTES,
  SESSION_PATH,
)
from gdsgraph.exceptions import (
  GraphClientError,
  GraphNotFoundError,
  GraphServiceError,
  GraphSessionError,
)
from gdsgraph.logger import log_client_error, log_request, logger
from gdsgraph.models import Edge, Schema, Vertex

from .base import BaseGraphClient
from .config import GraphClientConfig
from .response import GraphResponse, GraphStatus, HTTPStatusInfo, ResultSet


class GraphClient(BaseGraphClient):
  """Asynchronous client for graph service operations."""

  def __init__(
    self,
    api_url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    config: Optional[GraphClientConfig] = None,
    **kwargs: Any,
  ):
    """
    Initialize asynchronous graph client.

    Args:
        api_url: Service API URL, ending in the graph id
        username: Service user name
        password: Service password
        config: Client configuration
        **kwargs: Additional config overrides
    """
    super().__init__(api_url, username, password, config, **kwargs)

  @classmethod
  def from_vcap_services(
    cls, vcap: Optional[str] = None, service_name: Optional[str] = None, **kwargs: Any
  ) -> "GraphClient":
    """Create a client bound through VCAP_SERVICES."""
    if service_name is None:
      from gdsgraph.config import env

      service_name = env.GRAPH_SERVICE_NAME
    config = GraphClientConfig.from_vcap_services(vcap, service_name)
    return cls(config=config, **kwargs)

  async def __aenter__(self):
    """Async context manager entry."""
    return self

  async def __aexit__(self, exc_type, exc_val, exc_tb):
    """Async context manager exit."""
    await self.close()

  async def close(self):
    """Forget the session token."""
    self.session.reset()

  # ------------------------------------------------------------------
  # HTTP plumbing
  # ------------------------------------------------------------------

  def _open_http(self) -> httpx.AsyncClient:
    return httpx.AsyncClient(
      timeout=httpx.Timeout(self.config.timeout),
      headers=self.config.headers,
      verify=self.config.verify_ssl,
      transport=self.config.transport,
    )

  async def _send(
    self,
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    auth: Optional[httpx.Auth] = None,
    log_body: bool = True,
    **request_kwargs: Any,
  ) -> GraphResponse:
    """
    Issue one HTTP request on a fresh connection.

    log_body=False keeps the reply body out of the debug log (the session
    handshake reply carries the token).

    Raises:
        GraphClientError: If the request could not be completed
    """
    start_time = time.time()
    try:
      async with self._open_http() as http:
        response = await http.request(
          method, url, headers=headers, auth=auth, **request_kwargs
        )
    except httpx.HTTPError as e:
      log_client_error(e, "http_request", {"method": method, "url": url})
      raise self._convert_transport_error(e, url) from e

    duration_ms = (time.time() - start_time) * 1000
    log_request(method, url, response.status_code, duration_ms, self._graph_id)
    logger.debug(
      f"Response received from {url} = {response.status_code} "
      f"{response.reason_phrase} {response.text if log_body else '<redacted>'}"
    )

    return GraphResponse(
      HTTPStatusInfo(response.status_code, response.reason_phrase), response.text
    )

  async def _init_session(self) -> None:
    """Exchange the credentials for a session token."""
    url = self._service_url(SESSION_PATH)
    try:
      response = await self._send(
        "GET", url, auth=self.session.basic_auth, log_body=False
      )
    except GraphClientError as e:
      raise GraphSessionError(
        f"Graph client cannot establish a session with the graph service: {e}"
      ) from e

    try:
      self.session.accept(response)
    except GraphSessionError as e:
      log_client_error(e, "init_session", {"status_code": e.status_code})
      raise

  async def _request(
    self,
    method: str,
    url: str,
    json_data: Optional[Any] = None,
    files: Optional[Dict[str, Any]] = None,
  ) -> GraphResponse:
    """
    Make an authenticated request, establishing a session first if needed.

    Args:
        method: HTTP method
        url: Absolute URL
        json_data: JSON body
        files: Multipart parts

    Returns:
        GraphResponse for this request
    """
    if not self.session.has_token:
      await self._init_session()

    headers = {
      "Authorization": self.session.authorization_header,
      "Accept": "application/json",
    }
    request_kwargs: Dict[str, Any] = {}
    if json_data is not None:
      request_kwargs["json"] = json_data
    elif files is not None:
      request_kwargs["files"] = files
    elif method in ("POST", "PUT"):
      request_kwargs["content"] = b""
      headers["Content-Type"] = "application/json"

    logger.debug(
      f"Making HTTP {method} request to {url}; headers={self._mask_headers(headers)}"
      + (f"; payload={json_data}" if json_data is not None else "")
    )
    return await self._send(method, url, headers=headers, **request_kwargs)

  # ------------------------------------------------------------------
  # Graphs
  # ------------------------------------------------------------------

  async def get_graphs(self) -> List[str]:
    """
    List the graphs defined in this service instance.

    Returns:
        Graph ids that can be switched to with set_graph

    Raises:
        GraphServiceError: If the service returned an error
    """
    response = await self._request("GET", self._service_url(GRAPHS_PATH))
    if not response.http_status.is_success():
      raise self._service_error(response)

    # {"graphs": ["g", "1ab2...", ...]}
    body = response.json
    if isinstance(body, dict) and isinstance(body.get("graphs"), list):
      return [str(graph_id) for graph_id in body["graphs"]]
    return []

  async def set_graph(self, graph_id: str) -> None:
    """
    Switch to the graph identified by graph_id.

    Raises:
        ValueError: If graph_id is empty
        GraphNotFoundError: If no graph with that id exists
    """
    graph_id = self._require_text(graph_id, "graphId")
    if graph_id not in await self.get_graphs():
      raise GraphNotFoundError(f"No graph with name {graph_id} is defined.")
    self._switch_graph(graph_id)

  async def create_graph(self, graph_id: Optional[str] = None) -> str:
    """
    Create a graph.

    Args:
        graph_id: Id for the new graph (lowercase letters, digits, "_" and
            "-", starting with a letter or digit). A unique id is assigned
            when omitted.

    Returns:
        The id of the new graph

    Raises:
        ValueError: If graph_id is not a valid graph id
        GraphServiceError: If the graph could not be created
    """
    url = self._service_url(GRAPHS_PATH)
    if graph_id is not None and graph_id.strip():
      graph_id = graph_id.strip()
      if not GRAPH_ID_PATTERN.match(graph_id):
        raise ValueError(
          f"Invalid graph id {graph_id!r}: must match {GRAPH_ID_PATTERN.pattern}"
        )
      url += f"/{graph_id}"

    logger.debug(f"createGraph {graph_id}")
    response = await self._request("POST", url)
    if not response.http_status.is_success():
      raise self._service_error(response)

    # {"graphId": "g1", "dbUrl": "https://.../g1"}
    body = response.json
    if isinstance(body, dict) and body.get("graphId"):
      return str(body["graphId"])
    raise self._unexpected_response(
      "The reply cannot be processed. No graph id was returned.", response
    )

  async def delete_graph(self, graph_id: str) -> bool:
    """
    Delete a graph.

    Returns:
        True if the graph was deleted, False if it does not exist

    Raises:
        ValueError: If graph_id is empty
        GraphClientError: If the service answered with anything else
    """
    graph_id = self._require_text(graph_id, "graphId")
    url = self._service_url(f"{GRAPHS_PATH}/{self._segment(graph_id)}")
    response = await self._request("DELETE", url)
    if response.http_status.is_success():
      return True
    if response.http_status.code == 404:
      logger.debug(f"Graph {graph_id} not found; nothing to delete")
      return False
    raise self._unexpected_response("The graph could not be deleted.", response)

  # ------------------------------------------------------------------
  # Schema
  # ------------------------------------------------------------------

  async def get_schema(self) -> Schema:
    """
    Fetch the schema of the current graph.

    Raises:
        GraphServiceError: If the service returned an error
        GraphClientError: If the reply carries no schema
    """
    response = await self._request("GET", self._graph_url("/schema"))
    if not response.http_status.is_success():
      raise self._service_error(response)

    rs = response.result_set
    if not rs.has_results:
      raise self._unexpected_response("The schema could not be read.", response)
    return self._parse_schema(rs, response)

  async def save_schema(self, schema: Schema) -> Schema:
    """
    Create or extend the schema of the current graph.

    Elements that already exist are left unchanged by the service.

    Returns:
        The schema as stored by the service

    Raises:
        ValueError: If schema is None
        GraphServiceError: If the service rejected the schema
        GraphClientError: On any other failure
    """
    self._require(schema, "schema")
    response = await self._request(
      "POST", self._graph_url("/schema"), json_data=schema.to_payload()
    )
    if response.http_status.is_success():
      rs = response.result_set
      if not rs.has_results:
        raise self._unexpected_response("The schema reply cannot be processed.", response)
      return self._parse_schema(rs, response)

    if response.http_status.is_client_error():
      raise self._service_error(response, "The schema could not be saved.")
    raise self._unexpected_response("The schema could not be saved.", response)

  def _parse_schema(self, rs: ResultSet, response: GraphResponse) -> Schema:
    try:
      return Schema.from_json(rs.get_result_as_dict(0))
    except ValueError as e:
      raise self._unexpected_response(f"The schema is invalid: {e}.", response) from e

  # ------------------------------------------------------------------
  # Indexes
  # ------------------------------------------------------------------

  async def delete_index(self, index_name: str) -> bool:
    """
    Delete an index of the current graph.

    Returns:
        True if the index was removed

    Raises:
        ValueError: If index_name is empty
        GraphClientError: If the index could not be deleted
    """
    index_name = self._require_text(index_name, "indexName")
    url = self._graph_url(f"/index/{self._segment(index_name)}")
    response = await self._request("DELETE", url)
    if not response.http_status.is_success():
      raise self._unexpected_response("The index could not be deleted.", response)

    rs = response.result_set
    if not rs.has_results:
      raise self._unexpected_response(
        "The index delete reply cannot be processed.", response
      )
    return rs.get_result_as_bool(0)

  # ------------------------------------------------------------------
  # Vertices
  # ------------------------------------------------------------------

  async def get_vertex(self, vertex_id: Any) -> Optional[Vertex]:
    """
    Fetch a vertex of the current graph.

    Returns:
        The vertex, or None if no vertex with that id exists

    Raises:
        ValueError: If vertex_id is None
        GraphServiceError: On any error other than "not found"
    """
    self._require(vertex_id, "id")
    url = self._graph_url(f"/vertices/{self._segment(vertex_id)}")
    rs = await self._element_call("GET", url, allow_not_found=True)
    return rs.get_result_as_vertex(0) if rs is not None else None

  async def add_vertex(self, vertex: Vertex) -> Vertex:
    """
    Add a vertex to the current graph.

    Returns:
        The vertex as created by the service, including its id
    """
    self._require(vertex, "vertex")
    url = self._graph_url("/vertices")
    rs = await self._element_call("POST", url, json_data=vertex.to_payload())
    return rs.get_result_as_vertex(0)

  async def update_vertex(self, vertex: Vertex) -> Vertex:
    """
    Replace the properties of an existing vertex.

    Labels and ids cannot be changed.

    Raises:
        ValueError: If vertex is None or has no id
    """
    self._require(vertex, "vertex")
    if vertex.id is None:
      raise ValueError("vertex parameter does not contain the id property")
    url = self._graph_url(f"/vertices/{self._segment(vertex.id)}")
    rs = await self._element_call("PUT", url, json_data={"properties": vertex.properties})
    return rs.get_result_as_vertex(0)

  async def delete_vertex(self, vertex_id: Any) -> bool:
    """
    Remove a vertex from the current graph.

    Returns:
        True if the vertex was removed
    """
    self._require(vertex_id, "id")
    url = self._graph_url(f"/vertices/{self._segment(vertex_id)}")
    return await self._delete_element(url)

  # ------------------------------------------------------------------
  # Edges
  # ------------------------------------------------------------------

  async def get_edge(self, edge_id: Any) -> Optional[Edge]:
    """
    Fetch an edge of the current graph.

    Returns:
        The edge, or None if no edge with that id exists
    """
    self._require(edge_id, "id")
    url = self._graph_url(f"/edges/{self._segment(edge_id)}")
    rs = await self._element_call("GET", url, allow_not_found=True)
    return rs.get_result_as_edge(0) if rs is not None else None

  async def add_edge(self, edge: Edge) -> Edge:
    """Add an edge to the current graph."""
    self._require(edge, "edge")
    url = self._graph_url("/edges")
    rs = await self._element_call("POST", url, json_data=edge.to_payload())
    return rs.get_result_as_edge(0)

  async def update_edge(self, edge: Edge) -> Edge:
    """
    Replace the properties of an existing edge.

    The label and the incident vertices cannot be changed.
    """
    self._require(edge, "edge")
    if edge.id is None:
      raise ValueError("edge parameter does not contain the id property")
    url = self._graph_url(f"/edges/{self._segment(edge.id)}")
    rs = await self._element_call("PUT", url, json_data={"properties": edge.properties})
    return rs.get_result_as_edge(0)

  async def delete_edge(self, edge_id: Any) -> bool:
    """Remove an edge from the current graph."""
    self._require(edge_id, "id")
    url = self._graph_url(f"/edges/{self._segment(edge_id)}")
    return await self._delete_element(url)

  async def _element_call(
    self,
    method: str,
    url: str,
    json_data: Optional[Dict[str, Any]] = None,
    allow_not_found: bool = False,
  ) -> Optional[ResultSet]:
    """
    Call a vertex or edge endpoint and check the reply.

    Returns:
        The result set of a successful reply with at least one result, or
        None for a "not found" reply when allow_not_found is set

    Raises:
        GraphServiceError: On any other reply
    """
    rs = (await self._request(method, url, json_data=json_data)).result_set
    if rs.http_status.is_success() and rs.has_results:
      return rs
    if allow_not_found and rs.is_not_found:
      return None
    raise self._element_error(method, url, rs)

  async def _delete_element(self, url: str) -> bool:
    rs = (await self._request("DELETE", url)).result_set
    if rs.http_status.is_success() and rs.has_results:
      return rs.get_result_as_bool(0)
    return False

  def _element_error(self, method: str, url: str, rs: ResultSet) -> GraphServiceError:
    logger.debug(f"{method} {url} result set info: {rs!r}")
    return GraphServiceError(
      f"{method} {url} API call returned code: {rs.status_code} "
      f"message: {rs.status_message}",
      graph_status=GraphStatus(rs.status_code, rs.status_message),
      http_status=rs.http_status,
    )

  # ------------------------------------------------------------------
  # Bulk load
  # ------------------------------------------------------------------

  async def load_graphson(self, graphson: str) -> bool:
    """
    Load GraphSON data into the current graph.

    Args:
        graphson: GraphSON document (at most 10 MiB)

    Returns:
        True if the service reports the data as loaded
    """
    if graphson is None or not graphson.strip():
      raise ValueError("graphson parameter is missing or empty.")
    if len(graphson.encode("utf-8")) > MAX_GRAPHSON_BYTES:
      raise ValueError("graphson parameter value exceeds maximum length (10MB).")

    files = {
      GRAPHSON_FIELD: ("graphson.json", graphson.encode("utf-8"), "application/json")
    }
    return await self._load_graphson_parts(files)

  async def load_graphson_from_file(self, filename: str) -> bool:
    """
    Load a GraphSON file into the current graph.

    Raises:
        ValueError: If the file is missing, unreadable or larger than 10 MiB
    """
    if filename is None or not str(filename).strip():
      raise ValueError("filename parameter is missing or empty.")
    if not os.path.isfile(filename) or not os.access(filename, os.R_OK):
      raise ValueError(f"File {filename} was not found or cannot be read.")
    if os.path.getsize(filename) > MAX_GRAPHSON_BYTES:
      raise ValueError(
        f"File {filename} is larger than 10MB and can therefore not be processed."
      )

    with open(filename, "rb") as graphson_file:
      files = {
        GRAPHSON_FIELD: (
          os.path.basename(filename),
          graphson_file.read(),
          "application/json",
        )
      }
    return await self._load_graphson_parts(files)

  async def _load_graphson_parts(self, files: Dict[str, Any]) -> bool:
    url = self._graph_url("/bulkload/graphson/")
    rs = (await self._request("POST", url, files=files)).result_set
    if rs.status_code == "200" and rs.has_results:
      return rs.get_result_as_str(0) == "true"
    logger.warning(f"GraphSON load was not accepted: {rs!r}")
    return False

  # ------------------------------------------------------------------
  # Gremlin
  # ------------------------------------------------------------------

  async def execute_gremlin(
    self, gremlin: str, bindings: Optional[Dict[str, Any]] = None
  ) -> ResultSet:
    """
    Run a Gremlin traversal against the current graph.

    The traversal source is available as ``g``.

    Args:
        gremlin: The traversal, e.g. ``g.V().has("name", name)``
        bindings: Values for variables used in the traversal

    Returns:
        ResultSet with the traversal results
    """
    if gremlin is None or not gremlin.strip():
      raise ValueError("gremlin parameter is null or empty.")

    logger.debug(f'Executing gremlin "{gremlin}" bindings: {bindings}')
    payload: Dict[str, Any] = {"gremlin": f"{GREMLIN_PRELUDE}{gremlin}"}
    if bindings:
      payload["bindings"] = bindings

    response = await self._request("POST", self._graph_url("/gremlin"), json_data=payload)
    return response.result_set
