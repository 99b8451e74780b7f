"""
Synchronous wrapper for GraphClient.

This module provides a synchronous wrapper around the async GraphClient
for use in scripts, the CLI and other synchronous contexts.
"""

import asyncio
import concurrent.futures
from typing import Any, Dict, List, Optional

from gdsgraph.models import Edge, Schema, Vertex

from .client import GraphClient
from .response import ResultSet


class GraphSyncClient:
  """Synchronous wrapper around the async GraphClient."""

  def __init__(
    self,
    api_url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    **kwargs: Any,
  ):
    """Initialize sync client with async client underneath."""
    self._client = GraphClient(api_url, username, password, **kwargs)

  @classmethod
  def from_vcap_services(
    cls, vcap: Optional[str] = None, service_name: Optional[str] = None, **kwargs: Any
  ) -> "GraphSyncClient":
    """Create a client bound through VCAP_SERVICES."""
    instance = cls.__new__(cls)
    instance._client = GraphClient.from_vcap_services(vcap, service_name, **kwargs)
    return instance

  def __enter__(self):
    """Context manager entry."""
    return self

  def __exit__(self, exc_type, exc_val, exc_tb):
    """Context manager exit."""
    self.close()

  def _run_async(self, coro):
    """Run an async coroutine and return the result."""
    try:
      asyncio.get_running_loop()
    except RuntimeError:
      # No running loop, we can use asyncio.run directly
      return asyncio.run(coro)

    # Already inside an event loop: run in a worker thread with its own loop
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
      return executor.submit(asyncio.run, coro).result()

  def close(self) -> None:
    """Forget the session token."""
    self._run_async(self._client.close())

  # Proxy all methods to async client with sync wrapper

  @property
  def session(self):
    return self._client.session

  @property
  def api_url(self) -> str:
    return self._client.api_url

  def get_graph_id(self) -> str:
    """Return the id of the current graph."""
    return self._client.get_graph_id()

  def get_graphs(self) -> List[str]:
    """List the graphs of the service instance."""
    return self._run_async(self._client.get_graphs())

  def set_graph(self, graph_id: str) -> None:
    """Switch to another graph."""
    return self._run_async(self._client.set_graph(graph_id))

  def create_graph(self, graph_id: Optional[str] = None) -> str:
    """Create a graph and return its id."""
    return self._run_async(self._client.create_graph(graph_id))

  def delete_graph(self, graph_id: str) -> bool:
    """Delete a graph; False if it does not exist."""
    return self._run_async(self._client.delete_graph(graph_id))

  def get_schema(self) -> Schema:
    """Fetch the schema of the current graph."""
    return self._run_async(self._client.get_schema())

  def save_schema(self, schema: Schema) -> Schema:
    """Create or extend the schema of the current graph."""
    return self._run_async(self._client.save_schema(schema))

  def delete_index(self, index_name: str) -> bool:
    """Delete an index of the current graph."""
    return self._run_async(self._client.delete_index(index_name))

  def get_vertex(self, vertex_id: Any) -> Optional[Vertex]:
    """Fetch a vertex; None if it does not exist."""
    return self._run_async(self._client.get_vertex(vertex_id))

  def add_vertex(self, vertex: Vertex) -> Vertex:
    return self._run_async(self._client.add_vertex(vertex))

  def update_vertex(self, vertex: Vertex) -> Vertex:
    return self._run_async(self._client.update_vertex(vertex))

  def delete_vertex(self, vertex_id: Any) -> bool:
    return self._run_async(self._client.delete_vertex(vertex_id))

  def get_edge(self, edge_id: Any) -> Optional[Edge]:
    """Fetch an edge; None if it does not exist."""
    return self._run_async(self._client.get_edge(edge_id))

  def add_edge(self, edge: Edge) -> Edge:
    return self._run_async(self._client.add_edge(edge))

  def update_edge(self, edge: Edge) -> Edge:
    return self._run_async(self._client.update_edge(edge))

  def delete_edge(self, edge_id: Any) -> bool:
    return self._run_async(self._client.delete_edge(edge_id))

  def load_graphson(self, graphson: str) -> bool:
    """Load GraphSON data into the current graph."""
    return self._run_async(self._client.load_graphson(graphson))

  def load_graphson_from_file(self, filename: str) -> bool:
    """Load a GraphSON file into the current graph."""
    return self._run_async(self._client.load_graphson_from_file(filename))

  def execute_gremlin(
    self, gremlin: str, bindings: Optional[Dict[str, Any]] = None
  ) -> ResultSet:
    """Run a Gremlin traversal against the current graph."""
    return self._run_async(self._client.execute_gremlin(gremlin, bindings))
