"""
gdsgraph - client library for a remote graph database service.

Typed operations for graphs, schemas, vertices, edges, indexes, GraphSON bulk
loading and Gremlin traversals over the service's HTTP/JSON API.
"""

from .client import (
  GraphClient,
  GraphClientConfig,
  GraphResponse,
  GraphSyncClient,
  HTTPStatusInfo,
  ResultSet,
)
from .exceptions import (
  GraphAPIError,
  GraphClientError,
  GraphConfigurationError,
  GraphNotFoundError,
  GraphServiceError,
  GraphSessionError,
  GraphTimeoutError,
)
from .models import (
  Edge,
  EdgeIndex,
  EdgeLabel,
  PropertyKey,
  Schema,
  Vertex,
  VertexIndex,
  VertexLabel,
)

__version__ = "0.3.0"

__all__ = [
  "Edge",
  "EdgeIndex",
  "EdgeLabel",
  "GraphAPIError",
  "GraphClient",
  "GraphClientConfig",
  "GraphClientError",
  "GraphConfigurationError",
  "GraphNotFoundError",
  "GraphResponse",
  "GraphServiceError",
  "GraphSessionError",
  "GraphSyncClient",
  "GraphTimeoutError",
  "HTTPStatusInfo",
  "PropertyKey",
  "ResultSet",
  "Schema",
  "Vertex",
  "VertexIndex",
  "VertexLabel",
]
