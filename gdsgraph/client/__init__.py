"""
Graph Client - Async client for a remote graph service.

This module provides an asynchronous client (and a synchronous wrapper) for
a graph database service exposed over HTTP/JSON.
"""

from .client import GraphClient
from .config import GraphClientConfig
from .response import GraphResponse, GraphStatus, HTTPStatusInfo, ResultSet
from .session import GraphSession
from .sync_client import GraphSyncClient

__all__ = [
  "GraphClient",
  "GraphClientConfig",
  "GraphResponse",
  "GraphSession",
  "GraphStatus",
  "GraphSyncClient",
  "HTTPStatusInfo",
  "ResultSet",
]
