"""
Protocol constants for the graph service REST API.

These values are fixed by the remote service and should not be changed
without a matching change on the server side.
"""

import re

# Session handshake
SESSION_PATH = "/_session"
SESSION_TOKEN_FIELD = "gds-token"
SESSION_TOKEN_SCHEME = "gds-token"

# Graph management
GRAPHS_PATH = "/_graphs"
GRAPH_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

# Bulk loading
MAX_GRAPHSON_BYTES = 10 * 1024 * 1024  # 10 MiB
GRAPHSON_FIELD = "graphson"

# Every traversal runs against a fresh traversal source bound to `g`
GREMLIN_PRELUDE = "def g = graph.traversal(); "

# Status code the service reports when an element does not exist
NOT_FOUND_CODE = "NotFoundError"

# Client defaults
DEFAULT_TIMEOUT = 30.0
DEFAULT_SERVICE_NAME = "IBM Graph"
