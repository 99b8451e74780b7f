"""
Session token handling.

The graph service authenticates in two phases. The client first calls
``GET {base_url}/_session`` with HTTP basic auth; the reply carries a session
token::

  {"gds-token": "c2Vzc2lvbi10b2tlbg=="}

Every later request sends ``Authorization: gds-token <token>`` instead of the
credentials. GraphSession holds the credentials and the token; the client
performs the handshake whenever no token is held.
"""

from typing import Optional

import httpx

from gdsgraph.config.constants import SESSION_TOKEN_FIELD, SESSION_TOKEN_SCHEME
from gdsgraph.exceptions import GraphSessionError
from gdsgraph.logger import logger

from .response import GraphResponse


class GraphSession:
  """Credentials plus the session token obtained from them."""

  def __init__(self, username: str, password: str):
    self._username = username
    self._password = password
    self._token: Optional[str] = None

  @property
  def username(self) -> str:
    return self._username

  @property
  def basic_auth(self) -> httpx.BasicAuth:
    """Auth for the handshake request."""
    return httpx.BasicAuth(self._username, self._password)

  @property
  def has_token(self) -> bool:
    return self._token is not None

  @property
  def authorization_header(self) -> str:
    if self._token is None:
      raise GraphSessionError("No session has been established")
    return f"{SESSION_TOKEN_SCHEME} {self._token}"

  def accept(self, response: GraphResponse) -> str:
    """
    Take the token from a handshake reply.

    Args:
        response: Reply to GET /_session

    Returns:
        The Authorization header value for subsequent requests

    Raises:
        GraphSessionError: If the reply does not carry a token
    """
    if not response.http_status.is_success():
      raise GraphSessionError(
        "Graph client cannot establish a session with the graph service: "
        f"{response.describe()}",
        status_code=response.http_status.code,
        response_data=response.body,
      )

    body = response.json
    token = body.get(SESSION_TOKEN_FIELD) if isinstance(body, dict) else None
    if not token or not isinstance(token, str):
      raise GraphSessionError(
        "Graph client cannot establish a session with the graph service: "
        f"reply has no {SESSION_TOKEN_FIELD!r} field",
        status_code=response.http_status.code,
        response_data=response.body,
      )

    self._token = token
    logger.debug(f"Established graph service session for user {self._username}")
    return self.authorization_header

  def reset(self) -> None:
    """Drop the token; the next request performs a new handshake."""
    self._token = None

  def __repr__(self) -> str:
    state = "active" if self.has_token else "none"
    return f"GraphSession(username={self._username!r}, token={state})"
