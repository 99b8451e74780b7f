"""Tests for the session token handshake."""

import base64

import httpx
import pytest

from gdsgraph.client.response import GraphResponse, HTTPStatusInfo
from gdsgraph.client.session import GraphSession
from gdsgraph.exceptions import GraphSessionError


class TestGraphSession:
  """Test cases for GraphSession."""

  @pytest.fixture
  def session(self):
    return GraphSession("admin", "s3cret")

  def test_no_token_initially(self, session):
    assert not session.has_token
    with pytest.raises(GraphSessionError, match="No session"):
      _ = session.authorization_header

  def test_basic_auth_header(self, session):
    request = httpx.Request("GET", "https://graph.example.net/_session")
    request = next(session.basic_auth.auth_flow(request))

    expected = base64.b64encode(b"admin:s3cret").decode("ascii")
    assert request.headers["Authorization"] == f"Basic {expected}"

  def test_accept_token(self, session):
    response = GraphResponse(HTTPStatusInfo(200, "OK"), '{"gds-token": "abc123"}')

    header = session.accept(response)

    assert header == "gds-token abc123"
    assert session.has_token
    assert session.authorization_header == "gds-token abc123"

  def test_accept_rejects_error_status(self, session):
    response = GraphResponse(HTTPStatusInfo(401, "Unauthorized"), "Unauthorized")

    with pytest.raises(GraphSessionError) as exc_info:
      session.accept(response)

    assert exc_info.value.status_code == 401
    assert exc_info.value.response_data == "Unauthorized"
    assert not session.has_token

  @pytest.mark.parametrize(
    "body",
    ["", "not json", '{"token": "abc"}', '{"gds-token": ""}', '["abc"]'],
  )
  def test_accept_rejects_missing_token(self, session, body):
    response = GraphResponse(HTTPStatusInfo(200, "OK"), body)

    with pytest.raises(GraphSessionError, match="gds-token"):
      session.accept(response)

  def test_reset(self, session):
    session.accept(GraphResponse(HTTPStatusInfo(200), '{"gds-token": "abc"}'))

    session.reset()

    assert not session.has_token

  def test_repr_hides_credentials(self, session):
    session.accept(GraphResponse(HTTPStatusInfo(200), '{"gds-token": "abc"}'))

    text = repr(session)
    assert "s3cret" not in text
    assert "abc" not in text
    assert "active" in text
