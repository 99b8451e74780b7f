import json
import os

# Quiet logging for the whole run; must be set before gdsgraph is imported
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest

from gdsgraph.client.config import GraphClientConfig

TEST_BASE_URL = "https://graph.example.net/service/1234"
TEST_GRAPH_ID = "g"
TEST_API_URL = f"{TEST_BASE_URL}/{TEST_GRAPH_ID}"
TEST_TOKEN = "c2Vzc2lvbi10b2tlbg=="


def envelope(data, code=200, message=""):
  """Service reply in the status/result envelope."""
  return {
    "requestId": "a1b2c3",
    "status": {"code": code, "message": message, "attributes": {}},
    "result": {"data": data, "meta": {}},
  }


class FakeGraphService:
  """
  In-memory stand-in for the graph service.

  Routes are registered per (method, path) and answered in order; the session
  handshake is answered automatically unless a test overrides it.
  """

  def __init__(self):
    self.requests = []
    self.routes = {}
    self.session_calls = 0
    self.route("GET", "/service/1234/_session", json={"gds-token": TEST_TOKEN})

  def route(self, method, path, status_code=200, json=None, text=None):
    self.routes[(method, path)] = (status_code, json, text)
    return self

  def handler(self, request: httpx.Request) -> httpx.Response:
    self.requests.append(request)
    if request.url.path == "/service/1234/_session":
      self.session_calls += 1

    key = (request.method, request.url.path)
    if key not in self.routes:
      return httpx.Response(404, json={"code": "NotFoundError", "message": "no route"})

    status_code, body, text = self.routes[key]
    if body is not None:
      return httpx.Response(status_code, json=body)
    return httpx.Response(status_code, text=text or "")

  @property
  def last_request(self) -> httpx.Request:
    return self.requests[-1]

  def last_json(self):
    return json.loads(self.last_request.content)


@pytest.fixture
def service():
  return FakeGraphService()


@pytest.fixture
def client_config(service):
  return GraphClientConfig(
    api_url=TEST_API_URL,
    username="admin",
    password="s3cret",
    transport=httpx.MockTransport(service.handler),
  )
