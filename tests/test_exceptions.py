"""
Test the graph client exception hierarchy.

Callers rely on two branches: GraphClientError for failures on the client
side and GraphServiceError for errors the service reported.
"""

import pytest

from gdsgraph.client.response import GraphStatus, HTTPStatusInfo
from gdsgraph.exceptions import (
  GraphAPIError,
  GraphClientError,
  GraphConfigurationError,
  GraphNotFoundError,
  GraphServiceError,
  GraphSessionError,
  GraphTimeoutError,
)


class TestGraphAPIError:
  """Test the base GraphAPIError class."""

  def test_attributes(self):
    error = GraphAPIError("boom", status_code=502, response_data={"x": 1})

    assert str(error) == "boom"
    assert error.message == "boom"
    assert error.status_code == 502
    assert error.response_data == {"x": 1}

  def test_to_dict(self):
    error = GraphClientError("cannot connect")

    assert error.to_dict() == {
      "error": "GraphClientError",
      "message": "cannot connect",
      "status_code": None,
    }


class TestHierarchy:
  """Test the inheritance structure."""

  @pytest.mark.parametrize(
    "error_class",
    [GraphConfigurationError, GraphSessionError, GraphTimeoutError],
  )
  def test_client_side_errors(self, error_class):
    assert issubclass(error_class, GraphClientError)
    assert issubclass(error_class, GraphAPIError)
    assert not issubclass(error_class, GraphServiceError)

  def test_not_found_is_service_error(self):
    assert issubclass(GraphNotFoundError, GraphServiceError)
    assert not issubclass(GraphServiceError, GraphClientError)

  def test_catch_all_with_base(self):
    with pytest.raises(GraphAPIError):
      raise GraphTimeoutError("timed out")


class TestGraphServiceError:
  """Test errors reported by the service."""

  def test_carries_both_statuses(self):
    error = GraphServiceError(
      "The schema could not be saved.",
      graph_status=GraphStatus("SchemaViolation", "bad data type"),
      http_status=HTTPStatusInfo(400, "Bad Request"),
    )

    assert error.message == "The schema could not be saved."
    assert error.status_code == 400
    assert error.graph_code == "SchemaViolation"
    assert error.graph_message == "bad data type"
    assert error.to_dict()["graph_code"] == "SchemaViolation"

  def test_default_message_describes_statuses(self):
    error = GraphServiceError(
      graph_status=GraphStatus("NotFoundError", "Vertex 4 not found"),
      http_status=HTTPStatusInfo(404, "Not Found"),
    )

    assert "code: NotFoundError message: Vertex 4 not found" in str(error)
    assert "HTTP 404 Not Found" in str(error)

  def test_default_message_without_statuses(self):
    error = GraphServiceError()

    assert str(error) == "Graph service returned an error"
    assert error.status_code is None
    assert error.graph_code is None
    assert error.graph_message is None
