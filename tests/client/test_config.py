"""Tests for GraphClientConfig."""

import json

import httpx
import pytest

from gdsgraph.client.config import GraphClientConfig
from gdsgraph.exceptions import GraphConfigurationError

API_URL = "https://graph.example.net/service/1234/g"


def _vcap(service_name="IBM Graph", **credentials):
  creds = {"apiURL": API_URL, "username": "admin", "password": "s3cret"}
  creds.update(credentials)
  return json.dumps({service_name: [{"name": "graph-1", "credentials": creds}]})


class TestGraphClientConfig:
  """Test cases for GraphClientConfig."""

  def test_default_config(self):
    config = GraphClientConfig()

    assert config.api_url == ""
    assert config.username is None
    assert config.timeout == 30
    assert config.verify_ssl is True
    assert config.headers == {}
    assert config.transport is None

  def test_password_not_in_repr(self):
    config = GraphClientConfig(api_url=API_URL, username="admin", password="s3cret")

    assert "s3cret" not in repr(config)

  def test_base_url_and_graph_id(self):
    config = GraphClientConfig(api_url=API_URL + "/")

    assert config.normalized_api_url == API_URL
    assert config.base_url == "https://graph.example.net/service/1234"
    assert config.graph_id == "g"

  def test_from_env(self, monkeypatch):
    monkeypatch.setenv("GRAPH_CLIENT_API_URL", API_URL)
    monkeypatch.setenv("GRAPH_CLIENT_USERNAME", "admin")
    monkeypatch.setenv("GRAPH_CLIENT_PASSWORD", "s3cret")
    monkeypatch.setenv("GRAPH_CLIENT_TIMEOUT", "60")
    monkeypatch.setenv("GRAPH_CLIENT_VERIFY_SSL", "false")

    config = GraphClientConfig.from_env()

    assert config.api_url == API_URL
    assert config.username == "admin"
    assert config.password == "s3cret"
    assert config.timeout == 60
    assert config.verify_ssl is False

  def test_from_env_fractional_timeout(self, monkeypatch):
    monkeypatch.setenv("GRAPH_CLIENT_TIMEOUT", "2.5")

    assert GraphClientConfig.from_env().timeout == 2.5

  def test_from_env_invalid_timeout(self, monkeypatch):
    monkeypatch.setenv("GRAPH_CLIENT_TIMEOUT", "soon")

    with pytest.raises(GraphConfigurationError, match="GRAPH_CLIENT_TIMEOUT"):
      GraphClientConfig.from_env()

  def test_from_env_custom_prefix(self, monkeypatch):
    monkeypatch.setenv("MYGRAPH_USERNAME", "reader")
    monkeypatch.setenv("MYGRAPH_VERIFY_SSL", "yes")

    config = GraphClientConfig.from_env(prefix="MYGRAPH_")

    assert config.username == "reader"
    assert config.verify_ssl is True

  def test_with_overrides(self):
    original = GraphClientConfig(api_url=API_URL, headers={"X-Trace": "1"})

    new_config = original.with_overrides(timeout=60, username="admin")

    assert original.timeout == 30
    assert original.username is None
    assert new_config.timeout == 60
    assert new_config.username == "admin"
    assert new_config.api_url == API_URL
    assert new_config.headers == {"X-Trace": "1"}
    assert new_config.headers is not original.headers

  def test_with_overrides_rejects_unknown_option(self):
    with pytest.raises(TypeError, match="max_retries"):
      GraphClientConfig().with_overrides(max_retries=3)

  def test_transport_is_kept(self):
    transport = httpx.MockTransport(lambda request: httpx.Response(200))
    config = GraphClientConfig(transport=transport).with_overrides(timeout=5)

    assert config.transport is transport


class TestFromVcapServices:
  """Test Cloud Foundry service binding."""

  def test_reads_first_binding(self):
    config = GraphClientConfig.from_vcap_services(_vcap())

    assert config.api_url == API_URL
    assert config.username == "admin"
    assert config.password == "s3cret"

  def test_reads_environment(self, monkeypatch):
    monkeypatch.setenv("VCAP_SERVICES", _vcap())

    config = GraphClientConfig.from_vcap_services(timeout=10)

    assert config.graph_id == "g"
    assert config.timeout == 10

  def test_custom_service_name(self):
    config = GraphClientConfig.from_vcap_services(
      _vcap("Graph Dev"), service_name="Graph Dev"
    )

    assert config.username == "admin"

  def test_missing_variable(self, monkeypatch):
    monkeypatch.delenv("VCAP_SERVICES", raising=False)

    with pytest.raises(GraphConfigurationError, match="VCAP_SERVICES is not defined"):
      GraphClientConfig.from_vcap_services()

  def test_missing_service_entry(self):
    with pytest.raises(GraphConfigurationError, match="no binding for service"):
      GraphClientConfig.from_vcap_services(_vcap("Other Service"))

  @pytest.mark.parametrize(
    "vcap",
    [
      "not json",
      json.dumps({"IBM Graph": [{"name": "graph-1"}]}),
      json.dumps({"IBM Graph": [{"credentials": {"apiURL": API_URL}}]}),
    ],
  )
  def test_invalid_binding(self, vcap):
    with pytest.raises(GraphConfigurationError, match="VCAP_SERVICES is invalid"):
      GraphClientConfig.from_vcap_services(vcap)


class TestValidate:
  """Test configuration validation."""

  def test_valid(self):
    GraphClientConfig(api_url=API_URL, username="admin", password="s3cret").validate()

  @pytest.mark.parametrize(
    "missing", ["api_url", "username", "password"]
  )
  def test_missing_values(self, missing):
    values = {"api_url": API_URL, "username": "admin", "password": "s3cret"}
    values[missing] = None

    with pytest.raises(GraphConfigurationError, match="are required"):
      GraphClientConfig(**values).validate()

  def test_password_not_echoed(self):
    config = GraphClientConfig(api_url="", username="admin", password="s3cret")

    with pytest.raises(GraphConfigurationError) as exc_info:
      config.validate()

    assert "s3cret" not in str(exc_info.value)
    assert "password: set" in str(exc_info.value)

  def test_rejects_non_http_url(self):
    config = GraphClientConfig(
      api_url="ftp://graph.example.net/g", username="admin", password="s3cret"
    )

    with pytest.raises(GraphConfigurationError, match="not an http"):
      config.validate()

  def test_rejects_url_without_graph(self):
    config = GraphClientConfig(
      api_url="https://graph.example.net", username="admin", password="s3cret"
    )

    with pytest.raises(GraphConfigurationError, match="does not name a graph"):
      config.validate()
