"""
Graph element models.

Vertices and edges as sent to and returned by the graph service. The service
returns vertex properties in multi-property form::

  {"name": [{"id": "1xy-3c8-sl", "value": "Alice"}]}

which ``from_json`` flattens to ``{"name": "Alice"}`` (several values become a
list).
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def flatten_properties(properties: Optional[Dict[str, Any]]) -> Dict[str, Any]:
  """Collapse multi-property values into plain values."""
  if not properties:
    return {}

  flat: Dict[str, Any] = {}
  for key, value in properties.items():
    if isinstance(value, list) and value and all(
      isinstance(item, dict) and "value" in item for item in value
    ):
      values = [item["value"] for item in value]
      flat[key] = values[0] if len(values) == 1 else values
    else:
      flat[key] = value
  return flat


def _check_type(data: Dict[str, Any], expected: str) -> None:
  element_type = data.get("type")
  if element_type and element_type != expected:
    raise ValueError(f"Expected element type {expected!r}, got {element_type!r}")


class Vertex(BaseModel):
  """A vertex in the current graph."""

  model_config = ConfigDict(populate_by_name=True)

  id: Optional[Any] = Field(None, description="Service-assigned vertex id")
  label: Optional[str] = Field(None, description="Vertex label")
  properties: Dict[str, Any] = Field(
    default_factory=dict, description="Property key/value pairs"
  )

  @classmethod
  def from_json(cls, data: Dict[str, Any]) -> "Vertex":
    if not isinstance(data, dict):
      raise ValueError(f"Cannot build a vertex from {type(data).__name__}")
    _check_type(data, "vertex")
    return cls(
      id=data.get("id"),
      label=data.get("label"),
      properties=flatten_properties(data.get("properties")),
    )

  def to_payload(self) -> Dict[str, Any]:
    """Body for POST /vertices."""
    payload: Dict[str, Any] = {}
    if self.label:
      payload["label"] = self.label
    payload["properties"] = dict(self.properties)
    return payload


class Edge(BaseModel):
  """An edge between two vertices of the current graph."""

  model_config = ConfigDict(populate_by_name=True)

  id: Optional[Any] = Field(None, description="Service-assigned edge id")
  label: Optional[str] = Field(None, description="Edge label")
  out_v: Optional[Any] = Field(None, alias="outV", description="Outgoing vertex id")
  in_v: Optional[Any] = Field(None, alias="inV", description="Incoming vertex id")
  out_v_label: Optional[str] = Field(None, alias="outVLabel")
  in_v_label: Optional[str] = Field(None, alias="inVLabel")
  properties: Dict[str, Any] = Field(default_factory=dict)

  @classmethod
  def from_json(cls, data: Dict[str, Any]) -> "Edge":
    if not isinstance(data, dict):
      raise ValueError(f"Cannot build an edge from {type(data).__name__}")
    _check_type(data, "edge")
    return cls(
      id=data.get("id"),
      label=data.get("label"),
      out_v=data.get("outV"),
      in_v=data.get("inV"),
      out_v_label=data.get("outVLabel"),
      in_v_label=data.get("inVLabel"),
      properties=flatten_properties(data.get("properties")),
    )

  def to_payload(self) -> Dict[str, Any]:
    """Body for POST /edges. Label and both endpoints are required."""
    missing = [
      name
      for name, value in (("label", self.label), ("outV", self.out_v), ("inV", self.in_v))
      if value is None or value == ""
    ]
    if missing:
      raise ValueError(f"edge is missing required field(s): {', '.join(missing)}")
    return {
      "outV": self.out_v,
      "inV": self.in_v,
      "label": self.label,
      "properties": dict(self.properties),
    }
