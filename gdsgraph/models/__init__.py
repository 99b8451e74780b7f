"""
Pydantic models for graph elements and schemas.
"""

from .elements import Edge, Vertex, flatten_properties
from .schema import (
  Cardinality,
  DataType,
  EdgeIndex,
  EdgeLabel,
  Multiplicity,
  PropertyKey,
  Schema,
  VertexIndex,
  VertexLabel,
)

__all__ = [
  "Cardinality",
  "DataType",
  "Edge",
  "EdgeIndex",
  "EdgeLabel",
  "Multiplicity",
  "PropertyKey",
  "Schema",
  "Vertex",
  "VertexIndex",
  "VertexLabel",
  "flatten_properties",
]
