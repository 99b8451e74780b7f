"""
Graph schema models.

A schema is the set of property keys, vertex labels, edge labels and indexes
defined for a graph. Schemas are additive on the server: posting a schema
creates the new elements and ignores ones that already exist, even when their
definition changed.

Wire format (camelCase)::

  {
    "propertyKeys": [{"name": "name", "dataType": "String", "cardinality": "SINGLE"}],
    "vertexLabels": [{"name": "person"}],
    "edgeLabels": [{"name": "knows", "multiplicity": "MULTI"}],
    "vertexIndexes": [{"name": "vByName", "propertyKeys": ["name"],
                       "composite": true, "unique": false}],
    "edgeIndexes": []
  }
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DataType(str, Enum):
  STRING = "String"
  INTEGER = "Integer"
  FLOAT = "Float"
  BOOLEAN = "Boolean"


class Cardinality(str, Enum):
  SINGLE = "SINGLE"
  LIST = "LIST"
  SET = "SET"


class Multiplicity(str, Enum):
  MULTI = "MULTI"
  SIMPLE = "SIMPLE"
  MANY2ONE = "MANY2ONE"
  ONE2MANY = "ONE2MANY"
  ONE2ONE = "ONE2ONE"


class _SchemaElement(BaseModel):
  model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

  name: str = Field(..., description="Element name")

  @field_validator("name")
  @classmethod
  def validate_name(cls, v):
    if not v or not v.strip():
      raise ValueError("name cannot be empty")
    return v.strip()


class PropertyKey(_SchemaElement):
  """A property key and the type of values it holds."""

  data_type: DataType = Field(..., alias="dataType")
  cardinality: Cardinality = Field(Cardinality.SINGLE, validate_default=True)


class VertexLabel(_SchemaElement):
  """A label vertices may carry."""


class EdgeLabel(_SchemaElement):
  """A label edges may carry."""

  multiplicity: Multiplicity = Field(Multiplicity.MULTI, validate_default=True)


class _Index(_SchemaElement):
  property_keys: List[str] = Field(..., alias="propertyKeys")
  composite: bool = Field(True, description="Composite (exact match) index")
  unique: bool = Field(False, description="Enforce uniqueness")
  index_only: Optional[str] = Field(
    None, alias="indexOnly", description="Restrict the index to one label"
  )

  @field_validator("property_keys")
  @classmethod
  def validate_property_keys(cls, v):
    if not v:
      raise ValueError("an index needs at least one property key")
    if any(not key or not key.strip() for key in v):
      raise ValueError("property key names cannot be empty")
    return v

  @model_validator(mode="after")
  def validate_unique_is_composite(self):
    if self.unique and not self.composite:
      raise ValueError(f"index {self.name}: unique indexes must be composite")
    return self


class VertexIndex(_Index):
  """An index over vertex properties."""


class EdgeIndex(_Index):
  """An index over edge properties."""


class Schema(BaseModel):
  """Property keys, labels and indexes of a graph."""

  model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

  property_keys: List[PropertyKey] = Field(default_factory=list, alias="propertyKeys")
  vertex_labels: List[VertexLabel] = Field(default_factory=list, alias="vertexLabels")
  edge_labels: List[EdgeLabel] = Field(default_factory=list, alias="edgeLabels")
  vertex_indexes: List[VertexIndex] = Field(
    default_factory=list, alias="vertexIndexes"
  )
  edge_indexes: List[EdgeIndex] = Field(default_factory=list, alias="edgeIndexes")

  @model_validator(mode="after")
  def validate_unique_names(self):
    for field_name in (
      "property_keys",
      "vertex_labels",
      "edge_labels",
      "vertex_indexes",
      "edge_indexes",
    ):
      seen = set()
      for element in getattr(self, field_name):
        if element.name in seen:
          raise ValueError(f"duplicate name {element.name!r} in {field_name}")
        seen.add(element.name)
    return self

  @classmethod
  def from_json(cls, data: Dict[str, Any]) -> "Schema":
    if not isinstance(data, dict):
      raise ValueError(f"Cannot build a schema from {type(data).__name__}")
    return cls.model_validate(data)

  def to_payload(self) -> Dict[str, Any]:
    """Body for POST /schema."""
    return self.model_dump(by_alias=True, exclude_none=True)

  def get_property_key(self, name: str) -> Optional[PropertyKey]:
    return next((key for key in self.property_keys if key.name == name), None)

  def is_empty(self) -> bool:
    return not (
      self.property_keys
      or self.vertex_labels
      or self.edge_labels
      or self.vertex_indexes
      or self.edge_indexes
    )
