"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from gdsgraph.models import (
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


class TestSchemaElements:
  """Test individual schema elements."""

  def test_property_key_defaults(self):
    key = PropertyKey(name="name", data_type=DataType.STRING)

    assert key.data_type == "String"
    assert key.cardinality == "SINGLE"

  def test_property_key_alias(self):
    key = PropertyKey.model_validate(
      {"name": "tags", "dataType": "String", "cardinality": "SET"}
    )

    assert key.cardinality == Cardinality.SET.value

  def test_property_key_rejects_unknown_type(self):
    with pytest.raises(ValidationError):
      PropertyKey(name="when", data_type="Date")

  def test_name_is_stripped(self):
    assert VertexLabel(name="  person ").name == "person"

  @pytest.mark.parametrize("name", ["", "   "])
  def test_empty_name(self, name):
    with pytest.raises(ValidationError, match="name cannot be empty"):
      VertexLabel(name=name)

  def test_edge_label_multiplicity(self):
    assert EdgeLabel(name="knows").multiplicity == "MULTI"
    assert (
      EdgeLabel(name="married", multiplicity=Multiplicity.ONE2ONE).multiplicity
      == "ONE2ONE"
    )

  def test_index_defaults(self):
    index = VertexIndex(name="vByName", property_keys=["name"])

    assert index.composite is True
    assert index.unique is False
    assert index.index_only is None

  def test_index_needs_property_keys(self):
    with pytest.raises(ValidationError, match="at least one property key"):
      EdgeIndex(name="eBySince", property_keys=[])

  def test_unique_index_must_be_composite(self):
    with pytest.raises(ValidationError, match="unique indexes must be composite"):
      VertexIndex(name="vByName", property_keys=["name"], composite=False, unique=True)


class TestSchema:
  """Test the Schema model."""

  WIRE = {
    "propertyKeys": [
      {"name": "name", "dataType": "String", "cardinality": "SINGLE"},
      {"name": "since", "dataType": "Integer", "cardinality": "SINGLE"},
    ],
    "vertexLabels": [{"name": "person"}],
    "edgeLabels": [{"name": "knows", "multiplicity": "MULTI"}],
    "vertexIndexes": [
      {
        "name": "vByName",
        "propertyKeys": ["name"],
        "composite": True,
        "unique": True,
        "indexOnly": "person",
      }
    ],
    "edgeIndexes": [
      {
        "name": "eBySince",
        "propertyKeys": ["since"],
        "composite": False,
        "unique": False,
      }
    ],
  }

  def test_from_json(self):
    schema = Schema.from_json(self.WIRE)

    assert [key.name for key in schema.property_keys] == ["name", "since"]
    assert schema.vertex_indexes[0].index_only == "person"
    assert schema.edge_indexes[0].composite is False
    assert schema.get_property_key("since").data_type == "Integer"
    assert schema.get_property_key("missing") is None

  def test_payload_matches_wire_format(self):
    assert Schema.from_json(self.WIRE).to_payload() == self.WIRE

  def test_payload_omits_unset_index_only(self):
    schema = Schema(vertex_indexes=[VertexIndex(name="v", property_keys=["name"])])

    assert "indexOnly" not in schema.to_payload()["vertexIndexes"][0]

  def test_empty_schema(self):
    schema = Schema()

    assert schema.is_empty()
    assert schema.to_payload() == {
      "propertyKeys": [],
      "vertexLabels": [],
      "edgeLabels": [],
      "vertexIndexes": [],
      "edgeIndexes": [],
    }

  def test_missing_sections_default_to_empty(self):
    schema = Schema.from_json({"vertexLabels": [{"name": "person"}]})

    assert not schema.is_empty()
    assert schema.property_keys == []

  def test_duplicate_names_rejected(self):
    with pytest.raises(ValidationError, match="duplicate name 'person'"):
      Schema(vertex_labels=[VertexLabel(name="person"), VertexLabel(name="person")])

  def test_same_name_in_different_sections(self):
    schema = Schema(
      vertex_labels=[VertexLabel(name="knows")],
      edge_labels=[EdgeLabel(name="knows")],
    )

    assert len(schema.edge_labels) == 1

  def test_from_json_rejects_non_object(self):
    with pytest.raises(ValueError):
      Schema.from_json([])
