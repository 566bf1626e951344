# tests/test_parser.py
import math

import pytest
import yaml

from phasorsim_core.schematic import (
    SchematicParser, SchemaValidationError, ParsingError,
    Schematic, ConnectionPoint, Wire,
)
from phasorsim_core.components import GraphicalKind


@pytest.fixture
def parser():
    return SchematicParser()


@pytest.fixture
def rc_yaml():
    return """
name: RC Low Pass
nodes:
  - {id: V1, type: voltage_source, value: 5 V, phase: 30}
  - {id: R1, type: resistor, value: 4.7 kohm}
  - {id: C1, type: capacitor, value: 10 uF}
  - {id: GND, type: ground}
edges:
  - {id: e1, source: V1, source_handle: left, target: R1, target_handle: left}
  - {source: R1, source_handle: right, target: C1, target_handle: left}
  - {source: C1, source_handle: right, target: GND, target_handle: top}
  - {source: V1, source_handle: right, target: GND, target_handle: top}
analysis:
  frequency: 1 kHz
  method: superposition
"""


class TestValidDocuments:

    def test_parse_yaml_file(self, parser, rc_yaml, tmp_path):
        path = tmp_path / "rc.yaml"
        path.write_text(rc_yaml)
        schematic = parser.parse_file(path)

        assert isinstance(schematic, Schematic)
        assert schematic.name == "RC Low Pass"
        assert schematic.source_path == path.resolve()
        assert [n.node_id for n in schematic.nodes] == ["V1", "R1", "C1", "GND"]
        assert schematic.analysis == {"frequency": "1 kHz", "method": "superposition"}

    def test_method_label_is_case_insensitive(self, parser):
        document = {"nodes": [], "analysis": {"frequency": 10, "method": " Superposition "}}
        schematic = parser.parse_document(document)
        assert schematic.analysis["method"] == "superposition"

    def test_unit_strings_are_converted_to_si(self, parser, rc_yaml):
        schematic = parser.parse_document(yaml.safe_load(rc_yaml))
        nodes = schematic.node_by_id()
        assert nodes["V1"].value == pytest.approx(5.0)
        assert nodes["V1"].phase_deg == 30.0
        assert nodes["R1"].value == pytest.approx(4700.0)
        assert nodes["C1"].value == pytest.approx(1e-5)
        assert nodes["GND"].kind is GraphicalKind.GROUND

    def test_plain_numbers_are_si(self, parser):
        schematic = parser.parse_document({"nodes": [{"id": "L1", "type": "inductor", "value": 0.002}]})
        assert schematic.nodes[0].value == 0.002
        assert schematic.name == "schematic"

    def test_wires(self, parser, rc_yaml):
        schematic = parser.parse_document(yaml.safe_load(rc_yaml))
        assert schematic.wires[0] == Wire(ConnectionPoint("V1", "left"), ConnectionPoint("R1", "left"), "e1")
        assert len(schematic.wires) == 4

    def test_op_amp_needs_no_value(self, parser):
        schematic = parser.parse_document({"nodes": [{"id": "U1", "type": "op_amp"}]})
        assert schematic.nodes[0].value == 0.0

    def test_edges_are_optional(self, parser):
        schematic = parser.parse_document({"nodes": [{"id": "GND", "type": "ground"}]})
        assert schematic.wires == ()


class TestSchemaErrors:

    def test_unknown_kind(self, parser):
        with pytest.raises(SchemaValidationError) as excinfo:
            parser.parse_document({"nodes": [{"id": "Q1", "type": "transistor"}]})
        assert any(key.startswith("nodes") for key in excinfo.value.errors)

    def test_duplicate_ids(self, parser):
        document = {"nodes": [
            {"id": "R1", "type": "resistor", "value": 1},
            {"id": "R1", "type": "resistor", "value": 2},
        ]}
        with pytest.raises(SchemaValidationError, match="Duplicate"):
            parser.parse_document(document)

    def test_invalid_identifier(self, parser):
        with pytest.raises(SchemaValidationError, match="invalid"):
            parser.parse_document({"nodes": [{"id": "R 1", "type": "resistor", "value": 1}]})

    def test_unknown_handle(self, parser):
        document = {
            "nodes": [{"id": "R1", "type": "resistor", "value": 1}, {"id": "GND", "type": "ground"}],
            "edges": [{"source": "R1", "source_handle": "middle", "target": "GND", "target_handle": "top"}],
        }
        with pytest.raises(SchemaValidationError) as excinfo:
            parser.parse_document(document)
        assert any("source_handle" in key for key in excinfo.value.errors)

    def test_missing_value(self, parser):
        with pytest.raises(SchemaValidationError) as excinfo:
            parser.parse_document({"nodes": [{"id": "R1", "type": "resistor"}]})
        assert "nodes.0.value" in excinfo.value.errors

    def test_unknown_top_level_key(self, parser):
        with pytest.raises(SchemaValidationError):
            parser.parse_document({"nodes": [], "components": []})

    def test_unknown_method(self, parser):
        document = {"nodes": [], "analysis": {"frequency": 10, "method": "laplace"}}
        with pytest.raises(SchemaValidationError):
            parser.parse_document(document)

    def test_report_lists_fields(self, parser):
        with pytest.raises(SchemaValidationError) as excinfo:
            parser.parse_document({"nodes": [{"id": "R1", "type": "resistor"}]})
        report = excinfo.value.get_diagnostic_report()
        assert "Schematic Schema Validation Error" in report
        assert "nodes.0.value" in report


class TestValueErrors:

    def test_wrong_dimension(self, parser):
        with pytest.raises(ParsingError) as excinfo:
            parser.parse_document({"nodes": [{"id": "C1", "type": "capacitor", "value": "10 ohm"}]})
        assert excinfo.value.user_input == "10 ohm"
        assert "C1" in excinfo.value.details

    def test_unknown_unit(self, parser):
        with pytest.raises(ParsingError):
            parser.parse_document({"nodes": [{"id": "R1", "type": "resistor", "value": "5 blorbs"}]})

    def test_dimensionless_string_is_si(self, parser):
        schematic = parser.parse_document({"nodes": [{"id": "R1", "type": "resistor", "value": "1e3"}]})
        assert schematic.nodes[0].value == pytest.approx(1000.0)

    def test_nan_value_passes_schema(self, parser):
        schematic = parser.parse_document({"nodes": [{"id": "R1", "type": "resistor", "value": float("nan")}]})
        assert math.isnan(schematic.nodes[0].value)


class TestFileErrors:

    def test_missing_file(self, parser, tmp_path):
        with pytest.raises(ParsingError, match="not found"):
            parser.parse_file(tmp_path / "missing.yaml")

    def test_empty_file(self, parser, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ParsingError, match="empty"):
            parser.parse_file(path)

    def test_invalid_yaml(self, parser, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("nodes: [unclosed")
        with pytest.raises(ParsingError, match="Invalid YAML"):
            parser.parse_file(path)

    def test_root_must_be_mapping(self, parser, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ParsingError, match="dictionary"):
            parser.parse_file(path)
