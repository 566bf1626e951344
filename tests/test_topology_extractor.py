# tests/test_topology_extractor.py
import pytest

from phasorsim_core import ComponentKind, GraphicalKind, HANDLES
from phasorsim_core.topology import TopologyExtractor, TopologyError
from phasorsim_core.schematic import ConnectionPoint
from tests.conftest import SchematicBuilder, build_voltage_divider


def extract(schematic, frequency_hz=1000.0):
    return TopologyExtractor(schematic).extract(frequency_hz)


class TestLabelAssignment:

    def test_divider_labels_follow_discovery_order(self):
        results = extract(build_voltage_divider())
        netlist = results.netlist
        assert netlist.nodes == ("1", "0", "2")
        assert netlist.reference_node == "0"
        assert netlist.unknown_nodes == ("1", "2")

        comps = netlist.component_map()
        assert (comps["V1"].node_pos, comps["V1"].node_neg) == ("1", "0")
        assert (comps["R1"].node_pos, comps["R1"].node_neg) == ("1", "2")
        assert (comps["R2"].node_pos, comps["R2"].node_neg) == ("2", "0")

    def test_ground_and_junction_symbols_are_not_components(self):
        schematic = (
            SchematicBuilder()
            .add("R1", "resistor", 100.0)
            .add("J1", "junction")
            .add("GND", "ground")
            .wire("R1", "right", "J1", "left")
            .wire("J1", "bottom", "GND", "top")
            .build()
        )
        netlist = extract(schematic).netlist
        assert [c.component_id for c in netlist.components] == ["R1"]
        assert netlist.components[0].node_neg == "0"

    def test_every_electrical_point_is_labelled(self):
        results = extract(build_voltage_divider())
        for node_id in ("V1", "R1", "R2", "GND"):
            for handle in HANDLES:
                assert ConnectionPoint(node_id, handle) in results.point_labels

    def test_frequency_is_carried_by_netlist(self):
        netlist = extract(build_voltage_divider(), frequency_hz=50.0).netlist
        assert netlist.frequency_hz == 50.0


class TestTerminalMerging:

    @pytest.mark.parametrize("kind", ["resistor", "capacitor", "inductor", "voltage_source", "current_source"])
    def test_two_terminal_handles_merge_into_two_nodes(self, kind):
        schematic = SchematicBuilder().add("X1", kind, 1.0).add("GND", "ground").build()
        labels = extract(schematic).point_labels
        assert labels[ConnectionPoint("X1", "left")] == labels[ConnectionPoint("X1", "top")]
        assert labels[ConnectionPoint("X1", "right")] == labels[ConnectionPoint("X1", "bottom")]
        assert labels[ConnectionPoint("X1", "left")] != labels[ConnectionPoint("X1", "right")]

    def test_wire_on_top_handle_is_the_positive_terminal(self):
        schematic = (
            SchematicBuilder()
            .add("V1", "voltage_source", 5.0)
            .add("R1", "resistor", 10.0)
            .add("GND", "ground")
            .wire("V1", "left", "R1", "top")
            .wire("R1", "bottom", "GND", "top")
            .wire("V1", "right", "GND", "top")
            .build()
        )
        comps = extract(schematic).netlist.component_map()
        assert comps["R1"].node_pos == comps["V1"].node_pos
        assert comps["R1"].node_neg == "0"

    def test_ground_symbol_shorts_all_handles(self):
        schematic = SchematicBuilder().add("GND", "ground").build()
        labels = extract(schematic).point_labels
        assert {labels[ConnectionPoint("GND", h)] for h in HANDLES} == {"0"}

    def test_multiple_grounds_are_one_reference(self):
        schematic = (
            SchematicBuilder()
            .add("R1", "resistor", 10.0)
            .add("G1", "ground")
            .add("G2", "ground")
            .wire("R1", "left", "G1", "top")
            .wire("R1", "right", "G2", "bottom")
            .build()
        )
        results = extract(schematic)
        assert results.ground_node_ids == ("G1", "G2")
        r1 = results.netlist.components[0]
        assert r1.node_pos == r1.node_neg == "0"
        assert results.netlist.nodes == ("0",)


class TestOpAmpTerminals:

    def test_op_amp_terminal_mapping(self):
        schematic = (
            SchematicBuilder()
            .add("U1", "op_amp")
            .add("GND", "ground")
            .wire("U1", "bottom", "GND", "top")
            .build()
        )
        netlist = extract(schematic).netlist
        u1 = netlist.component_map()["U1"]
        assert u1.kind is ComponentKind.OP_AMP
        assert u1.node_pos == "0"
        assert u1.node_out is not None
        assert len({u1.node_neg, u1.node_out, u1.node_pos}) == 3

    def test_top_handle_is_not_a_node(self):
        schematic = (
            SchematicBuilder()
            .add("U1", "op_amp")
            .add("GND", "ground")
            .wire("U1", "bottom", "GND", "top")
            .build()
        )
        results = extract(schematic)
        assert ConnectionPoint("U1", "top") not in results.point_labels
        # inverting input, output and the reference
        assert len(results.netlist.nodes) == 3

    def test_wire_to_top_handle_is_ignored(self):
        schematic = (
            SchematicBuilder()
            .add("U1", "op_amp")
            .add("R1", "resistor", 10.0)
            .add("GND", "ground")
            .wire("U1", "top", "R1", "left")
            .wire("R1", "right", "GND", "top")
            .wire("U1", "bottom", "GND", "top")
            .build()
        )
        results = extract(schematic)
        assert len(results.ignored_wires) == 1
        assert results.ignored_wires[0].source == ConnectionPoint("U1", "top")


class TestNoGround:

    def test_no_reference_is_assigned(self):
        schematic = SchematicBuilder().add("R1", "resistor", 10.0).build()
        results = extract(schematic)
        assert not results.has_reference
        assert results.netlist.reference_node is None
        assert results.netlist.nodes == ("1", "2")


class TestFailFast:

    def test_wire_to_missing_node_raises(self):
        schematic = (
            SchematicBuilder()
            .add("R1", "resistor", 10.0)
            .wire("R1", "left", "R9", "right")
            .build()
        )
        with pytest.raises(TopologyError) as excinfo:
            extract(schematic)
        assert "R9" in str(excinfo.value)
        assert "Topology" in excinfo.value.get_diagnostic_report()

    def test_wire_to_unknown_handle_raises(self):
        schematic = (
            SchematicBuilder()
            .add("R1", "resistor", 10.0)
            .add("GND", "ground")
            .wire("R1", "middle", "GND", "top")
            .build()
        )
        with pytest.raises(TopologyError, match="middle"):
            extract(schematic)

    def test_duplicate_node_ids_raise(self):
        schematic = SchematicBuilder().add("R1", "resistor", 1.0).add("R1", "resistor", 2.0).build()
        with pytest.raises(TopologyError, match="Duplicate"):
            extract(schematic)

    def test_non_schematic_input_is_rejected(self):
        with pytest.raises(TypeError):
            TopologyExtractor({"nodes": []})
