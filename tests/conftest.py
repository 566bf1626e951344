# tests/conftest.py
import pytest
import numpy as np

from phasorsim_core import GraphicalKind, GraphicalNode, ConnectionPoint, Wire, Schematic
from phasorsim_core.components import ComponentKind
from phasorsim_core.data_structures import Netlist, NetlistComponent


class SchematicBuilder:
    """
    Small fluent helper that mimics what the editor hands to the solver:
    graphical nodes in placement order and point-to-point wires.
    """
    def __init__(self, name: str = "TestSchematic"):
        self.name = name
        self.nodes = []
        self.wires = []

    def add(self, node_id: str, kind, value: float = 0.0, phase: float = 0.0) -> "SchematicBuilder":
        kind = kind if isinstance(kind, GraphicalKind) else GraphicalKind(kind)
        self.nodes.append(GraphicalNode(node_id=node_id, kind=kind, value=value, phase_deg=phase))
        return self

    def wire(self, source_id: str, source_handle: str, target_id: str, target_handle: str) -> "SchematicBuilder":
        self.wires.append(Wire(
            source=ConnectionPoint(source_id, source_handle),
            target=ConnectionPoint(target_id, target_handle),
        ))
        return self

    def build(self) -> Schematic:
        return Schematic(nodes=tuple(self.nodes), wires=tuple(self.wires), name=self.name)


@pytest.fixture
def schematic_builder():
    return SchematicBuilder()


def build_voltage_divider(v: float = 10.0, r1: float = 1000.0, r2: float = 1000.0, phase: float = 0.0) -> Schematic:
    """
    V1(+) -- R1 -- N2 -- R2 -- GND, V1(-) -- GND.
    Extracted labels: V1's positive terminal is "1", the divider tap is "2".
    """
    return (
        SchematicBuilder("Divider")
        .add("V1", "voltage_source", v, phase)
        .add("R1", "resistor", r1)
        .add("R2", "resistor", r2)
        .add("GND", "ground")
        .wire("V1", "left", "R1", "left")
        .wire("R1", "right", "R2", "left")
        .wire("R2", "right", "GND", "top")
        .wire("V1", "right", "GND", "top")
        .build()
    )


def build_two_source_network(v: float = 10.0, i: float = 0.01) -> Schematic:
    """
    V1(+) -- R1 -- N -- R2 -- GND, with current source I1 injecting into N.
    """
    return (
        SchematicBuilder("TwoSources")
        .add("V1", "voltage_source", v)
        .add("R1", "resistor", 1000.0)
        .add("R2", "resistor", 2000.0)
        .add("I1", "current_source", i)
        .add("GND", "ground")
        .wire("V1", "left", "R1", "left")
        .wire("R1", "right", "R2", "left")
        .wire("R2", "right", "GND", "top")
        .wire("V1", "right", "GND", "top")
        .wire("I1", "left", "R2", "left")
        .wire("I1", "right", "GND", "top")
        .build()
    )


def make_netlist(components, nodes=None, frequency_hz: float = 1000.0, reference: str = "0") -> Netlist:
    """Builds a Netlist directly from (id, kind, value, pos, neg[, out]) tuples."""
    comps = []
    for entry in components:
        comp_id, kind, value, pos, neg = entry[:5]
        out = entry[5] if len(entry) > 5 else None
        comps.append(NetlistComponent(
            component_id=comp_id, kind=ComponentKind(kind), value=value,
            node_pos=pos, node_neg=neg, node_out=out,
        ))
    if nodes is None:
        seen = [reference] if reference is not None else []
        for comp in comps:
            for terminal in comp.terminals:
                if terminal not in seen:
                    seen.append(terminal)
        nodes = seen
    return Netlist(nodes=tuple(nodes), components=tuple(comps), frequency_hz=frequency_hz, reference_node=reference)


@pytest.fixture
def divider_schematic():
    return build_voltage_divider()


def assert_phasor_close(actual: complex, expected: complex, rtol: float = 1e-9, atol: float = 1e-12):
    np.testing.assert_allclose(complex(actual), complex(expected), rtol=rtol, atol=atol)
