# src/phasorsim_core/validation/semantic_validator.py
import logging
import math
from typing import List

import networkx as nx

from ..components.kinds import ComponentKind
from ..data_structures import Netlist, NetlistComponent
from ..schematic.raw_data import Schematic
from ..topology.extractor import TopologyExtractionResults
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import SemanticIssueCode


logger = logging.getLogger(__name__)


class SemanticValidator:
    """
    Checks an extracted netlist for logical problems that the schema and the
    extractor cannot see: a missing reference, unusable component values and
    nodes that no conductive path ties to ground.

    The validator only reports. The caller decides whether to halt; any
    ERROR-level issue is expected to abort the solve request.
    """

    def __init__(self, schematic: Schematic, extraction: TopologyExtractionResults):
        if not isinstance(extraction, TopologyExtractionResults):
            raise TypeError("SemanticValidator requires the results of a topology extraction.")
        self.schematic = schematic
        self.extraction = extraction
        self.netlist: Netlist = extraction.netlist
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        self.issues = []
        logger.info(f"Starting semantic validation for '{self.schematic.name}'...")

        self._check_ground()
        self._check_values()
        self._check_shorted_components()
        self._check_ignored_wires()
        if self.extraction.has_reference:
            self._check_floating_nodes()

        if self.issues:
            errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
            warnings = sum(1 for i in self.issues if i.level == ValidationIssueLevel.WARNING)
            infos = sum(1 for i in self.issues if i.level == ValidationIssueLevel.INFO)
            logger.info(f"Validation complete. Found: {errors} errors, {warnings} warnings, {infos} info messages.")
        else:
            logger.info("Validation complete with no issues found.")
        return self.issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: SemanticIssueCode, **kwargs):
        self.issues.append(ValidationIssue(
            level=level,
            code=code_enum.code,
            message=code_enum.format_message(**kwargs),
            component_id=kwargs.get('component_id'),
            node=kwargs.get('node'),
            details=kwargs,
        ))

    def _check_ground(self):
        grounds = self.extraction.ground_node_ids
        if not grounds:
            self._add_issue(ValidationIssueLevel.ERROR, SemanticIssueCode.GND_MISSING)
        elif len(grounds) > 1:
            self._add_issue(
                ValidationIssueLevel.INFO, SemanticIssueCode.GND_MULTIPLE,
                count=len(grounds), ground_ids=", ".join(grounds),
            )

    def _check_values(self):
        for comp in self.netlist.components:
            if comp.kind is ComponentKind.OP_AMP:
                continue
            if not math.isfinite(comp.value):
                self._add_issue(
                    ValidationIssueLevel.ERROR, SemanticIssueCode.VALUE_NONFINITE,
                    component_id=comp.component_id, kind=comp.kind.value, value=comp.value,
                )
            elif comp.kind.is_passive and comp.value < 0:
                self._add_issue(
                    ValidationIssueLevel.ERROR, SemanticIssueCode.VALUE_NEGATIVE,
                    component_id=comp.component_id, kind=comp.kind.value, value=comp.value,
                )

    def _check_shorted_components(self):
        for comp in self.netlist.components:
            if len(set(comp.terminals)) == 1:
                self._add_issue(
                    ValidationIssueLevel.WARNING, SemanticIssueCode.COMP_SHORTED,
                    component_id=comp.component_id, kind=comp.kind.value, node=comp.node_pos,
                )

    def _check_ignored_wires(self):
        nodes_by_id = self.schematic.node_by_id()
        for wire in self.extraction.ignored_wires:
            for cp in (wire.source, wire.target):
                node = nodes_by_id[cp.node_id]
                if cp.handle not in node.kind.electrical_handles:
                    self._add_issue(
                        ValidationIssueLevel.WARNING, SemanticIssueCode.HANDLE_UNUSED_WIRED,
                        source=str(wire.source), target=str(wire.target),
                        handle=cp.handle, component_id=cp.node_id,
                    )

    def _check_floating_nodes(self):
        graph = self._build_conduction_graph()
        reference = self.netlist.reference_node
        grounded = nx.node_connected_component(graph, reference)
        for node in self.netlist.unknown_nodes:
            if node not in grounded:
                self._add_issue(ValidationIssueLevel.WARNING, SemanticIssueCode.NET_FLOATING, node=node)

    def _build_conduction_graph(self) -> nx.Graph:
        """
        Undirected graph of nodes joined by every element that fixes a voltage
        difference or passes current at the analysis frequency. Current sources
        and capacitors at DC are open. An op-amp drives its output against the
        reference; its inputs draw no current and join nothing.
        """
        graph = nx.Graph()
        graph.add_nodes_from(self.netlist.nodes)
        omega = self.netlist.omega
        for comp in self.netlist.components:
            for a, b in self._conductive_pairs(comp, omega):
                graph.add_edge(a, b, component=comp.component_id)
        return graph

    def _conductive_pairs(self, comp: NetlistComponent, omega: float):
        if comp.kind is ComponentKind.CURRENT_SOURCE:
            return []
        if comp.kind is ComponentKind.CAPACITOR and omega * comp.value == 0:
            return []
        if comp.kind is ComponentKind.OP_AMP:
            return [(comp.node_out, self.netlist.reference_node)]
        return [(comp.node_pos, comp.node_neg)]
