# src/phasorsim_core/simulation/mna.py

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

import numpy as np
import sympy as sp

from ..components.impedance import admittance, phasor
from ..components.kinds import ComponentKind
from ..data_structures import Netlist, NetlistComponent
from ..reporting.formatting import (
    current_symbol, impedance_expr, latex_polar, render_equation, source_symbol, voltage_symbol,
)
from .exceptions import EmptyCircuitError, MnaInputError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MnaSystem:
    """
    One assembled MNA system `A x = Z`.

    The unknown vector holds one voltage per non-reference node (in netlist
    node order) followed by one branch current per VoltageSource/OpAmp (in
    netlist component order). `node_index` and `current_index` map labels and
    component ids to positions in that vector.
    """
    matrix: np.ndarray
    rhs: np.ndarray
    node_index: Dict[str, int]
    current_index: Dict[str, int]
    equations: Tuple[str, ...]

    @property
    def size(self) -> int:
        return self.rhs.shape[0]

    @property
    def unknown_labels(self) -> Tuple[str, ...]:
        labels = [f"V_{n}" for n in self.node_index] + [f"I_{c}" for c in self.current_index]
        return tuple(labels)


@dataclass
class _AssemblyState:
    """Scratch state owned by a single `assemble()` call."""
    A: np.ndarray
    Z: np.ndarray
    node_index: Dict[str, int]
    current_index: Dict[str, int]
    omega: float
    reference: str
    lhs_terms: List[sp.Expr] = field(default_factory=list)
    rhs_terms: List[sp.Expr] = field(default_factory=list)

    def v_idx(self, node: str) -> int:
        """Column of a node voltage, or -1 for the reference node."""
        return self.node_index.get(node, -1)

    def v_sym(self, node: str) -> sp.Expr:
        return voltage_symbol(node, self.reference)


# --- Per-kind KCL stamps. Each is called once per (node, component) pair. ---

def _stamp_passive(st: _AssemblyState, row: int, node: str, comp: NetlistComponent):
    y = admittance(comp.kind, comp.value, st.omega, comp.component_id)
    other = comp.node_neg if node == comp.node_pos else comp.node_pos
    st.A[row, row] += y
    other_idx = st.v_idx(other)
    if other_idx != -1:
        st.A[row, other_idx] -= y
    st.lhs_terms.append((st.v_sym(node) - st.v_sym(other)) / impedance_expr(comp))


def _stamp_current_source(st: _AssemblyState, row: int, node: str, comp: NetlistComponent):
    # Current leaves the source at its positive terminal and enters the node.
    value = phasor(comp.value, comp.phase_deg)
    if node == comp.node_pos:
        st.Z[row] += value
        st.rhs_terms.append(source_symbol(comp))
    if node == comp.node_neg:
        st.Z[row] -= value
        st.rhs_terms.append(-source_symbol(comp))


def _stamp_voltage_source(st: _AssemblyState, row: int, node: str, comp: NetlistComponent):
    col = st.current_index[comp.component_id]
    coeff = (1 if node == comp.node_pos else 0) - (1 if node == comp.node_neg else 0)
    if coeff:
        st.A[row, col] += coeff
        st.lhs_terms.append(coeff * current_symbol(comp))


def _stamp_op_amp(st: _AssemblyState, row: int, node: str, comp: NetlistComponent):
    # Ideal inputs draw no current; only the output carries the branch current.
    if node == comp.node_out:
        st.A[row, st.current_index[comp.component_id]] += 1
        st.lhs_terms.append(current_symbol(comp))


_KCL_STAMPS: Dict[ComponentKind, Callable[[_AssemblyState, int, str, NetlistComponent], None]] = {
    ComponentKind.RESISTOR: _stamp_passive,
    ComponentKind.CAPACITOR: _stamp_passive,
    ComponentKind.INDUCTOR: _stamp_passive,
    ComponentKind.CURRENT_SOURCE: _stamp_current_source,
    ComponentKind.VOLTAGE_SOURCE: _stamp_voltage_source,
    ComponentKind.OP_AMP: _stamp_op_amp,
}


class MnaAssembler:
    """
    Builds the complex MNA system for one netlist at its analysis frequency.

    It is responsible for:
    1.  Validating that every component terminal names a known node.
    2.  Assigning a deterministic index to every unknown.
    3.  Assembling `A` and `Z` from scratch on every `assemble()` call: one KCL
        row per non-reference node, then one constraint row per VoltageSource
        (`V(pos) - V(neg) = phasor`) and per OpAmp (`V(pos) - V(neg) = 0`).
    4.  Producing the symbolic form of every row as LaTeX for the step log.

    Matrices are never cached or reused across calls, so superposition
    sub-problems cannot contaminate each other.
    """
    def __init__(self, netlist: Netlist):
        if not isinstance(netlist, Netlist):
            raise MnaInputError(details="MnaAssembler requires a Netlist produced by the topology extractor.")
        self.netlist: Netlist = netlist
        self._validate_terminals()

        self.node_index: Dict[str, int] = {node: idx for idx, node in enumerate(netlist.unknown_nodes)}
        n_v = len(self.node_index)
        self.current_index: Dict[str, int] = {
            comp.component_id: n_v + idx for idx, comp in enumerate(netlist.branch_current_components)
        }
        self.size: int = n_v + len(self.current_index)
        logger.debug(
            f"MNA Assembler initialized: {n_v} node voltages, {len(self.current_index)} branch currents."
        )

    def _validate_terminals(self):
        known = set(self.netlist.nodes)
        seen_ids = set()
        for comp in self.netlist.components:
            if comp.component_id in seen_ids:
                raise MnaInputError(details=f"Duplicate component id '{comp.component_id}'.", component_id=comp.component_id)
            seen_ids.add(comp.component_id)
            for terminal in comp.terminals:
                if terminal not in known:
                    raise MnaInputError(
                        details=f"Component '{comp.component_id}' references node '{terminal}', which is not in the netlist.",
                        component_id=comp.component_id,
                    )

    def assemble(self) -> MnaSystem:
        """Assembles a fresh `A`, `Z` pair and the symbolic equation lines."""
        if self.size == 0:
            raise EmptyCircuitError()

        st = _AssemblyState(
            A=np.zeros((self.size, self.size), dtype=np.complex128),
            Z=np.zeros(self.size, dtype=np.complex128),
            node_index=self.node_index,
            current_index=self.current_index,
            omega=self.netlist.omega,
            reference=self.netlist.reference_node,
        )
        equations: List[str] = []

        # 1. KCL rows.
        for node, row in self.node_index.items():
            st.lhs_terms, st.rhs_terms = [], []
            for comp in self.netlist.components_touching(node):
                _KCL_STAMPS[comp.kind](st, row, node, comp)
            equations.append(render_equation(sp.Add(*st.lhs_terms), sp.Add(*st.rhs_terms), prefix=f"Node {node}: "))

        # 2. Branch constraint rows.
        for comp in self.netlist.branch_current_components:
            row = self.current_index[comp.component_id]
            pos_idx, neg_idx = st.v_idx(comp.node_pos), st.v_idx(comp.node_neg)
            if pos_idx != -1:
                st.A[row, pos_idx] += 1
            if neg_idx != -1:
                st.A[row, neg_idx] -= 1
            lhs = st.v_sym(comp.node_pos) - st.v_sym(comp.node_neg)

            if comp.kind is ComponentKind.VOLTAGE_SOURCE:
                value = phasor(comp.value, comp.phase_deg)
                st.Z[row] += value
                line = render_equation(lhs, source_symbol(comp)) + f" = {latex_polar(value, 'V')}"
            else:
                line = render_equation(lhs, sp.Integer(0), prefix=f"{comp.component_id} (virtual short): ")
            equations.append(line)

        logger.debug(f"Assembled {self.size}x{self.size} MNA system at omega={self.netlist.omega:.4e} rad/s.")
        return MnaSystem(
            matrix=st.A,
            rhs=st.Z,
            node_index=dict(self.node_index),
            current_index=dict(self.current_index),
            equations=tuple(equations),
        )
