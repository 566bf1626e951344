# src/phasorsim_core/simulation/superposition.py
"""
Superposition over independent sources.

Each sub-problem is the extracted netlist with every other independent source
zeroed (a zero voltage source is a short, a zero current source is an open).
Components are never removed, so every sub-problem has the same unknown vector
as the full solve and partial results can be compared element by element.
"""
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Tuple

import numpy as np

from ..constants import REFERENCE_NODE_LABEL, SUPERPOSITION_ATOL, SUPERPOSITION_RTOL
from ..reporting.formatting import PhasorValue
from ..reporting.steps import StepKind
from .results import MnaSolution

if TYPE_CHECKING:
    from .engine import SimulationEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuperpositionOutcome:
    partials: Dict[str, MnaSolution]
    total: MnaSolution


class SuperpositionDriver:
    def __init__(self, engine: "SimulationEngine"):
        self.engine = engine
        self.netlist = engine.netlist
        self.steps = engine.steps

    def run(self) -> SuperpositionOutcome:
        """
        Solves one sub-problem per independent source (netlist order), then the
        unmodified netlist. The total is always the independent full solve; the
        sum of partials is only used to verify it.
        """
        sources = self.netlist.independent_sources
        logger.info(f"Superposition over {len(sources)} independent source(s).")
        partials: Dict[str, MnaSolution] = {}

        for k, source in enumerate(sources, start=1):
            self.steps.record(
                title=f"Sub-Problem {k}: Source {source.component_id} Active",
                description="Solved circuit with only one source active.",
            )
            sub_netlist = self.netlist.deactivate_sources_except(source.component_id)
            solution = self.engine.solve_netlist(sub_netlist)
            partials[source.component_id] = solution
            self.steps.record(
                title=f"Results for Source {source.component_id}",
                latex_lines=self._partial_lines(source.component_id, solution),
                kind=StepKind.RESULT,
            )

        self.steps.record(
            title="Superposition Total",
            description="Summing all partial responses (Verified by full system solve):",
        )
        total = self.engine.solve_netlist(self.netlist)
        self._verify(partials, total)
        return SuperpositionOutcome(partials=partials, total=total)

    @staticmethod
    def _partial_lines(source_id: str, solution: MnaSolution) -> Tuple[str, ...]:
        return tuple(
            f"V_{{{node}}}^{{(source\\ {source_id})}} = {PhasorValue(v).polar}"
            for node, v in solution.node_voltages.items()
            if node != REFERENCE_NODE_LABEL
        )

    def _verify(self, partials: Dict[str, MnaSolution], total: MnaSolution) -> None:
        labels = [n for n in total.node_voltages if n != REFERENCE_NODE_LABEL]
        if not partials or not labels:
            return

        total_vec = np.array([total.node_voltages[n] for n in labels], dtype=np.complex128)
        summed = np.sum(
            [[p.node_voltages[n] for n in labels] for p in partials.values()],
            axis=0,
            dtype=np.complex128,
        )
        deviation = float(np.max(np.abs(summed - total_vec)))
        consistent = bool(np.allclose(summed, total_vec, rtol=SUPERPOSITION_RTOL, atol=SUPERPOSITION_ATOL))

        if consistent:
            logger.debug(f"Superposition check passed (max deviation {deviation:.3e} V).")
            description = "Sum of partial responses matches the full system solve."
        else:
            logger.warning(
                f"Sum of {len(partials)} partial responses deviates from the full solve by {deviation:.3e} V."
            )
            description = "Sum of partial responses does NOT match the full system solve."

        self.steps.record(
            title="Superposition Check",
            description=description,
            latex_lines=(f"\\max_n |\\sum_k V_n^{{(k)}} - V_n| = {deviation:.3e}\\,\\mathrm{{V}}",),
            kind=StepKind.RESULT,
        )
