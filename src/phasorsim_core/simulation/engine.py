# src/phasorsim_core/simulation/engine.py
"""
Defines the `SimulationEngine`, the service that runs one solve request.

The engine holds no numeric state of its own: every pass builds a fresh
`MnaAssembler`, a fresh matrix pair and a fresh solution. The only thing that
accumulates is the step log carried by the `SimulationContext`.
"""
import logging
from typing import Dict, Optional

from ..constants import REFERENCE_NODE_LABEL
from ..data_structures import Netlist
from ..errors import FrameworkLogicError
from ..reporting.formatting import PhasorValue
from ..reporting.steps import StepKind, StepLog
from .config import AnalysisMethod
from .context import SimulationContext
from .mna import MnaAssembler
from .results import MnaSolution
from .solver import solve_mna_system
from .superposition import SuperpositionDriver

logger = logging.getLogger(__name__)


class SimulationEngine:
    def __init__(self, context: SimulationContext):
        if context.netlist.reference_node is None:
            raise FrameworkLogicError(
                "SimulationEngine received a netlist without a reference node; semantic validation must reject it first."
            )
        self.context: SimulationContext = context
        self.netlist: Netlist = context.netlist
        self.method: AnalysisMethod = context.method
        self.steps: StepLog = context.steps
        logger.debug(f"SimulationEngine initialized (method={self.method}, f={self.netlist.frequency_hz} Hz).")

    def execute(self):
        """
        Runs the request and returns `(total, partials)`. `partials` is None
        unless the method is superposition.

        Steps appended before a failure stay in the log; the exception
        propagates to the facade, which turns it into the terminal error step.
        """
        self.steps.record(
            title="1. Initialization",
            description=(
                f"Frequency: {self.netlist.frequency_hz:g}Hz. "
                f"Found {len(self.netlist.unknown_nodes)} active nodes."
            ),
        )

        partials: Optional[Dict[str, MnaSolution]] = None
        if self.method is AnalysisMethod.SUPERPOSITION:
            outcome = SuperpositionDriver(self).run()
            total, partials = outcome.total, outcome.partials
        else:
            if self.method is not AnalysisMethod.NODAL:
                logger.info(f"Method '{self.method}' is solved with nodal MNA.")
            total = self.solve_netlist(self.netlist)

        self.steps.record(
            title="Final Node Voltages",
            latex_lines=[
                f"V_{{{node}}} = {PhasorValue(v).polar}"
                for node, v in total.node_voltages.items()
                if node != REFERENCE_NODE_LABEL
            ],
            kind=StepKind.RESULT,
        )
        return total, partials

    def solve_netlist(self, netlist: Netlist) -> MnaSolution:
        """
        One full pass: assemble, log the equations, solve, unpack the unknowns.

        The equations step is appended before solving so that it survives a
        singular system.
        """
        assembler = MnaAssembler(netlist)
        system = assembler.assemble()
        self.steps.record(
            title="System of Equations",
            description="Generated KCL and Constituent Equations:",
            latex_lines=system.equations,
            kind=StepKind.EQUATIONS,
        )

        x = solve_mna_system(
            system.matrix, system.rhs,
            frequency=netlist.frequency_hz,
            unknown_labels=system.unknown_labels,
        )

        voltages: Dict[str, complex] = {}
        for node in netlist.nodes:
            if node == netlist.reference_node:
                voltages[node] = 0j
            else:
                voltages[node] = complex(x[system.node_index[node]])
        currents = {cid: complex(x[idx]) for cid, idx in system.current_index.items()}
        logger.debug(f"Solved {system.size} unknowns.")
        return MnaSolution(node_voltages=voltages, branch_currents=currents, solution_vector=x)
