# --- src/phasorsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Numerical Constants for Simulation ---

#: Large finite admittance used to stamp ideal shorts (R=0, or L=0 / L at DC).
#: Value: 1e12 Siemens (equivalent to 1 micro-ohm impedance).
LARGE_ADMITTANCE_SIEMENS: float = 1.0e12

#: Relative tolerance between the superposition total and the sum of its partials.
SUPERPOSITION_RTOL: float = 1.0e-9

#: Absolute floor for the same comparison, for nodes whose total is ~0 V.
SUPERPOSITION_ATOL: float = 1.0e-12

#: Label reserved for the reference (ground) node.
REFERENCE_NODE_LABEL: str = "0"

#: Significant digits used when rendering phasors for the step log.
DISPLAY_PRECISION: int = 4

logger.debug("Defined core constants: LARGE_ADMITTANCE_SIEMENS, SUPERPOSITION_RTOL")
