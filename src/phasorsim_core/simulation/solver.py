# src/phasorsim_core/simulation/solver.py
import logging
import warnings
from typing import Optional, Sequence

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from .exceptions import EmptyCircuitError, SingularMatrixError

logger = logging.getLogger(__name__)


def solve_mna_system(
    A: np.ndarray,
    Z: np.ndarray,
    frequency: Optional[float] = None,
    unknown_labels: Optional[Sequence[str]] = None,
) -> np.ndarray:
    """
    Solves the dense complex MNA system `A x = Z` by LU decomposition with
    partial pivoting.

    Each row is first scaled by its largest entry, so the ideal-short
    admittance on one node does not swamp the tolerance for the others. A
    pivot of the scaled matrix is treated as zero when it falls below
    `n * eps`. Because row pivoting keeps the column order, the offending
    pivot names the unknown that has no independent equation.

    Args:
        A: Square complex coefficient matrix.
        Z: Right-hand side vector.
        frequency: Analysis frequency in Hz, for diagnostics only.
        unknown_labels: Names of the unknowns, for diagnostics only.

    Raises:
        EmptyCircuitError: The system has no unknowns.
        SingularMatrixError: The matrix is singular or the solution is not finite.
    """
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError("MNA matrix must be square.")
    if Z.shape[0] != A.shape[0]:
        raise ValueError("MNA right-hand side must match the matrix dimension.")
    if A.shape[0] == 0:
        raise EmptyCircuitError()

    n = A.shape[0]
    logger.debug(f"Factorizing {n}x{n} MNA matrix...")
    # Row equilibration: ideal shorts stamp ~1e12 S next to millisiemens-scale rows.
    row_scale = np.abs(A).max(axis=1)
    row_scale[row_scale == 0] = 1.0
    with np.errstate(invalid="ignore"):
        A_scaled = A / row_scale[:, np.newaxis]
    try:
        with warnings.catch_warnings():
            # Exactly singular input is detected below from the pivots.
            warnings.simplefilter("ignore", LinAlgWarning)
            lu, piv = lu_factor(A_scaled, check_finite=True)
    except ValueError as e:
        logger.error(f"LU factorization rejected the MNA matrix: {e}")
        raise SingularMatrixError(details=f"The matrix contains non-finite entries: {e}", frequency=frequency) from e

    tol = n * np.finfo(float).eps
    pivots = np.abs(np.diag(lu))
    deficient = np.flatnonzero(pivots <= tol)
    if deficient.size:
        names = [unknown_labels[c] for c in deficient] if unknown_labels is not None else [str(c) for c in deficient]
        logger.error(f"MNA matrix is singular; no independent equation for: {names}")
        raise SingularMatrixError(
            details=f"No independent equation determines {', '.join(names)}.",
            frequency=frequency,
        )

    x = lu_solve((lu, piv), Z / row_scale)
    if np.any(np.isnan(x)) or np.any(np.isinf(x)):
        logger.error("NaN or Inf detected in MNA solution vector.")
        raise SingularMatrixError(details="MNA system solve resulted in NaN/Inf values.", frequency=frequency)

    logger.debug("MNA system solved.")
    return x
