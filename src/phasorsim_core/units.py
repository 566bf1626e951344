# --- src/phasorsim_core/units.py ---
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")


def to_si_magnitude(raw_value: Union[str, int, float], expected_unit: str) -> float:
    """
    Converts a raw value into a float magnitude in the SI unit `expected_unit`.

    Plain numbers are taken to already be in SI. Strings are parsed by pint and
    must be dimensionally compatible with `expected_unit`; a bare number inside
    a string (e.g. "1e3") is also accepted as SI.

    Raises:
        pint.DimensionalityError: The quantity has the wrong dimension.
        pint.UndefinedUnitError: The string names an unknown unit.
        ValueError: The value cannot be interpreted as a number.
    """
    if isinstance(raw_value, bool):
        raise ValueError(f"Boolean '{raw_value}' is not a valid physical value.")
    if isinstance(raw_value, (int, float)):
        return float(raw_value)

    qty = ureg.Quantity(str(raw_value).strip())
    if qty.dimensionless and not isinstance(qty.magnitude, complex):
        return float(qty.magnitude)
    return float(qty.to(expected_unit).magnitude)
