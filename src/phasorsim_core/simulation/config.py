# src/phasorsim_core/simulation/config.py
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

import pint

from ..units import to_si_magnitude

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during analysis configuration parsing."""
    pass


class AnalysisMethod(Enum):
    """
    Analysis method labels offered by the editor. Only SUPERPOSITION changes
    what is computed; every other label runs a single nodal MNA solve.
    """
    NODAL = "nodal"
    MESH = "mesh"
    SUPERPOSITION = "superposition"
    SOURCE_TRANSFORMATION = "source_transformation"
    THEVENIN = "thevenin"
    NORTON = "norton"
    OP_AMP = "op_amp"
    SPICE = "spice"

    def __str__(self):
        return self.value

    @classmethod
    def coerce(cls, value: Union[str, "AnalysisMethod", None]) -> "AnalysisMethod":
        if value is None:
            return cls.NODAL
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            allowed = ", ".join(m.value for m in cls)
            raise ConfigParsingError(f"Unknown analysis method '{value}'. Allowed: {allowed}.") from e


@dataclass(frozen=True)
class AnalysisConfig:
    frequency_hz: float
    method: AnalysisMethod = AnalysisMethod.NODAL

    @property
    def uses_superposition(self) -> bool:
        return self.method is AnalysisMethod.SUPERPOSITION


def parse_frequency(raw_frequency: Any) -> float:
    """Parses a frequency given in Hz or as a unit string ("1 kHz") into Hz."""
    if raw_frequency is None:
        raise ConfigParsingError("Analysis frequency is missing.")
    try:
        frequency_hz = to_si_magnitude(raw_frequency, "Hz")
    except (ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse frequency '{raw_frequency}': {e}") from e
    if not math.isfinite(frequency_hz) or frequency_hz < 0:
        raise ConfigParsingError(f"Frequency must be a finite, non-negative value in Hz, got {frequency_hz}.")
    return frequency_hz


def parse_analysis_config(raw_config: Optional[Dict[str, Any]]) -> AnalysisConfig:
    """
    Parses a raw `{frequency, method}` mapping into an `AnalysisConfig`.
    """
    if not raw_config:
        raise ConfigParsingError("Analysis configuration is missing or empty.")
    frequency_hz = parse_frequency(raw_config.get('frequency'))
    method = AnalysisMethod.coerce(raw_config.get('method'))
    logger.debug(f"Parsed analysis config: f={frequency_hz} Hz, method={method}.")
    return AnalysisConfig(frequency_hz=frequency_hz, method=method)
