# tests/test_config.py
import pytest

from phasorsim_core.simulation.config import (
    AnalysisMethod, AnalysisConfig, ConfigParsingError, parse_analysis_config, parse_frequency,
)


@pytest.mark.parametrize("raw, expected_hz", [
    (1000, 1000.0),
    (0, 0.0),
    ("50 Hz", 50.0),
    ("2.4 GHz", 2.4e9),
    ("1e3", 1000.0),
])
def test_parse_frequency(raw, expected_hz):
    assert parse_frequency(raw) == pytest.approx(expected_hz)


@pytest.mark.parametrize("raw", [None, -1.0, "-3 kHz", "10 ohm", "fast", float("inf"), True])
def test_parse_frequency_rejects(raw):
    with pytest.raises(ConfigParsingError):
        parse_frequency(raw)


def test_parse_analysis_config():
    config = parse_analysis_config({"frequency": "1 kHz", "method": "Superposition"})
    assert config == AnalysisConfig(frequency_hz=1000.0, method=AnalysisMethod.SUPERPOSITION)
    assert config.uses_superposition


def test_method_defaults_to_nodal():
    config = parse_analysis_config({"frequency": 60})
    assert config.method is AnalysisMethod.NODAL
    assert not config.uses_superposition


def test_empty_config_is_rejected():
    with pytest.raises(ConfigParsingError, match="missing"):
        parse_analysis_config({})


def test_all_editor_labels_are_known():
    labels = {"nodal", "mesh", "superposition", "source_transformation", "thevenin", "norton", "op_amp", "spice"}
    assert {m.value for m in AnalysisMethod} == labels


def test_coerce_unknown_method():
    with pytest.raises(ConfigParsingError, match="Allowed"):
        AnalysisMethod.coerce("laplace")
    assert AnalysisMethod.coerce(AnalysisMethod.MESH) is AnalysisMethod.MESH
