# tests/test_reporting.py
import pytest
import sympy as sp

from phasorsim_core.reporting import SolverStep, StepKind, StepLog, PhasorValue, latex_polar, render_equation


class TestStepLog:

    def test_append_only_and_ordered(self):
        log = StepLog()
        log.record("first")
        log.record("second", description="d", latex_lines=["a", "b"], kind=StepKind.EQUATIONS)
        assert [s.title for s in log] == ["first", "second"]
        assert len(log) == 2
        assert log.steps[1].latex == "a<br/>b"
        assert log.steps[1].latex_lines == ("a", "b")

    def test_steps_snapshot_is_immutable(self):
        log = StepLog()
        log.record("one")
        snapshot = log.steps
        log.record("two")
        assert len(snapshot) == 1
        with pytest.raises(AttributeError):
            snapshot[0].title = "changed"

    def test_rejects_foreign_entries(self):
        with pytest.raises(TypeError):
            StepLog().append({"title": "x"})

    def test_extend(self):
        log = StepLog()
        log.extend([SolverStep("a"), SolverStep("b", kind=StepKind.RESULT)])
        assert [s.kind for s in log] == [StepKind.INFO, StepKind.RESULT]


class TestPhasorValue:

    def test_polar_and_rect(self):
        pv = PhasorValue(3 + 4j)
        assert pv.magnitude == pytest.approx(5.0)
        assert pv.angle_deg == pytest.approx(53.130102354)
        assert pv.polar == "5 ∠ 53.13° V"
        assert pv.rect == "3 + 4j"
        assert str(pv) == pv.polar

    def test_negative_imaginary_rect(self):
        assert PhasorValue(1 - 2j, "A").rect == "1 - 2j"

    def test_no_negative_zero_angle(self):
        assert PhasorValue(complex(5.0, -1e-18)).polar == "5 ∠ 0.00° V"

    def test_latex_polar(self):
        assert latex_polar(-2 + 0j, "V") == "2 \\angle 180.00^\\circ\\,\\mathrm{V}"


def test_render_equation_keeps_both_sides():
    x = sp.Symbol("x")
    assert render_equation(x, x) == "x = x"
    assert render_equation(sp.Integer(0), sp.Integer(0), prefix="Node 1: ") == "\\text{Node 1: } 0 = 0"
