"""
Tests for compiling descriptors into update functions.
"""

import math

import pytest

from svganimation.engine.compiler import compile_object
from svganimation.errors import RuntimeEvaluationError


def run(compiled, t):
    for c in compiled:
        c.update(t)


class TestCompileTransform:

    def test_translate_equation(self, make_object):
        """translate x = 10t, y = 0 gives translation (20, 0) at t = 2."""
        obj = make_object("planet", {"transform": {"translate": {"x": lambda t: 10 * t, "y": lambda t: 0}}})
        obj.initialize_matrix()

        run(compile_object(obj), 2.0)

        assert obj.matrix.as_tuple() == (1, 0, 0, 1, 20, 0)
        assert obj.node.get_attribute("transform") == "matrix(1 0 0 1 20 0)"
        assert obj.decomposed.translate == (20, 0)

    def test_rotate_keeps_existing_translation(self, make_object):
        obj = make_object("moon", {"transform": {"rotate": lambda t: t}}, transform="translate(50, 60)")
        obj.initialize_matrix()

        run(compile_object(obj), math.pi / 2)

        a, b, c, d, e, f = obj.matrix.as_tuple()
        assert (a, b, c, d) == pytest.approx((0, 1, -1, 0), abs=1e-9)
        assert (e, f) == (50, 60)

    def test_non_numeric_transform_result(self, make_object):
        obj = make_object("planet", {"transform": {"scale": lambda t: "big"}})

        with pytest.raises(RuntimeEvaluationError) as exc:
            run(compile_object(obj), 1.0)

        assert exc.value.code == "NON_NUMERIC_RESULT"
        assert exc.value.object_name == "planet"
        assert exc.value.prop == "transform.scale"


    def test_rotate_only_stays_continuous_past_quarter_turn(self, make_object):
        obj = make_object("planet", {"transform": {"rotate": lambda t: t}})
        obj.initialize_matrix()
        compiled = compile_object(obj)

        for t in (1.5, 1.75, 2.0, 2.25, 2.5):
            run(compiled, t)
            assert obj.matrix.a == pytest.approx(math.cos(t))
            assert obj.matrix.b == pytest.approx(math.sin(t))
            assert obj.decomposed.scale == pytest.approx(1)
            assert math.radians(obj.decomposed.rotate) == pytest.approx(t)

    def test_translate_rotate_past_quarter_turn(self, make_object):
        obj = make_object("test", {"transform": {
            "translate": {"x": lambda t: 250, "y": lambda t: 250},
            "rotate": lambda t: t,
        }})
        obj.initialize_matrix()
        compiled = compile_object(obj)

        run(compiled, 2.0)
        run(compiled, 2.1)

        assert obj.matrix.a == pytest.approx(math.cos(2.1))
        assert (obj.matrix.e, obj.matrix.f) == (250, 250)

    def test_negative_scale_only_does_not_flicker(self, make_object):
        obj = make_object("planet", {"transform": {"scale": lambda t: -t}})
        obj.initialize_matrix()
        compiled = compile_object(obj)

        for t in (1.0, 2.0, 3.0):
            run(compiled, t)
            assert obj.matrix.a == pytest.approx(-t)
            assert obj.matrix.d == pytest.approx(-t)
            assert obj.matrix.b == pytest.approx(0)

    def test_separate_specs_share_requested_pose(self, make_object):
        obj = make_object("planet", {"transform": [
            {"scale": lambda t: -2},
            {"rotate": lambda t: t},
        ]})
        obj.initialize_matrix()
        compiled = compile_object(obj)

        for t in (1.0, 2.0):
            run(compiled, t)
            assert obj.matrix.a == pytest.approx(-2 * math.cos(t))
            assert obj.matrix.b == pytest.approx(-2 * math.sin(t))
        assert obj.scale_factor == -2
        assert obj.angle == 2.0


class TestCompileAttributes:

    def test_attribute_written_through_node(self, make_object):
        obj = make_object("planet", {"r": lambda t: 2 * t, "fill": lambda t: "red"}, r=1)

        run(compile_object(obj), 1.5)

        assert obj.node.get_attribute("r") == "3"
        assert obj.node.get_attribute("fill") == "red"

    def test_labels_and_order(self, make_object):
        obj = make_object("planet", {
            "r": [{"equation": lambda t: 1, "range": [0, 1]}, {"equation": lambda t: 2, "range": [1, 2]}],
            "cx": lambda t: 0,
        })

        labels = [c.label for c in compile_object(obj)]

        assert labels == ["planet.r[0]", "planet.r[1]", "planet.cx"]

    def test_failing_equation_wrapped(self, make_object):
        obj = make_object("planet", {"r": lambda t: 1 / 0})

        with pytest.raises(RuntimeEvaluationError) as exc:
            run(compile_object(obj), 0.5)

        assert exc.value.code == "EQUATION_FAILED"
        assert exc.value.time == 0.5
        assert isinstance(exc.value.__cause__, ZeroDivisionError)
