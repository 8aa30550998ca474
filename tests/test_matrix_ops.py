"""
Tests for matrix operations: product, consolidation, decomposition and the
seven axis combinations.
"""

import math

import pytest

from svganimation.engine import matrix_ops
from svganimation.models import Matrix
from svganimation.models.enums import TransformAxis
from svganimation.models.matrix import format_number, format_value


def assert_matrix(actual, expected, tol=1e-9):
    for got, want in zip(actual.as_tuple(), expected):
        assert got == pytest.approx(want, abs=tol)


class TestBasics:
    """Identity, product and consolidation."""

    def test_identity(self):
        assert matrix_ops.identity().as_tuple() == (1, 0, 0, 1, 0, 0)

    def test_multiply_applies_right_operand_first(self):
        """translate · scale scales the point, then moves it."""
        move = Matrix(e=10, f=5)
        grow = Matrix(a=2, d=2)
        m = matrix_ops.multiply(move, grow)

        assert m.apply(1, 1) == (12, 7)

    def test_consolidate_matches_sequential_application(self):
        entries = [Matrix(e=10, f=0), Matrix(a=2, d=3), Matrix(e=1, f=1)]
        m = matrix_ops.consolidate(entries)

        # SVG lists apply right to left to the point
        x, y = 4, 5
        for entry in reversed(entries):
            x, y = entry.apply(x, y)
        assert m.apply(4, 5) == pytest.approx((x, y))

    def test_consolidate_empty_is_identity(self):
        assert matrix_ops.consolidate([]) == Matrix()


class TestDecompose:
    """Decomposition of rotation/scale/translation matrices."""

    def test_pure_translation(self):
        d = matrix_ops.decompose(Matrix(e=7, f=-3))

        assert d.translate == (7, -3)
        assert d.scale == pytest.approx(1)
        assert d.rotate == pytest.approx(0)

    def test_rotation_in_degrees(self):
        angle = math.radians(30)
        m = Matrix(a=math.cos(angle), b=math.sin(angle), c=-math.sin(angle), d=math.cos(angle))

        assert matrix_ops.decompose(m).rotate == pytest.approx(30)

    @pytest.mark.parametrize("angle,factor", [
        (0.0, 1.0), (0.5, 2.0), (-1.2, 0.25), (1.5, 3.0), (2.0, 1.5), (-2.5, 0.5), (3.0, 2.0),
    ])
    def test_compose_then_decompose_recovers_inputs(self, angle, factor):
        m = matrix_ops.translate_rotate_scale(Matrix(), 4, -2, angle, factor)
        d = matrix_ops.decompose(m)

        assert d.translate == pytest.approx((4, -2))
        assert d.scale == pytest.approx(factor)
        assert math.radians(d.rotate) == pytest.approx(angle)

    def test_negative_scale_reads_as_half_turn(self):
        d = matrix_ops.decompose(Matrix(a=-2, d=-2))

        assert d.scale == pytest.approx(2)
        assert abs(d.rotate) == pytest.approx(180)


class TestCombinations:
    """The seven combinations keep the axes they don't touch."""

    def test_lookup_table_covers_every_non_empty_axis_set(self):
        assert len(matrix_ops.COMBINATIONS) == 7
        assert matrix_ops.select_combination(TransformAxis.ROTATE | TransformAxis.SCALE) is matrix_ops.rotate_scale

    def test_select_empty_axes_raises(self):
        with pytest.raises(ValueError):
            matrix_ops.select_combination(TransformAxis.NONE)

    def test_translate_keeps_linear_part(self):
        start = Matrix(a=2, b=0.5, c=-0.5, d=2, e=1, f=1)
        m = matrix_ops.translate(start, 20, 30)

        assert_matrix(m, (2, 0.5, -0.5, 2, 20, 30))

    def test_rotate_scale_keeps_translation(self):
        start = Matrix(e=50, f=60)
        m = matrix_ops.rotate_scale(start, None, None, math.pi / 2, 2)

        assert_matrix(m, (0, 2, -2, 0, 50, 60))

    def test_rotate_keeps_current_scale(self):
        start = Matrix(a=3, d=3, e=5, f=5)
        m = matrix_ops.rotate(start, None, None, math.pi)

        assert_matrix(m, (-3, 0, 0, -3, 5, 5))

    def test_scale_keeps_current_rotation(self):
        quarter = matrix_ops.rotate(Matrix(), None, None, math.pi / 2)
        m = matrix_ops.scale(quarter, None, None, None, 2)

        assert_matrix(m, (0, 2, -2, 0, 0, 0))

    def test_rotate_uses_given_scale(self):
        m = matrix_ops.rotate(Matrix(a=3, d=3), None, None, 2.0, -1.5)

        assert_matrix(m, (-1.5 * math.cos(2.0), -1.5 * math.sin(2.0), 1.5 * math.sin(2.0), -1.5 * math.cos(2.0), 0, 0))

    def test_rotate_past_quarter_turn_keeps_orientation(self):
        m = matrix_ops.rotate(Matrix(), None, None, 1.75)
        m = matrix_ops.rotate(m, None, None, 2.0)

        assert m.a == pytest.approx(math.cos(2.0))
        assert m.b == pytest.approx(math.sin(2.0))

    def test_compose_picks_combination_from_arguments(self):
        m = matrix_ops.compose(Matrix(), translate_xy=(1, 2), scale_factor=2)

        assert_matrix(m, (2, 0, 0, 2, 1, 2))


class TestFormatting:
    """Attribute formatting of numbers and matrices."""

    def test_format_number_strips_noise(self):
        assert format_number(1.0) == "1"
        assert format_number(0.1 + 0.2) == "0.3"
        assert format_number(-0.0000001) == "0"

    def test_format_value(self):
        assert format_value(True) == "true"
        assert format_value(2.50) == "2.5"
        assert format_value("red") == "red"

    def test_matrix_to_svg(self):
        assert Matrix(e=20).to_svg() == "matrix(1 0 0 1 20 0)"
