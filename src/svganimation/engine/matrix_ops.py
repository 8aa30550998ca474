"""
Matrix operations for 2D affine transforms

Pure functions: nothing here touches scene nodes.

Composition builds the linear part from a rotation angle (radians) and a
uniform scale, in the SVG convention used by rotate():

    a = cos(angle) * scale     c = -sin(angle) * scale
    b = sin(angle) * scale     d = a

Translation (e, f) is replaced only when the translate axis participates.
A combination called without angle or scale falls back to the decomposition
of the current matrix. AnimatedObject passes its last requested values
instead, because the decomposition cannot tell (angle, -scale) from
(angle + pi, scale).
"""

import math
from functools import reduce
from typing import Callable, Dict, Iterable, Optional

from svganimation.models.enums import TransformAxis
from svganimation.models.matrix import Matrix, DecomposedTransform

Combination = Callable[[Matrix, Optional[float], Optional[float], Optional[float], Optional[float]], Matrix]


# ---------------------------------------------------------------------------
# Basic operations
# ---------------------------------------------------------------------------

def identity() -> Matrix:
    return Matrix()


def multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """Matrix product m1 · m2 (m2 is applied first)"""
    return Matrix(
        a=m1.a * m2.a + m1.c * m2.b,
        b=m1.b * m2.a + m1.d * m2.b,
        c=m1.a * m2.c + m1.c * m2.d,
        d=m1.b * m2.c + m1.d * m2.d,
        e=m1.a * m2.e + m1.c * m2.f + m1.e,
        f=m1.b * m2.e + m1.d * m2.f + m1.f,
    )


def consolidate(matrices: Iterable[Matrix]) -> Matrix:
    """Collapse a transform list (applied left to right as in SVG) into one matrix"""
    return reduce(multiply, matrices, identity())


def decompose(m: Matrix) -> DecomposedTransform:
    """
    Recover translation, uniform scale and rotation (degrees) from a matrix.

    scale = sqrt(a² + c²), rotate = atan2(-c, a). The scale is never negative:
    a negative uniform scale is reported as a half turn.
    """
    return DecomposedTransform(
        translate_x=m.e,
        translate_y=m.f,
        scale=math.hypot(m.a, m.c),
        rotate=math.degrees(math.atan2(-m.c, m.a)),
    )


def _linear(m: Matrix, angle: float, scale: float, x: float, y: float) -> Matrix:
    a = math.cos(angle) * scale
    b = math.sin(angle) * scale
    return Matrix(a=a, b=b, c=-b, d=a, e=x, f=y)


def _angle_or_current(m: Matrix, angle: Optional[float]) -> float:
    return math.radians(decompose(m).rotate) if angle is None else angle


def _scale_or_current(m: Matrix, scale: Optional[float]) -> float:
    return decompose(m).scale if scale is None else scale


# ---------------------------------------------------------------------------
# The seven axis combinations
#
# Uniform signature (m, x, y, angle, scale). Translation arguments of
# combinations without the translate axis are ignored; a missing angle or
# scale is read from m.
# ---------------------------------------------------------------------------

def translate(m: Matrix, x, y, angle=None, scale=None) -> Matrix:
    return Matrix(a=m.a, b=m.b, c=m.c, d=m.d, e=x, f=y)


def rotate(m: Matrix, x, y, angle, scale=None) -> Matrix:
    return _linear(m, angle, _scale_or_current(m, scale), m.e, m.f)


def scale(m: Matrix, x, y, angle, scale) -> Matrix:
    return _linear(m, _angle_or_current(m, angle), scale, m.e, m.f)


def translate_rotate(m: Matrix, x, y, angle, scale=None) -> Matrix:
    return _linear(m, angle, _scale_or_current(m, scale), x, y)


def translate_scale(m: Matrix, x, y, angle, scale) -> Matrix:
    return _linear(m, _angle_or_current(m, angle), scale, x, y)


def rotate_scale(m: Matrix, x, y, angle, scale) -> Matrix:
    return _linear(m, angle, scale, m.e, m.f)


def translate_rotate_scale(m: Matrix, x, y, angle, scale) -> Matrix:
    return _linear(m, angle, scale, x, y)


COMBINATIONS: Dict[TransformAxis, Combination] = {
    TransformAxis.TRANSLATE: translate,
    TransformAxis.ROTATE: rotate,
    TransformAxis.SCALE: scale,
    TransformAxis.TRANSLATE | TransformAxis.ROTATE: translate_rotate,
    TransformAxis.TRANSLATE | TransformAxis.SCALE: translate_scale,
    TransformAxis.ROTATE | TransformAxis.SCALE: rotate_scale,
    TransformAxis.TRANSLATE | TransformAxis.ROTATE | TransformAxis.SCALE: translate_rotate_scale,
}


def select_combination(axes: TransformAxis) -> Combination:
    """
    Look up the composition strategy for a set of present axes.

    Raises:
        ValueError: no axis present
    """
    try:
        return COMBINATIONS[axes]
    except KeyError:
        raise ValueError(f"No transform combination for axes {axes!r}") from None


def compose(m: Matrix, translate_xy=None, angle: Optional[float] = None, scale_factor: Optional[float] = None) -> Matrix:
    """Convenience wrapper: pick the combination from the arguments given"""
    axes = TransformAxis.NONE
    x = y = None
    if translate_xy is not None:
        axes |= TransformAxis.TRANSLATE
        x, y = translate_xy
    if angle is not None:
        axes |= TransformAxis.ROTATE
    if scale_factor is not None:
        axes |= TransformAxis.SCALE
    return select_combination(axes)(m, x, y, angle, scale_factor)
