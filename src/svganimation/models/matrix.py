"""
Affine matrix models

Matrix holds the six SVG coefficients:

    | a  c  e |
    | b  d  f |
    | 0  0  1 |
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Matrix:
    """2D affine transform (linear part a, b, c, d + translation e, f)"""
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def to_svg(self) -> str:
        """Format as an SVG transform attribute value"""
        return "matrix({})".format(" ".join(format_number(v) for v in self.as_tuple()))

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        """Transform a point"""
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )


@dataclass(frozen=True)
class DecomposedTransform:
    """Translation, uniform scale and rotation (degrees) recovered from a Matrix"""
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0
    rotate: float = 0.0

    @property
    def translate(self) -> Tuple[float, float]:
        return (self.translate_x, self.translate_y)


def format_number(value: float) -> str:
    # Short, stable output: 1 instead of 1.0, no float noise past 6 decimals
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_value(value) -> str:
    """Attribute value as written to a scene node"""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(float(value))
    return str(value)
