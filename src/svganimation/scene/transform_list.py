"""Parse SVG transform attribute values into matrices."""

import math
import re
from typing import List, Optional

from svganimation.engine.matrix_ops import multiply
from svganimation.models.matrix import Matrix

TRANSFORM_RE = re.compile(r"([a-zA-Z]+)\s*\(([^)]*)\)")
NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _rotation(degrees: float) -> Matrix:
    rad = math.radians(degrees)
    cos_a, sin_a = math.cos(rad), math.sin(rad)
    return Matrix(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)


def _entry(name: str, args: List[float], text: str) -> Matrix:
    n = len(args)
    if name == "matrix" and n == 6:
        return Matrix(*args)
    if name == "translate" and n in (1, 2):
        return Matrix(e=args[0], f=args[1] if n == 2 else 0.0)
    if name == "scale" and n in (1, 2):
        return Matrix(a=args[0], d=args[1] if n == 2 else args[0])
    if name == "rotate" and n == 1:
        return _rotation(args[0])
    if name == "rotate" and n == 3:
        cx, cy = args[1], args[2]
        return multiply(multiply(Matrix(e=cx, f=cy), _rotation(args[0])), Matrix(e=-cx, f=-cy))
    if name == "skewX" and n == 1:
        return Matrix(c=math.tan(math.radians(args[0])))
    if name == "skewY" and n == 1:
        return Matrix(b=math.tan(math.radians(args[0])))
    raise ValueError(f"Unsupported transform '{name}({', '.join(str(a) for a in args)})' in {text!r}")


def parse_transform_list(text: Optional[str]) -> List[Matrix]:
    """
    Parse e.g. "translate(10 20) rotate(45)" into one Matrix per entry.

    Raises:
        ValueError: unknown function or wrong argument count
    """
    if not text or not text.strip():
        return []
    matrices = []
    for name, raw_args in TRANSFORM_RE.findall(text):
        args = [float(v) for v in NUMBER_RE.findall(raw_args)]
        matrices.append(_entry(name, args, text))
    return matrices
