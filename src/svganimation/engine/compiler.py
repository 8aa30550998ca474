"""
Animation Compiler

Turns an AnimatedObject's descriptor into update functions, one per
(property, spec). Each update takes the elapsed time in seconds and writes the
result to the object: set_matrix() for transform specs, set_attribute() for
everything else.
"""

from numbers import Real
from typing import Any, Callable, List, NamedTuple

from svganimation.engine import matrix_ops
from svganimation.engine.animated_object import AnimatedObject
from svganimation.errors import RuntimeEvaluationError
from svganimation.models.animation import AnimationSpec, TransformEquation
from svganimation.models.enums import TransformAxis, LogCategory
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ANIMATION)

UpdateFn = Callable[[float], None]


class CompiledUpdate(NamedTuple):
    obj: AnimatedObject
    spec: AnimationSpec
    update: UpdateFn
    label: str


def _evaluate(obj: AnimatedObject, prop: str, equation, t: float) -> Any:
    try:
        return equation(t)
    except Exception as ex:
        raise RuntimeEvaluationError.equation_failed(obj.name, prop, t, ex) from ex


def _evaluate_number(obj: AnimatedObject, prop: str, equation, t: float) -> float:
    value = _evaluate(obj, prop, equation, t)
    if not isinstance(value, Real) or isinstance(value, bool):
        raise RuntimeEvaluationError.non_numeric(obj.name, prop, t, value)
    return float(value)


def compile_transform(obj: AnimatedObject, equation: TransformEquation) -> UpdateFn:
    """
    Build the update for a transform spec.

    The composition strategy is picked once, from the axes present. Rotation
    or scale missing from the equation continue from the object's last
    requested values, never from the decomposition of its matrix.
    """
    axes = equation.axes
    combine = matrix_ops.select_combination(axes)
    has_translate = TransformAxis.TRANSLATE in axes
    has_rotate = TransformAxis.ROTATE in axes
    has_scale = TransformAxis.SCALE in axes

    def update(t: float) -> None:
        x = y = None
        angle, factor = obj.angle, obj.scale_factor
        if has_translate:
            x = _evaluate_number(obj, "transform.translate.x", equation.translate[0], t)
            y = _evaluate_number(obj, "transform.translate.y", equation.translate[1], t)
        if has_rotate:
            angle = _evaluate_number(obj, "transform.rotate", equation.rotate, t)
        if has_scale:
            factor = _evaluate_number(obj, "transform.scale", equation.scale, t)
        obj.set_matrix(combine(obj.matrix, x, y, angle, factor), angle=angle, scale=factor)

    return update


def compile_attribute(obj: AnimatedObject, prop: str, equation) -> UpdateFn:
    """Build the update for a plain attribute spec"""
    def update(t: float) -> None:
        obj.set_attribute(prop, _evaluate(obj, prop, equation, t))

    return update


def compile_spec(obj: AnimatedObject, spec: AnimationSpec) -> UpdateFn:
    if spec.is_transform:
        return compile_transform(obj, spec.equation)
    return compile_attribute(obj, spec.prop, spec.equation)


def compile_object(obj: AnimatedObject) -> List[CompiledUpdate]:
    """
    Compile every spec of an object, in descriptor order.

    A property holding a list yields one independent update per element.
    """
    compiled = []
    for prop, specs in obj.specs.items():
        for index, spec in enumerate(specs):
            label = f"{obj.name}.{prop}" if len(specs) == 1 else f"{obj.name}.{prop}[{index}]"
            compiled.append(CompiledUpdate(obj, spec, compile_spec(obj, spec), label))

    log.debug(f"Compiled {obj.name}", updates=len(compiled))
    return compiled
