"""
Animation descriptor models

An animation descriptor maps a property name ("transform" or any attribute
name) to one spec or a list of specs, written as plain dicts:

    {
        "transform": [{
            "range": [1, 5],
            "local": True,
            "translate": {"x": lambda t: 100 * math.cos(2 * t),
                          "y": lambda t: 100 * math.sin(2 * t)},
            "rotate": lambda t: t,
        }],
        "r": lambda t: 2 * t,
    }

parse_descriptor() normalizes that into AnimationSpec objects.
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from svganimation.errors import ConfigurationError
from svganimation.models.enums import RangeKind, TransformAxis

TRANSFORM = "transform"

Equation = Callable[[float], Any]


@dataclass(frozen=True)
class AnimationRange:
    """Validity window of an animation spec"""
    kind: RangeKind = RangeKind.ALWAYS
    start: float = 0.0
    end: Optional[float] = None

    @classmethod
    def from_raw(cls, raw, prop: str = "?") -> "AnimationRange":
        """
        Build from the descriptor form: None, a number, [start] or [start, end]
        """
        if raw is None:
            return cls()
        if isinstance(raw, AnimationRange):
            return raw
        if _is_number(raw):
            return cls(kind=RangeKind.ONCE, start=float(raw))
        if isinstance(raw, (list, tuple)):
            if not all(_is_number(v) for v in raw):
                raise ConfigurationError.invalid_descriptor(prop, f"range values must be numbers, got {raw!r}")
            if len(raw) == 1:
                return cls(kind=RangeKind.OPEN, start=float(raw[0]))
            if len(raw) == 2:
                start, end = float(raw[0]), float(raw[1])
                if end < start:
                    raise ConfigurationError.invalid_descriptor(prop, f"range end {end} is before start {start}")
                return cls(kind=RangeKind.CLOSED, start=start, end=end)
        raise ConfigurationError.invalid_descriptor(prop, f"unsupported range {raw!r}")


@dataclass(frozen=True)
class TransformEquation:
    """Per-axis equations of a transform animation (rotate is in radians)"""
    translate: Optional[Tuple[Equation, Equation]] = None
    rotate: Optional[Equation] = None
    scale: Optional[Equation] = None

    @property
    def axes(self) -> TransformAxis:
        axes = TransformAxis.NONE
        if self.translate is not None:
            axes |= TransformAxis.TRANSLATE
        if self.rotate is not None:
            axes |= TransformAxis.ROTATE
        if self.scale is not None:
            axes |= TransformAxis.SCALE
        return axes


@dataclass(frozen=True)
class AnimationSpec:
    """One animation of one property"""
    prop: str
    equation: Union[TransformEquation, Equation]
    range: AnimationRange = field(default_factory=AnimationRange)
    local: bool = False

    @property
    def is_transform(self) -> bool:
        return self.prop == TRANSFORM


AnimationDescriptor = Mapping[str, Any]


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _require_callable(value, prop: str, name: str) -> Equation:
    if not callable(value):
        raise ConfigurationError.invalid_descriptor(prop, f"'{name}' must be callable, got {type(value).__name__}")
    return value


def _parse_translate(raw, prop: str) -> Tuple[Equation, Equation]:
    if isinstance(raw, Mapping):
        if "x" not in raw or "y" not in raw:
            raise ConfigurationError.invalid_descriptor(prop, "translate needs both 'x' and 'y'")
        x, y = raw["x"], raw["y"]
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        x, y = raw
    else:
        raise ConfigurationError.invalid_descriptor(prop, f"unsupported translate {raw!r}")
    return (_require_callable(x, prop, "translate.x"), _require_callable(y, prop, "translate.y"))


def _parse_transform_spec(raw: Mapping, prop: str) -> AnimationSpec:
    translate = _parse_translate(raw["translate"], prop) if raw.get("translate") is not None else None
    rotate = _require_callable(raw["rotate"], prop, "rotate") if raw.get("rotate") is not None else None
    scale = _require_callable(raw["scale"], prop, "scale") if raw.get("scale") is not None else None

    equation = TransformEquation(translate=translate, rotate=rotate, scale=scale)
    if not equation.axes:
        raise ConfigurationError.invalid_descriptor(prop, "transform needs at least one of translate, rotate, scale")

    return AnimationSpec(
        prop=prop,
        equation=equation,
        range=AnimationRange.from_raw(raw.get("range"), prop),
        local=bool(raw.get("local", False)),
    )


def _parse_attribute_spec(raw, prop: str) -> AnimationSpec:
    if callable(raw):
        return AnimationSpec(prop=prop, equation=raw)
    if isinstance(raw, Mapping):
        if "equation" not in raw:
            raise ConfigurationError.invalid_descriptor(prop, "attribute animation needs an 'equation'")
        return AnimationSpec(
            prop=prop,
            equation=_require_callable(raw["equation"], prop, "equation"),
            range=AnimationRange.from_raw(raw.get("range"), prop),
            local=bool(raw.get("local", False)),
        )
    raise ConfigurationError.invalid_descriptor(prop, f"unsupported animation {type(raw).__name__}")


def parse_spec(prop: str, raw) -> AnimationSpec:
    """Normalize a single descriptor entry into an AnimationSpec"""
    if isinstance(raw, AnimationSpec):
        if raw.prop != prop:
            raise ConfigurationError.invalid_descriptor(prop, f"spec is bound to '{raw.prop}'")
        return raw
    if prop == TRANSFORM:
        if isinstance(raw, TransformEquation):
            if not raw.axes:
                raise ConfigurationError.invalid_descriptor(prop, "transform needs at least one of translate, rotate, scale")
            return AnimationSpec(prop=prop, equation=raw)
        if not isinstance(raw, Mapping):
            raise ConfigurationError.invalid_descriptor(prop, f"transform animation must be a mapping, got {type(raw).__name__}")
        return _parse_transform_spec(raw, prop)
    return _parse_attribute_spec(raw, prop)


def parse_descriptor(descriptor: AnimationDescriptor) -> Dict[str, List[AnimationSpec]]:
    """
    Normalize a descriptor into {property: [AnimationSpec, ...]}.

    Property order and per-property list order are preserved.

    Raises:
        ConfigurationError: descriptor is not a mapping or an entry is malformed
    """
    if not isinstance(descriptor, Mapping):
        raise ConfigurationError.invalid_descriptor("*", f"descriptor must be a mapping, got {type(descriptor).__name__}")

    specs: Dict[str, List[AnimationSpec]] = {}
    for prop, raw in descriptor.items():
        entries: Sequence = raw if isinstance(raw, (list, tuple)) else [raw]
        if not entries:
            raise ConfigurationError.invalid_descriptor(prop, "empty animation list")
        specs[prop] = [parse_spec(prop, entry) for entry in entries]
    return specs
