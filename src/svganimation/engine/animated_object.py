"""
Animated Object

Wraps one scene node: keeps its baseline attributes for refresh, its current
transform matrix, the cached decomposition of that matrix and the last
requested rotation and scale.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Union

from svganimation.engine import matrix_ops
from svganimation.models.animation import AnimationSpec, parse_descriptor
from svganimation.models.enums import LogCategory
from svganimation.models.matrix import Matrix, DecomposedTransform
from svganimation.scene.protocol import ISceneNode
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ANIMATION)

AttributeValue = Union[float, str]


def parse_attribute_value(raw: str) -> AttributeValue:
    """Number where the text parses as one, otherwise the text itself"""
    try:
        return float(raw)
    except (TypeError, ValueError):
        return raw


class AnimatedObject:
    """
    One animated scene node.

    The engine holds a non-owning reference to the node; node lifetime is the
    scene's business. Failures of the node (missing element, rejected
    attribute) propagate to the caller.

    Example:
        planet = AnimatedObject(doc.require_node("planet"), animation={
            "transform": {"translate": {"x": lambda t: 10 * t, "y": lambda t: 0}},
        })
    """

    def __init__(self, node: ISceneNode, animation: Optional[Mapping[str, Any]] = None):
        self.node = node

        # Parsed lazily so descriptors can be attached after construction
        self._specs: Optional[Dict[str, List[AnimationSpec]]] = None
        self.animation = animation

        self.baseline_attributes: Dict[str, AttributeValue] = {}
        self._baseline_raw: Dict[str, str] = {}

        self.matrix: Matrix = matrix_ops.identity()
        self.decomposed: DecomposedTransform = matrix_ops.decompose(self.matrix)

        # Last requested rotation (radians) and scale; axes missing from a
        # transform equation continue from these
        self.angle: float = 0.0
        self.scale_factor: float = 1.0

    @property
    def animation(self) -> Optional[Mapping[str, Any]]:
        return self._animation

    @animation.setter
    def animation(self, value: Optional[Mapping[str, Any]]) -> None:
        self._animation = value
        self._specs = None

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def has_animation(self) -> bool:
        return bool(self.animation)

    @property
    def specs(self) -> Dict[str, List[AnimationSpec]]:
        """Normalized descriptor, {property: [AnimationSpec, ...]}"""
        if self._specs is None:
            self._specs = parse_descriptor(self.animation) if self.animation else {}
        return self._specs

    # ------------------------------------------------------------
    # Baseline
    # ------------------------------------------------------------

    def capture_baseline(self) -> None:
        """Snapshot every current node attribute for later restore_baseline()"""
        self._baseline_raw = dict(self.node.get_attributes())
        self.baseline_attributes = {
            name: parse_attribute_value(raw) for name, raw in self._baseline_raw.items()
        }
        log.debug(f"Baseline captured for {self.name}", attributes=len(self._baseline_raw))

    def restore_baseline(self) -> None:
        """Clear all node attributes and re-apply the captured baseline verbatim"""
        for name in list(self.node.get_attributes()):
            self.node.remove_attribute(name)
        for name, raw in self._baseline_raw.items():
            self.node.set_attribute(name, raw)

    # ------------------------------------------------------------
    # Matrix
    # ------------------------------------------------------------

    def initialize_matrix(self, write_back: bool = True) -> None:
        """
        Read the node's transform into a single matrix.

        Several transform entries are consolidated into one, which is written
        back to the node unless write_back is False (refresh leaves the
        restored baseline text alone). A node without transform starts from
        identity.
        """
        transforms = self.node.get_transforms()
        if transforms:
            self.matrix = matrix_ops.consolidate(transforms)
            if write_back and len(transforms) > 1:
                self.node.set_transform(self.matrix)
        else:
            self.matrix = matrix_ops.identity()
        self._sync_from_matrix()

    def _sync_from_matrix(self) -> None:
        self.decomposed = matrix_ops.decompose(self.matrix)
        self.angle = math.radians(self.decomposed.rotate)
        self.scale_factor = self.decomposed.scale

    def set_matrix(self, matrix: Matrix, angle: Optional[float] = None, scale: Optional[float] = None) -> None:
        """
        Push a matrix to the node; keeps the cached decomposition in sync.

        Args:
            matrix: New transform
            angle: Rotation (radians) the matrix was built from
            scale: Scale factor the matrix was built from

        Without angle and scale both are re-derived from the matrix.
        """
        self.node.set_transform(matrix)
        self.matrix = matrix
        if angle is None and scale is None:
            self._sync_from_matrix()
            return
        self.decomposed = matrix_ops.decompose(matrix)
        if angle is not None:
            self.angle = angle
        if scale is not None:
            self.scale_factor = scale

    def set_attribute(self, name: str, value: Any) -> None:
        self.node.set_attribute(name, value)

    def __repr__(self) -> str:
        return f"AnimatedObject({self.name!r}, properties={list(self.animation or {})})"
