"""
In-memory scene

Dict-backed nodes for headless runs and tests. Attribute values are stored as
strings, exactly as an SVG DOM would hold them; the transform lives in the
"transform" attribute.
"""

from typing import Any, Dict, List, Optional

from svganimation.models.matrix import Matrix, format_value
from svganimation.scene.protocol import ViewBox
from svganimation.scene.transform_list import parse_transform_list


class MemoryContainer:
    """Scene root holding a view box and its nodes"""

    def __init__(self, view_box: ViewBox = (0.0, 0.0, 100.0, 100.0)):
        self._view_box = tuple(float(v) for v in view_box)
        self.nodes: Dict[str, "MemoryNode"] = {}

    @property
    def view_box(self) -> ViewBox:
        return self._view_box

    def add_node(self, name: str, attributes: Optional[Dict[str, Any]] = None) -> "MemoryNode":
        node = MemoryNode(name, attributes, container=self)
        self.nodes[name] = node
        return node

    def __repr__(self) -> str:
        return f"MemoryContainer(view_box={self._view_box}, nodes={list(self.nodes)})"


class MemoryNode:
    """Scene node with string attributes"""

    def __init__(
        self,
        name: str,
        attributes: Optional[Dict[str, Any]] = None,
        container: Optional[MemoryContainer] = None
    ):
        self._name = name
        self._container = container
        self.attributes: Dict[str, str] = {
            key: format_value(value) for key, value in (attributes or {}).items()
        }

    @property
    def name(self) -> str:
        return self._name

    @property
    def container(self) -> Optional[MemoryContainer]:
        return self._container

    def get_attributes(self) -> Dict[str, str]:
        return dict(self.attributes)

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = format_value(value)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def get_transforms(self) -> List[Matrix]:
        return parse_transform_list(self.attributes.get("transform"))

    def set_transform(self, matrix: Matrix) -> None:
        self.attributes["transform"] = matrix.to_svg()

    def __repr__(self) -> str:
        return f"MemoryNode({self._name!r})"
