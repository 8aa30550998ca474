"""Bind animation objects to elements of an SVG document (ElementTree based)."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union
from xml.etree import ElementTree as ET

from svganimation.models.enums import LogCategory
from svganimation.models.matrix import Matrix, format_value
from svganimation.scene.protocol import ViewBox
from svganimation.scene.transform_list import NUMBER_RE, parse_transform_list
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SCENE)

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")


def _qualify(tag: str) -> str:
    return tag if tag.startswith("{") else f"{{{SVG_NS}}}{tag}"


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class SvgDocument:
    """An SVG document acting as scene container and control canvas."""

    def __init__(self, root: ET.Element):
        if _local(root.tag) != "svg":
            raise ValueError(f"Root element must be <svg>, got <{_local(root.tag)}>")
        self.root = root

    @classmethod
    def from_string(cls, text: str) -> "SvgDocument":
        return cls(ET.fromstring(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SvgDocument":
        tree = ET.parse(str(path))
        log.debug(f"Loaded SVG {path}")
        return cls(tree.getroot())

    # ------------------------------------------------------------
    # Scene container
    # ------------------------------------------------------------

    @property
    def view_box(self) -> ViewBox:
        raw = self.root.get("viewBox")
        if raw:
            values = [float(v) for v in NUMBER_RE.findall(raw)]
            if len(values) == 4:
                return tuple(values)
        width = NUMBER_RE.findall(self.root.get("width", ""))
        height = NUMBER_RE.findall(self.root.get("height", ""))
        return (0.0, 0.0, float(width[0]) if width else 0.0, float(height[0]) if height else 0.0)

    def iter_nodes(self) -> Iterator["SvgNode"]:
        for element in self.root.iter():
            if element is not self.root and element.get("id"):
                yield SvgNode(element, self)

    def get_node(self, element_id: str) -> Optional["SvgNode"]:
        for element in self.root.iter():
            if element.get("id") == element_id:
                return SvgNode(element, self)
        return None

    def require_node(self, element_id: str) -> "SvgNode":
        node = self.get_node(element_id)
        if node is None:
            raise KeyError(f"No element with id '{element_id}' in SVG document")
        return node

    # ------------------------------------------------------------
    # Control canvas
    # ------------------------------------------------------------

    def _defs(self) -> ET.Element:
        for child in self.root:
            if _local(child.tag) == "defs":
                return child
        defs = ET.Element(_qualify("defs"))
        self.root.insert(0, defs)
        return defs

    def create_element(self, tag: str, attributes: Dict[str, Any], parent: Any = None, in_defs: bool = False) -> ET.Element:
        if parent is None:
            parent = self._defs() if in_defs else self.root
        element = ET.SubElement(parent, _qualify(tag))
        self.set_element_attributes(element, attributes)
        return element

    def set_element_attributes(self, element: ET.Element, attributes: Dict[str, Any]) -> None:
        for name, value in attributes.items():
            element.set(name, format_value(value))

    # ------------------------------------------------------------
    # Output
    # ------------------------------------------------------------

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def write(self, path: Union[str, Path]) -> None:
        ET.ElementTree(self.root).write(str(path), encoding="utf-8", xml_declaration=True)

    def __repr__(self) -> str:
        return f"SvgDocument(view_box={self.view_box})"


class SvgNode:
    """One element of an SvgDocument"""

    def __init__(self, element: ET.Element, document: SvgDocument):
        self.element = element
        self.document = document

    @property
    def name(self) -> str:
        return self.element.get("id") or _local(self.element.tag)

    @property
    def container(self) -> SvgDocument:
        return self.document

    def get_attributes(self) -> Dict[str, str]:
        return dict(self.element.attrib)

    def set_attribute(self, name: str, value: Any) -> None:
        self.element.set(name, format_value(value))

    def remove_attribute(self, name: str) -> None:
        self.element.attrib.pop(name, None)

    def get_transforms(self) -> List[Matrix]:
        return parse_transform_list(self.element.get("transform"))

    def set_transform(self, matrix: Matrix) -> None:
        self.element.set("transform", matrix.to_svg())

    def __eq__(self, other) -> bool:
        return isinstance(other, SvgNode) and other.element is self.element

    def __hash__(self) -> int:
        return id(self.element)

    def __repr__(self) -> str:
        return f"SvgNode({self.name!r})"
