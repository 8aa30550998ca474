"""
Scene protocols
===============
Minimal contract between the animation engine and a scene graph.

The engine never walks the scene: it only reads and writes attributes and the
transform of the nodes it was given, and asks the first node for its
container (used to place the control panel).
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from svganimation.models.matrix import Matrix

ViewBox = Tuple[float, float, float, float]


class ISceneContainer(Protocol):
    """Root of a scene (e.g. the <svg> element)"""

    @property
    def view_box(self) -> ViewBox:
        """(x, y, width, height) of the visible area"""
        ...


@runtime_checkable
class IControlCanvas(Protocol):
    """
    Optional container capability: create elements for the control panel.

    Element handles are opaque to the caller.
    """

    def create_element(self, tag: str, attributes: Dict[str, Any], parent: Any = None, in_defs: bool = False) -> Any:
        ...

    def set_element_attributes(self, element: Any, attributes: Dict[str, Any]) -> None:
        ...


class ISceneNode(Protocol):
    """
    A mutable scene node the engine animates.

    Example:
        class MyNode:
            name = "planet"
            container = my_scene

            def get_attributes(self): return dict(self._attrs)
            def set_attribute(self, name, value): self._attrs[name] = str(value)
            def remove_attribute(self, name): self._attrs.pop(name, None)
            def get_transforms(self): return parse_transform_list(self._attrs.get("transform"))
            def set_transform(self, matrix): self._attrs["transform"] = matrix.to_svg()
    """

    @property
    def name(self) -> str:
        ...

    @property
    def container(self) -> Optional[ISceneContainer]:
        ...

    def get_attributes(self) -> Dict[str, str]:
        ...

    def set_attribute(self, name: str, value: Any) -> None:
        ...

    def remove_attribute(self, name: str) -> None:
        ...

    def get_transforms(self) -> List[Matrix]:
        """Existing transform entries, in application order"""
        ...

    def set_transform(self, matrix: Matrix) -> None:
        """Replace all transform entries with a single matrix"""
        ...
