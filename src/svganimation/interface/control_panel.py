"""
Control Panel

Play/pause and refresh buttons for an animated scene.

State:
  • icon            PLAY or PAUSE, shown on the play/pause button
  • refresh_visible refresh button shown once the animation has started

Placement: bottom-left of the container's view box (25 units in from the
left and bottom edges), or interface_position when set explicitly. The
refresh button sits 30 units right of play/pause; both scale with
interface_size.

When the container can create elements (IControlCanvas, e.g. SvgDocument)
the panel draws itself into it and keeps the drawing in sync.
"""

from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from svganimation.models.enums import EngineStatus, LogCategory, PlayPauseIcon
from svganimation.models.matrix import Matrix
from svganimation.models.settings import EngineSettings
from svganimation.scene.protocol import IControlCanvas, ISceneContainer
from svganimation.utils.logger import get_logger

if TYPE_CHECKING:
    from svganimation.engine.animation_engine import AnimationEngine

log = get_logger().for_category(LogCategory.INTERFACE)

AUTO_MARGIN = 25.0
REFRESH_OFFSET = 30.0

PLAY_POINTS = ("-10,-10 -10,10 0,-5 0,5", "-10,-10 -10,10 10,0 10,0")
PAUSE_POINTS = ("-9,-10 -9,10 -2,10 -2,-10", "2,-10 2,10 9,10 9,-10")

ARROW_MARKER_ID = "svganimation-arrow"


class ControlPanel:
    """Interface collaborator with play/pause and refresh buttons"""

    def __init__(self, container: ISceneContainer, settings: Optional[EngineSettings] = None):
        self.container = container
        self.settings = settings or EngineSettings()
        self.engine: Optional["AnimationEngine"] = None

        self.icon = PlayPauseIcon.PLAY
        self.refresh_visible = False

        self._elements: Dict[str, Any] = {}

    # ------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------

    @property
    def size(self) -> float:
        return self.settings.interface_size

    @property
    def position(self) -> Tuple[float, float]:
        """Centre of the play/pause button"""
        if self.settings.interface_position == "auto":
            x, y, _width, height = self.container.view_box
            return (x + AUTO_MARGIN, y + height - AUTO_MARGIN)
        px, py = self.settings.interface_position
        return (float(px), float(py))

    @property
    def refresh_position(self) -> Tuple[float, float]:
        x, y = self.position
        return (x + REFRESH_OFFSET * self.size, y)

    @property
    def matrix(self) -> Matrix:
        x, y = self.position
        return Matrix(a=self.size, d=self.size, e=x, f=y)

    @property
    def is_drawn(self) -> bool:
        return bool(self._elements)

    # ------------------------------------------------------------
    # Collaborator hooks
    # ------------------------------------------------------------

    def attach(self, engine: "AnimationEngine") -> None:
        self.engine = engine
        if isinstance(self.container, IControlCanvas) and not self.is_drawn:
            self.draw(self.container)

    def on_play(self) -> None:
        self._set_icon(PlayPauseIcon.PAUSE)

    def on_pause(self) -> None:
        self._set_icon(PlayPauseIcon.PLAY)

    def on_refresh(self) -> None:
        self._set_icon(PlayPauseIcon.PLAY)

    def on_refreshable(self, refreshable: bool) -> None:
        if self.refresh_visible == refreshable:
            return
        self.refresh_visible = refreshable
        self._sync_refresh()

    def on_end(self) -> None:
        self._set_icon(PlayPauseIcon.PLAY)

    # ------------------------------------------------------------
    # User intent
    # ------------------------------------------------------------

    def press_play_pause(self) -> None:
        """Play when stopped or paused, pause when playing"""
        engine = self._require_engine()
        if engine.status in (EngineStatus.NOT_STARTED, EngineStatus.PAUSED):
            engine.play()
        elif engine.status is EngineStatus.PLAYING:
            engine.pause()
        else:
            log.debug("Play/pause pressed after end, ignored")

    def press_refresh(self) -> None:
        self._require_engine().refresh()

    def _require_engine(self) -> "AnimationEngine":
        if self.engine is None:
            raise RuntimeError("ControlPanel is not attached to an engine")
        return self.engine

    # ------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------

    def draw(self, canvas: IControlCanvas) -> None:
        """Create the button elements in the canvas"""
        color = self.settings.interface_color
        group_transform = self.matrix.to_svg()

        marker = canvas.create_element("marker", {
            "id": ARROW_MARKER_ID,
            "viewBox": "0 0 10 10",
            "refX": 1, "refY": 5,
            "markerWidth": 3, "markerHeight": 3,
            "orient": "auto",
            "fill": color,
        }, in_defs=True)
        canvas.create_element("path", {"d": "M 0 0 L 10 5 L 0 10 z"}, parent=marker)

        # Refresh: two arrowed arcs plus an invisible hit area
        refresh_group = canvas.create_element("g", {"transform": group_transform})
        refresh_icon = canvas.create_element("g", {
            "fill": "none",
            "stroke": color,
            "stroke-width": 2,
            "transform": f"translate({REFRESH_OFFSET:g}, 0)",
        }, parent=refresh_group)
        for d in ("M-10 0 A 10 10 0 0 1 0 -10", "M10 0 A 10 10 0 0 1 0 10"):
            canvas.create_element("path", {"d": d, "marker-end": f"url(#{ARROW_MARKER_ID})"}, parent=refresh_icon)
        canvas.create_element("rect", {
            "id": "refresh",
            "x": -10, "y": -10, "width": 20, "height": 20,
            "fill-opacity": 0,
            "transform": f"translate({REFRESH_OFFSET:g}, 0)",
        }, parent=refresh_group)

        # Play/pause: two polygons reshaped between triangle and bars
        play_group = canvas.create_element("g", {"transform": group_transform})
        icon_group = canvas.create_element("g", {"fill": color}, parent=play_group)
        first = canvas.create_element("polygon", {"points": PLAY_POINTS[0]}, parent=icon_group)
        second = canvas.create_element("polygon", {"points": PLAY_POINTS[1]}, parent=icon_group)
        canvas.create_element("rect", {
            "id": "playPause",
            "x": -10, "y": -10, "width": 20, "height": 20,
            "fill-opacity": 0,
        }, parent=play_group)

        self._elements = {
            "refresh_icon": refresh_icon,
            "play_first": first,
            "play_second": second,
        }
        self._sync_icon()
        self._sync_refresh()
        log.debug("Control panel drawn", position=self.position, size=self.size)

    def _set_icon(self, icon: PlayPauseIcon) -> None:
        if self.icon is icon:
            return
        self.icon = icon
        self._sync_icon()

    def _sync_icon(self) -> None:
        if not self.is_drawn:
            return
        points = PAUSE_POINTS if self.icon is PlayPauseIcon.PAUSE else PLAY_POINTS
        self.container.set_element_attributes(self._elements["play_first"], {"points": points[0]})
        self.container.set_element_attributes(self._elements["play_second"], {"points": points[1]})

    def _sync_refresh(self) -> None:
        if not self.is_drawn:
            return
        element = self._elements["refresh_icon"]
        if self.settings.interface_animation:
            # Fade instead of hard toggle
            self.container.set_element_attributes(element, {
                "display": "block",
                "opacity": 1 if self.refresh_visible else 0,
                "style": "transition: opacity 0.3s",
            })
        else:
            self.container.set_element_attributes(element, {
                "display": "block" if self.refresh_visible else "none",
            })

    def __repr__(self) -> str:
        return f"ControlPanel(icon={self.icon.name}, refresh_visible={self.refresh_visible}, position={self.position})"
