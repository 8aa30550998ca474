"""
Range windowing for compiled update functions

    no range      → the update itself, always active
    r             → fires once at the first tick with t >= r, then removed
    [start]       → active for t >= start, never removed
    [start, end]  → active for start <= t <= end; removed (without firing)
                    on the first tick with t > end

With local=True the update receives t - start instead of the absolute t.
"""

from typing import Callable

from svganimation.models.animation import AnimationRange
from svganimation.models.enums import RangeKind, LogCategory
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ANIMATION)

UpdateFn = Callable[[float], None]


class WindowedUpdate:
    """Update function gated by an AnimationRange"""

    def __init__(self, update: UpdateFn, window: AnimationRange, local: bool, remove: Callable[[], bool], label: str = ""):
        self.update = update
        self.window = window
        self.local = local
        self.remove = remove
        self.label = label

    def _time(self, t: float) -> float:
        return t - self.window.start if self.local else t

    def __call__(self, t: float) -> None:
        kind = self.window.kind

        if t < self.window.start:
            return

        if kind is RangeKind.ONCE:
            # Removed first: a raising equation still counts as fired
            self.remove()
            self.update(self._time(t))
            log.debug(f"Window fired once: {self.label}", time=round(t, 4))
            return

        if kind is RangeKind.CLOSED and t > self.window.end:
            self.remove()
            log.debug(f"Window expired: {self.label}", time=round(t, 4))
            return

        self.update(self._time(t))

    def __repr__(self) -> str:
        return f"WindowedUpdate({self.label!r}, {self.window.kind.name}, start={self.window.start}, end={self.window.end}, local={self.local})"


def window(update: UpdateFn, spec_range: AnimationRange, local: bool, remove: Callable[[], bool], label: str = "") -> UpdateFn:
    """Wrap an update function with its validity window"""
    if spec_range.kind is RangeKind.ALWAYS:
        return update
    return WindowedUpdate(update, spec_range, local, remove, label)
