"""
IInterfaceCollaborator Protocol
===============================
Optional control surface (play/pause/refresh) attached to an engine.

The engine reports status changes through the on_* hooks. The collaborator
has no authority over engine state beyond calling play(), pause(), refresh()
and end() on the engine it was attached to.
"""

from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from svganimation.engine.animation_engine import AnimationEngine


class IInterfaceCollaborator(Protocol):
    """
    Example:
        class PrintingInterface:
            def attach(self, engine): self.engine = engine
            def on_play(self): print("playing")
            def on_pause(self): print("paused")
            def on_refresh(self): print("back to start")
            def on_refreshable(self, refreshable): print("refresh", refreshable)
            def on_end(self): print("ended")
    """

    def attach(self, engine: "AnimationEngine") -> None:
        ...

    def on_play(self) -> None:
        ...

    def on_pause(self) -> None:
        ...

    def on_refresh(self) -> None:
        ...

    def on_refreshable(self, refreshable: bool) -> None:
        ...

    def on_end(self) -> None:
        ...


class NullInterface:
    """No-op collaborator used when show_interface is off"""

    def attach(self, engine: "AnimationEngine") -> None:
        pass

    def on_play(self) -> None:
        pass

    def on_pause(self) -> None:
        pass

    def on_refresh(self) -> None:
        pass

    def on_refreshable(self, refreshable: bool) -> None:
        pass

    def on_end(self) -> None:
        pass
