"""
Animation Engine

Owns the master clock, the active update list and the lifecycle:

    NOT_STARTED ──play──▶ PLAYING ◀──play/pause──▶ PAUSED
         ▲                   │                        │
         │                   └─────────end────────────┤
         │                                            ▼
         └──────────────────refresh─────────────── ENDED

Every tick computes elapsed = now - start and runs the live update functions
in order: registration order across objects, descriptor order within one.
Lifecycle calls made from inside a tick (e.g. an equation calling refresh())
are queued and applied once the pass has finished.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union

from svganimation.engine.animated_object import AnimatedObject
from svganimation.engine.compiler import compile_object
from svganimation.engine.scheduler import AsyncioFrameScheduler, IFrameScheduler, ICancellable
from svganimation.engine.update_list import ActiveUpdateList
from svganimation.engine.windower import window
from svganimation.errors import ConfigurationError, RuntimeEvaluationError
from svganimation.interface import IInterfaceCollaborator, create_interface
from svganimation.models.enums import EngineStatus, LogCategory
from svganimation.models.settings import EngineSettings
from svganimation.models.snapshot import EngineSnapshotDTO
from svganimation.scene.protocol import ISceneContainer
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)


@dataclass
class EngineState:
    """Mutable per-engine state"""
    status: EngineStatus = EngineStatus.NOT_STARTED
    start_timestamp: float = 0.0
    elapsed: float = 0.0
    updates: ActiveUpdateList = field(default_factory=ActiveUpdateList)


class AnimationEngine:
    """
    Drives compiled animations of a set of AnimatedObjects.

    Example:
        engine = AnimationEngine(EngineSettings(show_interface=False))
        engine.init([planet, moon])
        engine.play()
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        scheduler: Optional[IFrameScheduler] = None,
        interface: Optional[IInterfaceCollaborator] = None
    ):
        self.settings = settings or EngineSettings()
        self.scheduler: IFrameScheduler = scheduler or AsyncioFrameScheduler(fps=self.settings.fps)
        self.interface: Optional[IInterfaceCollaborator] = interface

        self.state = EngineState()
        self.objects: List[AnimatedObject] = []
        self.container: Optional[ISceneContainer] = None
        self.last_error: Optional[RuntimeEvaluationError] = None

        self._in_tick = False
        self._deferred: List[Callable[[], None]] = []
        self._settle_call: Optional[ICancellable] = None
        self._settling = False

    # ============================================================
    # Introspection
    # ============================================================

    @property
    def status(self) -> EngineStatus:
        return self.state.status

    @property
    def elapsed(self) -> float:
        return self.state.elapsed

    @property
    def updates(self) -> ActiveUpdateList:
        return self.state.updates

    @property
    def initialized(self) -> bool:
        return bool(self.objects)

    def snapshot(self) -> EngineSnapshotDTO:
        return EngineSnapshotDTO.from_engine(self)

    # ============================================================
    # Registration
    # ============================================================

    def init(self, objects: Union[AnimatedObject, Iterable[AnimatedObject]]) -> None:
        """
        Register objects, capture their baselines and compile their animations.

        Raises:
            ConfigurationError: no objects, no object with an animation, the
                first object has no scene container, or a descriptor is malformed
        """
        if isinstance(objects, AnimatedObject):
            objects = [objects]
        objects = list(objects or [])

        if not objects:
            raise ConfigurationError.no_objects()
        if not any(obj.has_animation for obj in objects):
            raise ConfigurationError.no_animations(len(objects))

        container = objects[0].node.container
        if container is None:
            raise ConfigurationError.no_container(objects[0].node)

        # Validate every descriptor before touching any node
        for obj in objects:
            _ = obj.specs

        if self.initialized:
            log.info("Re-initializing engine")
            self._stop_ticking()
            for obj in self.objects:
                obj.restore_baseline()

        self.objects = objects
        self.container = container
        self.last_error = None

        for obj in self.objects:
            obj.capture_baseline()
            obj.initialize_matrix()

        self.state.start_timestamp = 0.0
        self.state.elapsed = 0.0
        self.state.status = EngineStatus.NOT_STARTED
        self._compile()

        if self.interface is None:
            self.interface = create_interface(self.settings, container)
        self.interface.attach(self)
        self.interface.on_refreshable(False)

        log.info(
            "Animation engine initialized",
            objects=len(self.objects),
            animated=sum(1 for obj in self.objects if obj.has_animation),
            updates=len(self.state.updates)
        )

    def _compile(self) -> None:
        updates = self.state.updates
        updates.clear()
        for obj in self.objects:
            for compiled in compile_object(obj):
                updates.add(
                    lambda remove, c=compiled: window(c.update, c.spec.range, c.spec.local, remove, c.label),
                    label=compiled.label
                )

    # ============================================================
    # Lifecycle
    # ============================================================

    def _defer(self, action: Callable[[], None], name: str) -> bool:
        """Queue a lifecycle call made from inside a tick; True if queued"""
        if not self._in_tick:
            return False
        log.debug(f"{name}() called during tick, deferred to tick boundary")
        self._deferred.append(action)
        return True

    def _set_status(self, status: EngineStatus) -> None:
        old = self.state.status
        self.state.status = status
        log.info("Status changed", old=old.name, new=status.name, elapsed=round(self.state.elapsed, 3))

    def play(self) -> None:
        """Start from the beginning, or resume after pause() with elapsed time preserved"""
        if self._defer(self.play, "play"):
            return
        if not self.initialized:
            log.debug("play() before init(), ignored")
            return

        status = self.state.status
        now = self.scheduler.now()
        if status is EngineStatus.NOT_STARTED:
            self.state.start_timestamp = now
            self.state.elapsed = 0.0
        elif status is EngineStatus.PAUSED:
            self.state.start_timestamp = now - self.state.elapsed
        else:
            log.debug(f"play() ignored in {status.name}")
            return

        self._set_status(EngineStatus.PLAYING)
        self.scheduler.start(self._on_frame)
        self.interface.on_play()
        if status is EngineStatus.NOT_STARTED:
            self.interface.on_refreshable(True)

    def pause(self) -> None:
        """Stop ticking and freeze elapsed time"""
        if self._defer(self.pause, "pause"):
            return
        if self.state.status is not EngineStatus.PLAYING:
            log.debug(f"pause() ignored in {self.state.status.name}")
            return

        self.scheduler.stop()
        self._set_status(EngineStatus.PAUSED)
        self.interface.on_pause()

    def refresh(self) -> None:
        """Restore every object to its baseline, recompile, back to NOT_STARTED"""
        if self._defer(self.refresh, "refresh"):
            return
        if self.state.status is EngineStatus.NOT_STARTED:
            log.debug("refresh() ignored in NOT_STARTED")
            return

        self._stop_ticking()
        self.state.elapsed = 0.0
        self.state.start_timestamp = 0.0

        for obj in self.objects:
            obj.restore_baseline()
            obj.initialize_matrix(write_back=False)

        self._compile()
        self.last_error = None
        self._set_status(EngineStatus.NOT_STARTED)
        self.interface.on_refresh()
        self.interface.on_refreshable(False)

    def end(self) -> None:
        """
        Mark the animation as ended.

        Ticking continues for settings.end_settle_delay seconds so the last
        frame settles, then stops. With restart_at_the_end the engine refreshes
        right away.
        """
        if self._defer(self.end, "end"):
            return
        if self.state.status not in (EngineStatus.PLAYING, EngineStatus.PAUSED):
            log.debug(f"end() ignored in {self.state.status.name}")
            return

        self._set_status(EngineStatus.ENDED)
        self._settling = True
        self._settle_call = self.scheduler.call_later(self.settings.end_settle_delay, self._finish_end)
        self.interface.on_end()

        if self.settings.restart_at_the_end:
            log.info("Restarting at the end")
            self.refresh()

    def _finish_end(self) -> None:
        self._settle_call = None
        if not self._settling:
            return
        self._settling = False
        self.scheduler.stop()
        log.debug("Ticking stopped after end", elapsed=round(self.state.elapsed, 3))

    def _stop_ticking(self) -> None:
        self.scheduler.stop()
        if self._settle_call is not None:
            self._settle_call.cancel()
            self._settle_call = None
        self._settling = False

    # ============================================================
    # Ticking
    # ============================================================

    def _on_frame(self) -> None:
        """Scheduler callback: a failing equation halts ticking (engine → PAUSED)"""
        try:
            self.tick()
        except RuntimeEvaluationError as ex:
            self._halt(ex)
            raise

    def _halt(self, error: RuntimeEvaluationError) -> None:
        self.last_error = error
        log.error(
            "Equation failed, ticking halted",
            code=error.code,
            object=error.object_name,
            property=error.prop,
            time=round(error.time, 4),
            error=error.message
        )
        self._stop_ticking()
        if self.state.status is EngineStatus.PLAYING:
            self._set_status(EngineStatus.PAUSED)
            self.interface.on_pause()

    def tick(self) -> None:
        """
        One update pass over the active list.

        Runs while PLAYING, and while ENDED until the settle delay has passed.
        Exceptions from equations propagate (RuntimeEvaluationError).
        """
        status = self.state.status
        if status is not EngineStatus.PLAYING and not (status is EngineStatus.ENDED and self._settling):
            return

        elapsed = self.scheduler.now() - self.state.start_timestamp
        self.state.elapsed = elapsed

        self._in_tick = True
        try:
            for entry in self.state.updates:
                entry.fn(elapsed)
        except Exception:
            dropped = len(self._deferred)
            self._deferred = []
            if dropped:
                log.warn("Deferred lifecycle calls dropped after failed tick", dropped=dropped)
            raise
        finally:
            self._in_tick = False

        self.state.updates.compact()

        deferred, self._deferred = self._deferred, []
        for action in deferred:
            action()

        if self.state.status is EngineStatus.PLAYING and not self.state.updates:
            log.info("All animation windows expired")
            self.end()

    def __repr__(self) -> str:
        return (
            f"AnimationEngine(status={self.state.status.name}, elapsed={self.state.elapsed:.3f}, "
            f"objects={len(self.objects)}, updates={len(self.state.updates)})"
        )
