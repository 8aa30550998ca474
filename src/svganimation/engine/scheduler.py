"""
Frame schedulers

The engine drives its ticks through exactly one scheduler:

• AsyncioFrameScheduler - one tracked asyncio task per play period, sleeping
  one frame interval between ticks (the requestAnimationFrame counterpart)
• ManualFrameScheduler  - advanced explicitly; used for offline frame export
  and deterministic tests

Both also provide the clock (now()) and deferred calls (call_later()).
A stopped scheduler never fires another tick.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from svganimation.lifecycle.task_registry import TaskCategory, TaskRegistry, create_tracked_task
from svganimation.models.enums import LogCategory
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SCHEDULER)

FrameCallback = Callable[[], None]


class ICancellable(Protocol):
    def cancel(self) -> None:
        ...


class IFrameScheduler(Protocol):
    """
    Scheduling primitive used by AnimationEngine.

    start() begins calling the callback once per frame until stop().
    """

    @property
    def running(self) -> bool:
        ...

    def now(self) -> float:
        """Current clock reading in seconds"""
        ...

    def start(self, callback: FrameCallback) -> None:
        ...

    def stop(self) -> None:
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Optional[ICancellable]:
        ...


# ============================================================
# Asyncio
# ============================================================

class AsyncioFrameScheduler:
    """
    Tick loop running as an asyncio task.

    start() needs a running event loop. An exception raised by the callback
    ends the loop task; the failure is recorded by the TaskRegistry.
    """

    def __init__(self, fps: float = 60.0, clock: Callable[[], float] = time.perf_counter):
        self.fps = fps
        self._clock = clock
        self._task: Optional[asyncio.Task] = None
        self._spent: List[asyncio.Task] = []
        self.frame_count = 0

    @property
    def frame_delay(self) -> float:
        return 1.0 / self.fps

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    def now(self) -> float:
        return self._clock()

    def start(self, callback: FrameCallback) -> None:
        if self.running:
            log.debug("Tick loop already running")
            return
        self._forget_spent()
        self._task = create_tracked_task(
            self._run_loop(callback),
            category=TaskCategory.ANIMATION,
            description=f"Animation tick loop @ {self.fps:g} fps"
        )
        self._spent.append(self._task)

    def _forget_spent(self) -> None:
        # Records of this scheduler's earlier loops, one per play period
        registry = TaskRegistry.instance()
        self._spent = [task for task in self._spent if not registry.forget(task)]

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # From inside the loop itself the identity check in _run_loop ends it
        if task is not current:
            task.cancel()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Optional[asyncio.TimerHandle]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop, so no tick can be pending either
            callback()
            return None
        return loop.call_later(delay, callback)

    async def _run_loop(self, callback: FrameCallback) -> None:
        task = asyncio.current_task()
        frames = 0
        log.debug("Tick loop started", fps=self.fps)
        try:
            while self._task is task:
                await asyncio.sleep(self.frame_delay)
                if self._task is not task:
                    break
                callback()
                frames += 1
                self.frame_count += 1
        except asyncio.CancelledError:
            log.debug("Tick loop cancelled", frames=frames)
            raise
        finally:
            if self._task is task:
                self._task = None
        log.debug("Tick loop finished", frames=frames)


# ============================================================
# Manual
# ============================================================

@dataclass(order=True)
class ManualCall:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualFrameScheduler:
    """
    Scheduler stepped by the caller.

    Example:
        scheduler = ManualFrameScheduler(frame_interval=0.5)
        engine = AnimationEngine(scheduler=scheduler)
        engine.init(objects)
        engine.play()
        scheduler.advance(2.0)   # one tick at t = 2.0
        scheduler.step()         # one tick at t = 2.5
    """

    def __init__(self, start_time: float = 0.0, frame_interval: float = 1.0 / 60.0):
        self._now = float(start_time)
        self.frame_interval = frame_interval
        self._callback: Optional[FrameCallback] = None
        self._calls: List[ManualCall] = []
        self._seq = 0
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self._callback is not None

    def now(self) -> float:
        return self._now

    def start(self, callback: FrameCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        self._seq += 1
        call = ManualCall(due=self._now + max(0.0, delay), seq=self._seq, callback=callback)
        self._calls.append(call)
        return call

    @property
    def pending_calls(self) -> int:
        return sum(1 for call in self._calls if not call.cancelled)

    def _fire_due_calls(self) -> None:
        due = sorted(call for call in self._calls if call.due <= self._now)
        self._calls = [call for call in self._calls if call.due > self._now]
        for call in due:
            if not call.cancelled:
                call.callback()

    def advance(self, dt: float) -> None:
        """
        Move the clock by dt, fire due deferred calls, then run one tick.

        Exceptions raised by the tick propagate to the caller.
        """
        self._now += dt
        self._fire_due_calls()
        if self._callback is not None:
            self.frame_count += 1
            self._callback()

    def step(self, frames: int = 1) -> None:
        for _ in range(frames):
            self.advance(self.frame_interval)

    def run_until(self, t: float) -> None:
        """Step frame by frame until the clock reaches t"""
        while self._now + 1e-12 < t:
            self.advance(min(self.frame_interval, t - self._now))
