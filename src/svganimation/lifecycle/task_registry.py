"""
Task Registry

Bookkeeping for the asyncio tasks the runtime spawns. The frame loop of
AsyncioFrameScheduler runs as one tracked task per play() so that an equation
blowing up mid-animation shows up as a FAILED record with its exception,
instead of a silently dead task.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Awaitable, Dict, List, Optional

from svganimation.models.enums import LogCategory
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    ANIMATION = auto()   # frame loops
    INTERFACE = auto()
    SYSTEM = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    id: int
    category: TaskCategory
    description: str
    created_at: str
    created_timestamp: float

    @property
    def label(self) -> str:
        return f"#{self.id} {self.category.name.lower()}:{self.description}"


@dataclass
class TaskRecord:
    """What the registry knows about one task, filled in when it finishes"""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None
    finished_at: Optional[str] = None

    @property
    def running(self) -> bool:
        return not self.task.done()

    @property
    def outcome(self) -> str:
        if self.running:
            return "running"
        if self.cancelled:
            return "cancelled"
        return "failed" if self.finished_with_error is not None else "completed"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskRegistry:
    """
    Process-wide registry, reached through TaskRegistry.instance().

    Tests reset it by setting TaskRegistry._instance to None.
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self) -> None:
        self._by_task: Dict[asyncio.Task, TaskRecord] = {}
        self._ids = itertools.count(1)

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        """Start tracking a task; returns its registry id"""
        created = _utc_now()
        info = TaskInfo(
            id=next(self._ids),
            category=category,
            description=description,
            created_at=created.isoformat(),
            created_timestamp=created.timestamp(),
        )
        self._by_task[task] = TaskRecord(task=task, info=info)
        task.add_done_callback(self._finished)
        log.debug(f"Tracking {info.label}")
        return info.id

    def _finished(self, task: asyncio.Task) -> None:
        record = self._by_task.get(task)
        if record is None:
            # forgotten before it finished
            return
        record.finished_at = _utc_now().isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"{record.info.label} cancelled")
            return

        error = task.exception()
        if error is None:
            record.finished_return = task.result()
            log.debug(f"{record.info.label} done")
            return

        record.finished_with_error = error
        log.error(
            f"{record.info.label} FAILED: {error}",
            error_type=type(error).__name__,
            created_at=record.info.created_at
        )

    def _select(self, outcome: str, category: Optional[TaskCategory] = None) -> List[TaskRecord]:
        return [
            record for record in self._by_task.values()
            if record.outcome == outcome and (category is None or record.info.category is category)
        ]

    def list_all(self) -> List[TaskRecord]:
        return list(self._by_task.values())

    def active(self, category: Optional[TaskCategory] = None) -> List[TaskRecord]:
        return self._select("running", category)

    def failed(self) -> List[TaskRecord]:
        return self._select("failed")

    def cancelled(self) -> List[TaskRecord]:
        return self._select("cancelled")

    def summary(self) -> str:
        counts = {"running": 0, "completed": 0, "failed": 0, "cancelled": 0}
        for record in self._by_task.values():
            counts[record.outcome] += 1
        parts = ", ".join(f"{name}={count}" for name, count in counts.items())
        return f"Tasks: total={len(self._by_task)}, {parts}"

    def forget_finished(self) -> int:
        """Drop records of tasks that are no longer running; returns how many"""
        finished = [task for task, record in self._by_task.items() if not record.running]
        for task in finished:
            del self._by_task[task]
        return len(finished)

    def forget(self, task: asyncio.Task) -> bool:
        """
        Drop the record of a finished task.

        Returns False while the record has to stay: the task is running or its
        completion has not been recorded yet. Unknown tasks count as forgotten.
        """
        record = self._by_task.get(task)
        if record is None:
            return True
        if record.finished_at is None:
            return False
        del self._by_task[task]
        return True

    async def cancel_all(self, category: Optional[TaskCategory] = None) -> int:
        """Cancel running tasks, optionally of one category, and wait for them to unwind"""
        current = asyncio.current_task()
        victims = [record.task for record in self.active(category) if record.task is not current]
        for task in victims:
            task.cancel()
        if victims:
            await asyncio.gather(*victims, return_exceptions=True)
        log.debug(
            "Cancelled tracked tasks",
            count=len(victims),
            category=category.name if category else "ALL"
        )
        return len(victims)


def create_tracked_task(
    coro: Awaitable[Any],
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """loop.create_task() plus registration"""
    task = (loop or asyncio.get_running_loop()).create_task(coro)
    TaskRegistry.instance().register(task=task, category=category, description=description)
    return task
