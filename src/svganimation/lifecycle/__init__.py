"""
Lifecycle package - asyncio task tracking
"""

from .task_registry import TaskRegistry, TaskCategory, TaskRecord, create_tracked_task

__all__ = [
    'TaskRegistry',
    'TaskCategory',
    'TaskRecord',
    'create_tracked_task',
]
