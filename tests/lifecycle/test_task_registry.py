"""
Test task registry tracking of completed, failed and cancelled tasks.
"""

import asyncio

import pytest

from svganimation.lifecycle import TaskCategory, TaskRegistry, create_tracked_task


class TestTaskRegistry:

    @pytest.mark.asyncio
    async def test_completed_task_records_result(self):
        async def work():
            return 42

        task = create_tracked_task(work(), category=TaskCategory.GENERAL, description="answer")
        await task
        await asyncio.sleep(0)

        (record,) = TaskRegistry.instance().list_all()
        assert record.finished_return == 42
        assert record.finished_at is not None
        assert record.info.category is TaskCategory.GENERAL

    @pytest.mark.asyncio
    async def test_failed_task_logged(self, quiet_logger):
        async def broken():
            raise RuntimeError("tick loop exploded")

        task = create_tracked_task(broken(), category=TaskCategory.ANIMATION, description="broken loop")
        with pytest.raises(RuntimeError):
            await task
        await asyncio.sleep(0)

        failed = TaskRegistry.instance().failed()
        assert len(failed) == 1
        assert isinstance(failed[0].finished_with_error, RuntimeError)
        assert any("FAILED" in line for line in quiet_logger)

    @pytest.mark.asyncio
    async def test_cancel_all_by_category(self):
        async def forever():
            while True:
                await asyncio.sleep(0.01)

        create_tracked_task(forever(), category=TaskCategory.ANIMATION, description="loop")
        interface_task = create_tracked_task(forever(), category=TaskCategory.INTERFACE, description="ui")

        cancelled = await TaskRegistry.instance().cancel_all(TaskCategory.ANIMATION)

        registry = TaskRegistry.instance()
        assert cancelled == 1
        assert len(registry.cancelled()) == 1
        assert [r.info.description for r in registry.active()] == ["ui"]

        interface_task.cancel()
        await asyncio.gather(interface_task, return_exceptions=True)
        assert "cancelled=2" in registry.summary()

    @pytest.mark.asyncio
    async def test_forget_finished(self):
        async def quick():
            return None

        await create_tracked_task(quick(), category=TaskCategory.SYSTEM, description="quick")
        await asyncio.sleep(0)

        registry = TaskRegistry.instance()
        assert registry.forget_finished() == 1
        assert registry.list_all() == []

    @pytest.mark.asyncio
    async def test_record_outcome_and_label(self):
        async def quick():
            return "ok"

        task = create_tracked_task(quick(), category=TaskCategory.INTERFACE, description="arrow")
        (record,) = TaskRegistry.instance().list_all()
        assert record.outcome == "running"
        assert record.info.label == "#1 interface:arrow"

        await task
        await asyncio.sleep(0)

        assert record.outcome == "completed"
        assert "completed=1" in TaskRegistry.instance().summary()

    @pytest.mark.asyncio
    async def test_forget_keeps_running_tasks(self):
        async def quick():
            await asyncio.sleep(0.01)

        task = create_tracked_task(quick(), category=TaskCategory.ANIMATION, description="loop")
        registry = TaskRegistry.instance()

        assert registry.forget(task) is False
        await task
        await asyncio.sleep(0)

        assert registry.forget(task) is True
        assert registry.list_all() == []
