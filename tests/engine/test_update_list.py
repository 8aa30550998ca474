"""
Tests for ActiveUpdateList (arena with tombstones and generation-tagged handles).
"""

from svganimation.engine import ActiveUpdateList


def recorder(log, name):
    """Factory producing an update that records its calls."""
    def factory(remove):
        return lambda t: log.append((name, t))
    return factory


class TestActiveUpdateList:

    def test_iterates_in_insertion_order(self):
        updates = ActiveUpdateList()
        calls = []
        for name in ("a", "b", "c"):
            updates.add(recorder(calls, name), label=name)

        for entry in updates:
            entry.fn(1.0)

        assert [name for name, _ in calls] == ["a", "b", "c"]
        assert updates.labels() == ["a", "b", "c"]

    def test_remove_leaves_tombstone(self):
        updates = ActiveUpdateList()
        first = updates.add(recorder([], "a"))
        second = updates.add(recorder([], "b"))

        assert updates.remove(first) is True
        assert len(updates) == 1
        assert updates.is_live(second)
        assert not updates.is_live(first)

    def test_double_remove_is_noop(self):
        updates = ActiveUpdateList()
        handle = updates.add(recorder([], "a"))

        assert updates.remove(handle) is True
        assert updates.remove(handle) is False
        assert len(updates) == 0
        assert not updates

    def test_self_removal_during_iteration(self):
        """An entry removing itself does not shift the entries after it."""
        updates = ActiveUpdateList()
        calls = []

        def once(remove):
            def fn(t):
                remove()
                calls.append(("once", t))
            return fn

        updates.add(once, label="once")
        updates.add(recorder(calls, "after"), label="after")

        for entry in updates:
            entry.fn(1.0)
        for entry in updates:
            entry.fn(2.0)

        assert calls == [("once", 1.0), ("after", 1.0), ("after", 2.0)]

    def test_clear_invalidates_old_handles(self):
        updates = ActiveUpdateList()
        stale = updates.add(recorder([], "a"))

        updates.clear()
        fresh = updates.add(recorder([], "b"))

        assert updates.generation == 1
        assert updates.remove(stale) is False
        assert updates.is_live(fresh)

    def test_compact_keeps_order_and_handles(self):
        updates = ActiveUpdateList()
        handles = [updates.add(recorder([], name), label=name) for name in ("a", "b", "c", "d")]
        updates.remove(handles[1])
        updates.remove(handles[2])

        assert updates.compact() == 2
        assert updates.tombstones == 0
        assert updates.labels() == ["a", "d"]

        # surviving handles still address their entries
        assert updates.remove(handles[3]) is True
        assert updates.labels() == ["a"]
        assert updates.remove(handles[1]) is False

    def test_compact_without_tombstones_is_noop(self):
        updates = ActiveUpdateList()
        updates.add(recorder([], "a"))

        assert updates.compact() == 0
