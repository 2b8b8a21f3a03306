"""Tests for the event loop."""

import pytest

from matching_pairs.game.scheduler import EventLoop, ManualClock


class TestManualClock:
    """Tests for ManualClock."""

    def test_advance(self):
        """Test the clock moves only when advanced."""
        clock = ManualClock()
        assert clock.now() == 0
        clock.advance(250)
        assert clock() == 250

    def test_no_backwards(self):
        """Test the clock refuses to move backwards."""
        with pytest.raises(ValueError):
            ManualClock().advance(-1)


class TestEventLoop:
    """Tests for EventLoop."""

    def test_call_later_waits_for_deadline(self):
        """Test a task runs only once its deadline passes."""
        loop = EventLoop(clock=ManualClock())
        fired = []
        loop.call_later(1000, lambda: fired.append("x"))

        assert loop.advance(500) == 0
        assert fired == []
        assert loop.pending() == 1
        assert loop.next_deadline() == 1000

        assert loop.advance(500) == 1
        assert fired == ["x"]
        assert loop.pending() == 0
        assert loop.next_deadline() is None

    def test_tasks_fire_once(self):
        """Test a fired task does not run again."""
        loop = EventLoop(clock=ManualClock())
        fired = []
        loop.call_later(10, lambda: fired.append(1))
        loop.advance(10)
        loop.advance(10)
        assert fired == [1]

    def test_order(self):
        """Test tasks run by deadline, FIFO among equal deadlines."""
        loop = EventLoop(clock=ManualClock())
        order = []
        loop.call_later(20, lambda: order.append("late"))
        loop.call_later(10, lambda: order.append("first"))
        loop.call_later(10, lambda: order.append("second"))
        loop.call_later(0, lambda: order.append("now"))

        loop.advance(20)
        assert order == ["now", "first", "second", "late"]

    def test_task_scheduling_task(self):
        """Test a task may schedule another task on the same loop."""
        loop = EventLoop(clock=ManualClock())
        order = []

        def outer():
            order.append("outer")
            loop.call_later(0, lambda: order.append("inner"))

        loop.call_later(0, outer)
        assert loop.run_due() == 2
        assert order == ["outer", "inner"]

    def test_run_until_idle_sleeps(self):
        """Test run_until_idle waits for each deadline."""
        clock = ManualClock()
        loop = EventLoop(clock=clock)
        slept = []

        def sleep(seconds):
            slept.append(seconds)
            clock.advance(seconds * 1000)

        fired = []
        loop.call_later(1000, lambda: fired.append(1))
        loop.call_later(1500, lambda: fired.append(2))
        assert loop.run_until_idle(sleep) == 2
        assert fired == [1, 2]
        assert slept == [1.0, 0.5]

    def test_advance_requires_manual_clock(self):
        """Test advance() is refused on a real clock."""
        with pytest.raises(TypeError):
            EventLoop().advance(10)
