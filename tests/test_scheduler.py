"""Tests for scheduler module."""
import pytest

from emojiclicker.scheduler import TaskScheduler, VirtualClock


def test_virtual_clock():
    clock = VirtualClock(start=100.0)
    assert clock.now() == 100.0
    assert clock.advance(5) == 105.0
    clock.set(7.0)
    assert clock.now() == 7.0


def test_runs_due_tasks_in_order():
    sched = TaskScheduler()
    ran = []
    sched.call_at(20, lambda now: ran.append("b"))
    sched.call_at(10, lambda now: ran.append("a"))
    sched.call_at(30, lambda now: ran.append("c"))
    assert sched.run_due(25) == 2
    assert ran == ["a", "b"]
    assert sched.pending() == 1
    assert sched.next_due() == 30


def test_equal_times_run_in_insertion_order():
    sched = TaskScheduler()
    ran = []
    for name in "xyz":
        sched.call_later(5, lambda now, n=name: ran.append(n), now=0)
    sched.run_due(5)
    assert ran == ["x", "y", "z"]


def test_callback_receives_now():
    sched = TaskScheduler()
    seen = []
    sched.call_at(10, seen.append)
    sched.run_due(12.5)
    assert seen == [12.5]


def test_cancel():
    sched = TaskScheduler()
    ran = []
    handle = sched.call_at(10, lambda now: ran.append(1))
    handle.cancel()
    assert sched.run_due(100) == 0
    assert ran == []
    assert sched.next_due() is None


def test_periodic_fires_once_per_gap():
    sched = TaskScheduler()
    ran = []
    handle = sched.call_every(10, ran.append, start=0)
    assert handle.periodic
    sched.run_due(9)
    sched.run_due(10)
    sched.run_due(55)
    assert ran == [10, 55]
    assert sched.next_due() == 65


def test_call_every_rejects_bad_interval():
    with pytest.raises(ValueError):
        TaskScheduler().call_every(0, lambda now: None, start=0)


def test_reset_restarts_countdown():
    sched = TaskScheduler()
    handle = sched.call_every(10, lambda now: None, start=0)
    sched.reset(handle, now=7)
    assert sched.next_due() == 17


def test_tasks_added_by_callbacks_wait_for_next_call():
    sched = TaskScheduler()
    ran = []

    def first(now):
        ran.append("first")
        sched.call_at(now, lambda t: ran.append("second"))

    sched.call_at(5, first)
    assert sched.run_due(5) == 1
    assert ran == ["first"]
    sched.run_due(5)
    assert ran == ["first", "second"]


def test_cancel_all():
    sched = TaskScheduler()
    sched.call_at(1, lambda now: None)
    sched.call_every(1, lambda now: None, start=0)
    sched.cancel_all()
    assert sched.pending() == 0
    assert sched.run_due(100) == 0
