"""Tests for SessionAgeTracker."""

from __future__ import annotations

import pytest

from conftest import T0
from logstream_monitor.core.age import SessionAgeTracker
from logstream_monitor.types import AgeState, SessionView


@pytest.fixture
def view() -> SessionView:
    return SessionView(session_id="ULID12345")


@pytest.fixture
def tracker(view, surface, scheduler, clock) -> SessionAgeTracker:
    return SessionAgeTracker(view, surface, scheduler, clock=clock)


class TestUnknown:
    def test_initial_state(self, tracker, surface, scheduler):
        assert tracker.state is AgeState.UNKNOWN
        assert not surface.age_visible
        assert scheduler.active == []

    def test_refresh_without_creation_is_noop(self, tracker, surface):
        tracker.refresh()
        assert surface.age is None

    def test_stop_before_creation_is_silent(self, tracker, view, surface, scheduler):
        tracker.on_stop_time(T0)
        assert view.stop_time == T0
        assert tracker.state is AgeState.UNKNOWN
        assert not surface.age_visible
        assert surface.age is None
        assert scheduler.active == []

    def test_resume_without_creation_does_not_tick(self, tracker, scheduler):
        tracker.resume()
        assert scheduler.active == []


class TestRunning:
    def test_creation_shows_row_and_computes_immediately(self, tracker, surface, clock):
        tracker.on_creation_time(int(clock()) - 65)
        assert tracker.state is AgeState.RUNNING
        assert surface.age_visible
        assert surface.age == "00:01:05"

    def test_tick_recomputes(self, tracker, surface, scheduler, clock):
        tracker.on_creation_time(int(clock()))
        clock.advance(65)
        scheduler.tick()
        assert surface.age == "00:01:05"

    def test_creation_in_future_clamps_to_zero(self, tracker, surface, clock):
        tracker.on_creation_time(int(clock()) + 30)
        assert surface.age == "00:00:00"

    def test_repeated_creation_keeps_one_timer(self, tracker, scheduler, clock):
        for offset in (0, 10, 20):
            tracker.on_creation_time(int(clock()) - offset)
        assert len(scheduler.active) == 1
        assert tracker.ticking

    def test_new_creation_resets_base(self, tracker, surface, scheduler, clock):
        tracker.on_creation_time(int(clock()) - 500)
        tracker.on_creation_time(int(clock()) - 5)
        assert surface.age == "00:00:05"
        clock.advance(1)
        scheduler.tick()
        assert surface.age == "00:00:06"

    def test_pause_then_resume(self, tracker, scheduler, clock):
        tracker.on_creation_time(int(clock()))
        tracker.pause()
        assert scheduler.active == []
        tracker.resume()
        tracker.resume()
        assert len(scheduler.active) == 1


class TestStopped:
    def test_stop_freezes_duration(self, tracker, surface, scheduler, clock):
        t0 = int(clock())
        tracker.on_creation_time(t0)
        tracker.on_stop_time(t0 + 3661)
        assert tracker.state is AgeState.STOPPED
        assert surface.age == "01:01:01"
        assert scheduler.active == []

        updates = len(surface.ages)
        clock.advance(100)
        scheduler.tick(5)
        tracker.refresh()
        assert len(surface.ages) == updates
        assert surface.age == "01:01:01"

    def test_resume_after_stop_does_not_tick(self, tracker, scheduler, clock):
        tracker.on_creation_time(int(clock()))
        tracker.on_stop_time(int(clock()) + 10)
        tracker.resume()
        assert scheduler.active == []

    def test_creation_after_stop_reopens(self, tracker, view, surface, scheduler, clock):
        t0 = int(clock())
        tracker.on_creation_time(t0)
        tracker.on_stop_time(t0 + 10)
        clock.advance(50)
        t2 = int(clock())
        tracker.on_creation_time(t2)

        assert view.stop_time is None
        assert tracker.state is AgeState.RUNNING
        assert surface.age == "00:00:00"
        clock.advance(3)
        scheduler.tick()
        assert surface.age == "00:00:03"

    def test_stop_then_late_creation_clears_stop(self, tracker, view, surface):
        tracker.on_stop_time(T0 + 100)
        tracker.on_creation_time(T0)
        assert view.stop_time is None
        assert surface.age_visible

    def test_hide(self, tracker, surface, scheduler, clock):
        tracker.on_creation_time(int(clock()))
        tracker.hide()
        assert not surface.age_visible
        assert scheduler.active == []
