"""
Tests for pointer input coalescing and canvas event routing.
"""

import matplotlib.pyplot as plt
import pytest

from flowsandbox.tools import BUTTON_PRIMARY, BUTTON_SECONDARY, PHASE_DOWN, PHASE_DRAG, PHASE_UP
from flowsandbox.ui.event_manager import EventManager, PointerInbox


class FakeEvent:
    """Minimal stand-in for a matplotlib MouseEvent/KeyEvent."""

    def __init__(self, inaxes=None, xdata=None, ydata=None, button=None, key=None):
        self.inaxes = inaxes
        self.xdata = xdata
        self.ydata = ydata
        self.button = button
        self.key = key


@pytest.fixture
def canvas():
    fig, ax = plt.subplots()
    yield fig, ax
    plt.close(fig)


# ----------------------------------------------------------------------
# PointerInbox
# ----------------------------------------------------------------------
def test_drags_coalesce_to_latest_position():
    inbox = PointerInbox()
    inbox.press(1, 2, BUTTON_PRIMARY)
    inbox.drain()
    for x in range(5):
        inbox.move(10 + x, 20)
    events = inbox.drain()
    assert [e.phase for e in events] == [PHASE_DRAG]
    assert (events[0].x, events[0].y) == (14.0, 20.0)
    assert inbox.drain() == []


def test_motion_in_press_frame_moves_the_press():
    inbox = PointerInbox()
    inbox.press(1, 2, BUTTON_PRIMARY)
    inbox.move(5, 6)
    (event,) = inbox.drain()
    assert (event.x, event.y, event.phase) == (5.0, 6.0, PHASE_DOWN)


def test_short_click_spans_two_frames():
    inbox = PointerInbox()
    inbox.press(5, 5, BUTTON_SECONDARY)
    inbox.release(6, 6)
    assert not inbox.pressed

    (down,) = inbox.drain()
    (up,) = inbox.drain()
    assert (down.phase, up.phase) == (PHASE_DOWN, PHASE_UP)
    assert down.button == up.button == BUTTON_SECONDARY
    assert (up.x, up.y) == (6.0, 6.0)
    assert inbox.drain() == []


def test_many_clicks_in_one_frame_yield_one_state():
    inbox = PointerInbox()
    for x in (100, 110, 120):
        inbox.press(x, 100, BUTTON_PRIMARY)
        inbox.release()
    events = inbox.drain()
    assert len(events) <= 1
    assert (events[0].x, events[0].phase) == (120.0, PHASE_DOWN)
    assert len(inbox.drain()) <= 1
    assert not inbox.has_pending()


def test_press_cancels_held_back_release():
    inbox = PointerInbox()
    inbox.press(1, 1, BUTTON_PRIMARY)
    inbox.release()
    inbox.press(2, 2, BUTTON_PRIMARY)
    (event,) = inbox.drain()
    assert (event.x, event.phase) == (2.0, PHASE_DOWN)
    assert inbox.drain() == []
    assert inbox.pressed


def test_hover_without_press_is_ignored():
    inbox = PointerInbox()
    assert inbox.move(3, 4) is False
    assert not inbox.has_pending()


def test_release_without_press_is_ignored():
    inbox = PointerInbox()
    assert inbox.release(1, 1) is False
    assert inbox.drain() == []


def test_release_defaults_to_last_position():
    inbox = PointerInbox()
    inbox.press(1, 1, BUTTON_PRIMARY)
    inbox.move(7, 8)
    inbox.drain()
    inbox.release()
    (event,) = inbox.drain()
    assert (event.x, event.y, event.phase) == (7.0, 8.0, PHASE_UP)


def test_drag_carries_pressed_button():
    inbox = PointerInbox()
    inbox.press(0, 0, BUTTON_SECONDARY)
    inbox.drain()
    inbox.move(1, 1)
    (event,) = inbox.drain()
    assert event.is_secondary


# ----------------------------------------------------------------------
# EventManager
# ----------------------------------------------------------------------
def test_mouse_events_inside_axes_reach_inbox(canvas):
    fig, ax = canvas
    manager = EventManager(fig, ax)
    manager._on_mouse_press(FakeEvent(ax, 10.0, 20.0, button=1))
    manager._on_mouse_move(FakeEvent(ax, 12.0, 22.0))
    manager._on_mouse_release(FakeEvent(ax, 13.0, 23.0))

    (down,) = manager.inbox.drain()
    (up,) = manager.inbox.drain()
    assert (down.x, down.y, down.phase) == (12.0, 22.0, PHASE_DOWN)
    assert (up.x, up.y, up.phase) == (13.0, 23.0, PHASE_UP)
    assert manager.event_count == 3


def test_press_outside_axes_is_ignored(canvas):
    fig, ax = canvas
    manager = EventManager(fig, ax)
    manager._on_mouse_press(FakeEvent(None, None, None, button=1))
    assert not manager.inbox.has_pending()


def test_release_outside_axes_ends_press(canvas):
    fig, ax = canvas
    manager = EventManager(fig, ax)
    manager._on_mouse_press(FakeEvent(ax, 4.0, 5.0, button=1))
    manager._on_mouse_release(FakeEvent(None))
    manager.inbox.drain()
    events = manager.inbox.drain()
    assert events[-1].phase == PHASE_UP
    assert (events[-1].x, events[-1].y) == (4.0, 5.0)


def test_key_callback_errors_are_counted(canvas):
    fig, ax = canvas
    manager = EventManager(fig, ax)
    keys = []
    manager.set_key_callback(keys.append)
    manager._on_key_press(FakeEvent(key='s'))
    assert keys == ['s']

    def broken(key):
        raise RuntimeError("boom")

    manager.set_key_callback(broken)
    manager._on_key_press(FakeEvent(key='x'))
    assert manager.failed_updates == 1


def test_connect_and_disconnect(canvas, capsys):
    fig, ax = canvas
    manager = EventManager(fig, ax)
    manager.connect_events()
    assert len(manager.connected_handlers) == 4
    assert "connected" in capsys.readouterr().out
    manager.disconnect_events()
    assert manager.connected_handlers == []


def test_performance_stats_wait_for_interval(canvas):
    fig, ax = canvas
    manager = EventManager(fig, ax)
    assert manager.get_performance_stats() is None
    manager.last_performance_report -= 10.0
    manager.event_count = 50
    stats = manager.get_performance_stats()
    assert stats['events_per_sec'] == pytest.approx(5.0, rel=0.05)
    assert manager.event_count == 0
