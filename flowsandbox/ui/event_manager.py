"""
Event manager module for pointer and keyboard handling.

Matplotlib delivers mouse callbacks independently of the animation timer.
The PointerInbox folds them into a single pending pointer state per frame,
with the most recent position and button winning. The EventManager connects
the canvas callbacks to the inbox.
"""

import time
from threading import Lock

from ..tools.base import PointerEvent, PHASE_DOWN, PHASE_DRAG, PHASE_UP


class PointerInbox:
    """
    Latest pointer input since the previous frame.

    At most one PointerEvent is pending at a time. A press replaces whatever
    is pending; motion after a press in the same frame moves the press. A
    release that follows a press within one frame is held back and delivered
    on the next drain, so a click shorter than a frame still reaches the tool
    exactly once.
    """

    def __init__(self):
        self._lock = Lock()
        self._pending = None
        self._release_pending = False
        self._release_button = None
        self.pressed = False
        self.button = None
        self.x = 0.0
        self.y = 0.0

    def press(self, x, y, button):
        with self._lock:
            self.pressed = True
            self.button = button
            self.x, self.y = float(x), float(y)
            self._pending = PointerEvent(x, y, button, PHASE_DOWN)
            self._release_pending = False
            self._release_button = None

    def move(self, x, y):
        """Record pointer motion; hovering without a pressed button is ignored."""
        with self._lock:
            if not self.pressed:
                return False
            self.x, self.y = float(x), float(y)
            if self._pending is not None and self._pending.phase == PHASE_DOWN:
                self._pending = PointerEvent(x, y, self.button, PHASE_DOWN)
            else:
                self._pending = PointerEvent(x, y, self.button, PHASE_DRAG)
            return True

    def release(self, x=None, y=None):
        """Record a release, at the last known position when none is given."""
        with self._lock:
            if not self.pressed:
                return False
            if x is not None and y is not None:
                self.x, self.y = float(x), float(y)
            if self._pending is not None and self._pending.phase == PHASE_DOWN:
                # Deliver the press this frame and the release on the next
                self._release_pending = True
                self._release_button = self.button
            else:
                self._pending = PointerEvent(self.x, self.y, self.button, PHASE_UP)
            self.pressed = False
            self.button = None
            return True

    def drain(self):
        """
        Take the pending pointer state for this frame.

        Returns:
            list: Zero or one PointerEvent
        """
        with self._lock:
            if self._pending is not None:
                event = self._pending
                self._pending = None
                return [event]
            if self._release_pending:
                self._release_pending = False
                button, self._release_button = self._release_button, None
                return [PointerEvent(self.x, self.y, button, PHASE_UP)]
            return []

    def has_pending(self):
        with self._lock:
            return self._pending is not None or self._release_pending


class EventManager:
    """
    Centralized event manager connecting canvas callbacks to the inbox.

    Features:
    - Only events over the sandbox axes become pointer input
    - Hotkeys and other key presses routed through a callback
    - Callback errors are counted, never raised into the GUI loop
    - Performance monitoring and diagnostics
    """

    def __init__(self, fig, ax, inbox=None):
        """Initialize the event manager."""
        self.fig = fig
        self.ax = ax  # Sandbox axes
        self.inbox = inbox or PointerInbox()
        self.key_callback = None

        # Performance monitoring
        self.event_count = 0
        self.failed_updates = 0
        self.last_performance_report = time.time()

        # Connected event handlers
        self.connected_handlers = []

    def connect_events(self):
        """Connect all event handlers in a coordinated way."""
        self.disconnect_events()

        try:
            canvas = self.fig.canvas
            self.connected_handlers = [
                canvas.mpl_connect('button_press_event', self._on_mouse_press),
                canvas.mpl_connect('motion_notify_event', self._on_mouse_move),
                canvas.mpl_connect('button_release_event', self._on_mouse_release),
                canvas.mpl_connect('key_press_event', self._on_key_press),
            ]
            print("✓ Event handlers connected successfully")
        except Exception as e:
            print(f"✗ Failed to connect event handlers: {e}")
            self.failed_updates += 1

    def disconnect_events(self):
        """Safely disconnect all event handlers."""
        for cid in self.connected_handlers:
            try:
                self.fig.canvas.mpl_disconnect(cid)
            except Exception as e:
                print(f"Warning: Failed to disconnect handler {cid}: {e}")
        self.connected_handlers.clear()

    def set_key_callback(self, callback):
        """Set the function receiving key names from key_press_event."""
        self.key_callback = callback

    def _in_sandbox(self, event):
        return event.inaxes == self.ax and event.xdata is not None and event.ydata is not None

    def _on_mouse_press(self, event):
        if not self._in_sandbox(event):
            return
        # Widgets may hold the toolbar in pan/zoom mode; leave those clicks alone
        toolbar = getattr(self.fig.canvas, 'toolbar', None)
        if toolbar is not None and getattr(toolbar, 'mode', ''):
            return
        try:
            self.inbox.press(event.xdata, event.ydata, int(event.button))
            self.event_count += 1
        except Exception:
            self.failed_updates += 1

    def _on_mouse_move(self, event):
        if not self._in_sandbox(event):
            return
        try:
            if self.inbox.move(event.xdata, event.ydata):
                self.event_count += 1
        except Exception:
            self.failed_updates += 1

    def _on_mouse_release(self, event):
        try:
            # Releases outside the axes still end the press at the last position
            if self._in_sandbox(event):
                released = self.inbox.release(event.xdata, event.ydata)
            else:
                released = self.inbox.release()
            if released:
                self.event_count += 1
        except Exception:
            self.failed_updates += 1

    def _on_key_press(self, event):
        if not event.key or self.key_callback is None:
            return
        try:
            self.key_callback(event.key)
            self.event_count += 1
        except Exception:
            self.failed_updates += 1

    def get_performance_stats(self):
        """Get performance statistics for diagnostics."""
        current_time = time.time()
        elapsed = current_time - self.last_performance_report

        if elapsed > 5.0:  # Report every 5 seconds
            events_per_sec = self.event_count / elapsed if elapsed > 0 else 0
            failure_rate = (self.failed_updates / max(self.event_count, 1)) * 100
            print(f"Events: {events_per_sec:.1f}/s, failure rate: {failure_rate:.1f}%")

            self.event_count = 0
            self.failed_updates = 0
            self.last_performance_report = current_time

            return {
                'events_per_sec': events_per_sec,
                'failure_rate': failure_rate,
            }

        return None
