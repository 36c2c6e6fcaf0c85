"""
Frame loop for FlowSandbox.

One call to ``advance`` is one rendered frame: pending pointer input goes to
the active tool first, then the tool's per-frame update, then the world
tick. Tool forces therefore land in the same frame's integration.
"""

from ..physics.world import World
from ..tools.tool_manager import create_default_tool_manager
from ..ui.event_manager import PointerInbox


class FrameLoop:
    """Headless per-frame orchestration shared by the GUI and the tests."""

    def __init__(self, world=None, tool_manager=None, inbox=None):
        self.world = world or World()
        self.tool_manager = tool_manager or create_default_tool_manager()
        self.inbox = inbox or PointerInbox()
        self.frame = 0

    def advance(self):
        """
        Run one frame.

        Returns:
            int: Number of pointer events dispatched this frame
        """
        events = self.inbox.drain()
        for pointer in events:
            self.tool_manager.handle_pointer(self.world, pointer)

        self.tool_manager.update(self.world)
        self.world.tick()
        self.frame += 1
        return len(events)

    def run(self, frames):
        """Advance ``frames`` times without rendering."""
        for _ in range(int(frames)):
            self.advance()
        return self.world.particle_count()
