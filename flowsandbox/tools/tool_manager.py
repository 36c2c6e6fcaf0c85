"""
ToolManager: tool registration, switching, and event forwarding.

Exactly one tool is active at a time. UI components subscribe to tool
changes so parameter controls can be rebuilt for the new tool.
"""

from .attract_repulse_tool import AttractRepulseTool
from .spawn_tool import SpawnTool


class ToolManager:
    """Registry of tools keyed by id, with a single active tool."""

    def __init__(self):
        self.tools = {}  # id -> Tool, in registration order
        self.active_tool_id = None
        self.active_tool = None
        self._listeners = []

    def register(self, tool):
        """
        Register a tool with the manager.

        Args:
            tool (Tool): Tool instance with id, label and icon

        Returns:
            bool: True if the tool was registered
        """
        if not getattr(tool, 'id', None) or not getattr(tool, 'label', None) or not getattr(tool, 'icon', None):
            print("Error: Tool must have id, label, and icon properties")
            return False
        self.tools[tool.id] = tool
        return True

    def set_active(self, tool_id):
        """
        Activate a tool by id. Unknown ids leave the current tool active.

        Returns:
            bool: True if ``tool_id`` is now the active tool
        """
        if tool_id not in self.tools:
            print(f"Error: Tool \"{tool_id}\" not found")
            return False
        if tool_id == self.active_tool_id:
            return True

        if self.active_tool is not None:
            self.active_tool.on_deselect()

        self.active_tool_id = tool_id
        self.active_tool = self.tools[tool_id]
        self.active_tool.on_select()

        for callback in list(self._listeners):
            callback(self.active_tool)
        return True

    def add_listener(self, callback):
        """Call ``callback(tool)`` whenever the active tool changes."""
        self._listeners.append(callback)

    def get_active(self):
        return self.active_tool

    def get_active_id(self):
        return self.active_tool_id

    def get_all_tools(self):
        return list(self.tools.values())

    def update(self, world):
        """Per-frame update of the active tool."""
        if self.active_tool is not None:
            self.active_tool.on_frame_update(world)

    def handle_pointer(self, world, pointer):
        if self.active_tool is not None:
            self.active_tool.handle_pointer(world, pointer)

    def handle_key_pressed(self, key):
        if self.active_tool is not None:
            self.active_tool.on_key_pressed(key)

    def indicator(self):
        if self.active_tool is not None:
            return self.active_tool.indicator()
        return None


def create_default_tool_manager(active='spawn'):
    """ToolManager with the spawn and attract/repulse tools registered."""
    manager = ToolManager()
    manager.register(SpawnTool())
    manager.register(AttractRepulseTool())
    manager.set_active(active)
    return manager
