"""
Base tool interface for FlowSandbox.

Tools are self-contained components that interact with the particle world
in response to pointer input. Every tool implements the same capability
set; the ToolManager dispatches to the active tool through it.
"""

# Pointer buttons, matching matplotlib's MouseButton values
BUTTON_PRIMARY = 1
BUTTON_SECONDARY = 3

# Pointer phases
PHASE_DOWN = 'down'
PHASE_DRAG = 'drag'
PHASE_UP = 'up'
POINTER_PHASES = (PHASE_DOWN, PHASE_DRAG, PHASE_UP)


class PointerEvent:
    """Pointer state in canvas coordinates."""

    __slots__ = ('x', 'y', 'button', 'phase')

    def __init__(self, x, y, button=BUTTON_PRIMARY, phase=PHASE_DOWN):
        if phase not in POINTER_PHASES:
            raise ValueError(f"Unknown pointer phase: {phase!r}")
        self.x = float(x)
        self.y = float(y)
        self.button = button
        self.phase = phase

    @property
    def is_primary(self):
        return self.button == BUTTON_PRIMARY

    @property
    def is_secondary(self):
        return self.button == BUTTON_SECONDARY

    def __eq__(self, other):
        if not isinstance(other, PointerEvent):
            return NotImplemented
        return (self.x, self.y, self.button, self.phase) == (other.x, other.y, other.button, other.phase)

    def __repr__(self):
        return f"PointerEvent(x={self.x:.1f}, y={self.y:.1f}, button={self.button}, phase={self.phase!r})"


class ToolParam:
    """Named numeric tool parameter with declared bounds for the UI."""

    __slots__ = ('value', 'min', 'max', 'label', 'step')

    def __init__(self, value, min_value, max_value, label=None, step=None):
        self.value = value
        self.min = min_value
        self.max = max_value
        self.label = label
        # Slider granularity, defaults to a hundredth of the range
        self.step = step if step is not None else (max_value - min_value) / 100.0

    def __repr__(self):
        return f"ToolParam(value={self.value!r}, min={self.min!r}, max={self.max!r}, label={self.label!r})"


class Tool:
    """
    Base class defining the interface for all tools.

    Subclasses override the pointer hooks they care about. The world is
    passed into every hook; tools never hold on to it.
    """

    def __init__(self, tool_id, label, icon):
        self.id = tool_id
        self.label = label
        self.icon = icon
        self.params = {}
        self.active = False

    def on_select(self):
        """Called when this tool becomes active."""
        self.active = True

    def on_deselect(self):
        """Called when this tool is deactivated."""
        self.active = False

    def on_pointer_down(self, world, pointer):
        pass

    def on_pointer_drag(self, world, pointer):
        pass

    def on_pointer_up(self, world, pointer):
        pass

    def on_key_pressed(self, key):
        pass

    def on_frame_update(self, world):
        """Called once per frame while the tool is active."""
        pass

    def indicator(self):
        """
        Visual hint for the renderer.

        Returns:
            dict or None: ``{'x', 'y', 'radius', 'alpha'}`` for a circle, or None
        """
        return None

    def handle_pointer(self, world, pointer):
        """Route a pointer event to the hook for its phase."""
        if pointer.phase == PHASE_DOWN:
            self.on_pointer_down(world, pointer)
        elif pointer.phase == PHASE_DRAG:
            self.on_pointer_drag(world, pointer)
        elif pointer.phase == PHASE_UP:
            self.on_pointer_up(world, pointer)

    def get_param(self, name):
        """Parameter value by name, None if the tool has no such parameter."""
        param = self.params.get(name)
        if param is None:
            return None
        return param.value

    def set_param(self, name, value):
        """Set a parameter value by name; unknown names are ignored."""
        param = self.params.get(name)
        if param is not None:
            param.value = value

    def param_specs(self):
        """Ordered (name, ToolParam) pairs for building controls."""
        return list(self.params.items())

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r})"
