"""
UI controls module for FlowSandbox.

A tool selector, sliders generated from the active tool's parameters, and
sliders for the live simulation parameters. Simulation changes are queued
on the World and take effect at the start of the next tick.
"""

from matplotlib.widgets import RadioButtons, Slider

from .. import config
from ..visualization.color_system import PANEL_COLOR, TEXT_COLOR

# (config name, label, min, max, step)
SIMULATION_SLIDERS = [
    ('max_particles', 'Max Particles', 100, 20000, 100),
    ('max_speed', 'Max Speed', 0.1, 10.0, None),
    ('noise_scale', 'Noise Scale', -0.05, 0.05, None),
    ('force_strength', 'Force Strength', 0.0, 1.0, None),
    ('noise_speed', 'Noise Speed', -5.0, 5.0, None),
    ('size_modifier_strength', 'Size Variation', 0.0, 2.0, None),
]

# Control column, figure coordinates
PANEL_LEFT = 0.80
PANEL_WIDTH = 0.15
ROW_HEIGHT = 0.03
ROW_GAP = 0.015


class UIController:
    """Main UI controller for managing interactive controls."""

    def __init__(self, fig, world, tool_manager, event_manager=None):
        """
        Initialize UI controller.

        Args:
            fig: Matplotlib figure
            world: World receiving configuration patches
            tool_manager: ToolManager holding the active tool
            event_manager: EventManager whose key callback this controller serves
        """
        self.fig = fig
        self.world = world
        self.tool_manager = tool_manager
        self.event_manager = event_manager

        self.tool_ids = [tool.id for tool in tool_manager.get_all_tools()]
        self.tool_radio = None
        self.tool_sliders = {}
        self._tool_slider_axes = []
        self.sim_sliders = {}

        self.setup_ui_controls()
        tool_manager.add_listener(self._on_tool_changed)
        if event_manager is not None:
            event_manager.set_key_callback(self.handle_key)

    def setup_ui_controls(self):
        """Build the tool selector, simulation sliders and tool sliders."""
        top = 0.92
        radio_height = ROW_HEIGHT * max(len(self.tool_ids), 1) + ROW_GAP
        radio_ax = self.fig.add_axes([PANEL_LEFT, top - radio_height, PANEL_WIDTH, radio_height],
                                     facecolor=PANEL_COLOR)
        labels = [self.tool_manager.tools[tool_id].label for tool_id in self.tool_ids]
        active_index = self._active_index()
        self.tool_radio = RadioButtons(radio_ax, labels, active=active_index)
        for label in self.tool_radio.labels:
            label.set_color(TEXT_COLOR)
        self.tool_radio.on_clicked(self._on_tool_clicked)

        y = top - radio_height - 2 * ROW_GAP
        cfg = self.world.config
        for name, label, vmin, vmax, step in SIMULATION_SLIDERS:
            y -= ROW_HEIGHT + ROW_GAP
            slider = self._add_slider(y, label, vmin, vmax, getattr(cfg, name), step)
            slider.on_changed(self._make_sim_callback(name))
            self.sim_sliders[name] = slider

        self._tool_sliders_top = y - 2 * ROW_GAP
        self.rebuild_tool_sliders()

    def _add_slider(self, y, label, vmin, vmax, value, step=None):
        ax = self.fig.add_axes([PANEL_LEFT, y, PANEL_WIDTH, ROW_HEIGHT], facecolor=PANEL_COLOR)
        value = min(max(value, vmin), vmax)
        slider = Slider(ax, label, vmin, vmax, valinit=value, valstep=step)
        slider.label.set_color(TEXT_COLOR)
        slider.valtext.set_color(TEXT_COLOR)
        return slider

    def _active_index(self):
        active_id = self.tool_manager.get_active_id()
        return self.tool_ids.index(active_id) if active_id in self.tool_ids else 0

    def _make_sim_callback(self, name):
        def on_changed(value):
            self.world.enqueue_config({name: value})
        return on_changed

    def rebuild_tool_sliders(self):
        """Replace the tool parameter sliders with those of the active tool."""
        for ax in self._tool_slider_axes:
            ax.remove()
        self._tool_slider_axes = []
        self.tool_sliders = {}

        tool = self.tool_manager.get_active()
        if tool is None:
            return

        y = self._tool_sliders_top
        for name, param in tool.param_specs():
            y -= ROW_HEIGHT + ROW_GAP
            slider = self._add_slider(y, param.label or name, param.min, param.max,
                                      param.value, param.step)
            slider.on_changed(self._make_tool_callback(tool, name))
            self.tool_sliders[name] = slider
            self._tool_slider_axes.append(slider.ax)

        try:
            self.fig.canvas.draw_idle()
        except Exception as e:
            print(f"Warning: Failed to redraw tool controls: {e}")

    def _make_tool_callback(self, tool, name):
        def on_changed(value):
            tool.set_param(name, value)
        return on_changed

    def _on_tool_clicked(self, label):
        for tool_id in self.tool_ids:
            if self.tool_manager.tools[tool_id].label == label:
                self.tool_manager.set_active(tool_id)
                return

    def _on_tool_changed(self, tool):
        index = self._active_index()
        label = self.tool_manager.tools[self.tool_ids[index]].label
        if self.tool_radio is not None and self.tool_radio.value_selected != label:
            self.tool_radio.set_active(index)
        self.rebuild_tool_sliders()

    def handle_key(self, key):
        """Hotkeys switch tools or clear the canvas; other keys go to the active tool."""
        if key == config.SPAWN_TOOL_HOTKEY:
            self.tool_manager.set_active('spawn')
        elif key == config.ATTRACT_TOOL_HOTKEY:
            self.tool_manager.set_active('attract')
        elif key == config.CLEAR_PARTICLES_HOTKEY:
            self.world.clear()
        else:
            self.tool_manager.handle_key_pressed(key)
