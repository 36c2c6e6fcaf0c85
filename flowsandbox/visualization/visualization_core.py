"""
Core visualization module for FlowSandbox.

Builds the figure, draws the particle population as a scatter whose marker
sizes follow each particle's size modifier, and overlays the active tool's
indicator and, optionally, the sampled flow field.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from .. import config
from .color_system import (
    BACKGROUND_COLOR, PANEL_COLOR, TEXT_COLOR, INDICATOR_COLOR,
    FIELD_VECTOR_COLOR, hex_to_rgba, speed_alpha,
)


def setup_figure_layout():
    """
    Setup the main figure layout.

    Returns:
        tuple: (fig, ax) - Figure and sandbox axes; the right quarter is left for controls
    """
    fig = plt.figure(figsize=(14, 8))
    fig.patch.set_facecolor(PANEL_COLOR)

    # Sandbox takes 3/4 of the width, controls live in the remaining column
    ax = plt.subplot2grid((1, 4), (0, 0), colspan=3)
    ax.set_aspect('equal')

    return fig, ax


def apply_professional_styling(fig, ax, width, height):
    """
    Style the sandbox axes as a bare canvas in data coordinates.

    Args:
        fig: matplotlib figure object
        ax: sandbox axes
        width, height (float): Canvas size
    """
    fig.patch.set_facecolor(PANEL_COLOR)
    ax.set_facecolor(BACKGROUND_COLOR)
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_color(TEXT_COLOR)
        spine.set_linewidth(0.5)


def compute_marker_sizes(size_modifiers, particle_size, size_modifier_strength):
    """
    Marker areas for scatter from per-particle size modifiers.

    The diameter is ``particle_size * (1 + (modifier - 0.5) * strength)``;
    matplotlib's ``s`` is the square of the diameter in points.

    Returns:
        np.ndarray: Marker areas, shape (N,)
    """
    size_modifiers = np.asarray(size_modifiers, dtype=float)
    diameters = particle_size * (1.0 + (size_modifiers - 0.5) * size_modifier_strength)
    diameters = np.clip(diameters, 0.0, None)
    return diameters ** 2


def prepare_particles(ax, world):
    """
    Create the scatter artist for the particle population.

    Returns:
        PathCollection: Scatter artist updated every frame
    """
    positions = world.positions()
    sizes = compute_marker_sizes(world.size_modifiers(), world.config.particle_size,
                                 world.config.size_modifier_strength)
    scatter = ax.scatter(positions[:, 0], positions[:, 1], s=sizes,
                         c=config.PARTICLE_COLOR, alpha=config.PARTICLE_ALPHA,
                         linewidths=0, zorder=2)
    return scatter


def update_particle_visualization(scatter, world):
    """
    Push the world's render state into the scatter artist.

    Returns:
        tuple: Updated artists
    """
    positions = world.positions()
    scatter.set_offsets(positions)
    scatter.set_sizes(compute_marker_sizes(world.size_modifiers(), world.config.particle_size,
                                           world.config.size_modifier_strength))

    # Alpha per particle brightens fast movers
    alphas = speed_alpha(world.speeds(), config.PARTICLE_ALPHA, world.max_speed)
    colors = np.tile(hex_to_rgba(config.PARTICLE_COLOR), (len(positions), 1))
    if len(positions):
        colors[:, 3] = alphas
    scatter.set_facecolors(colors)
    scatter.set_alpha(None)
    return (scatter,)


def create_tool_indicator(ax):
    """Hidden circle patch reused for the attract/repulse radius."""
    patch = Circle((0, 0), 1.0, fill=False, linewidth=2,
                   edgecolor=hex_to_rgba(INDICATOR_COLOR, 0.4), zorder=5)
    patch.set_visible(False)
    ax.add_patch(patch)
    return patch


def update_tool_indicator(patch, indicator):
    """
    Show, move or hide the indicator patch.

    Args:
        patch (Circle): Patch from create_tool_indicator
        indicator (dict or None): Tool indicator description
    """
    if not indicator:
        patch.set_visible(False)
        return patch
    patch.center = (indicator['x'], indicator['y'])
    patch.set_radius(indicator['radius'])
    patch.set_edgecolor(hex_to_rgba(INDICATOR_COLOR, indicator.get('alpha', 0.4)))
    patch.set_visible(True)
    return patch


def draw_field_overlay(ax, flow_field, width, height, resolution=20):
    """
    Draw the current flow field as a quiver overlay.

    Returns:
        Quiver: The quiver artist, refreshed with update_field_overlay
    """
    grid_x, grid_y, grid_u, grid_v = flow_field.sample_grid(width, height, resolution)
    return ax.quiver(grid_x, grid_y, grid_u, grid_v, color=FIELD_VECTOR_COLOR,
                     alpha=0.5, pivot='mid', zorder=1)


def update_field_overlay(quiver, flow_field, width, height, resolution=20):
    _, _, grid_u, grid_v = flow_field.sample_grid(width, height, resolution)
    quiver.set_UVC(grid_u, grid_v)
    return quiver


def create_status_text(ax):
    return ax.text(0.01, 0.99, "", transform=ax.transAxes, ha='left', va='top',
                   fontsize=9, color=TEXT_COLOR, zorder=10)


def update_status_text(text, world, tool_manager):
    tool = tool_manager.get_active()
    label = tool.label if tool is not None else "None"
    text.set_text(f"Particles: {world.particle_count()} / {world.max_particles}   Tool: {label}")
    return text
