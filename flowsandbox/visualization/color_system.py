"""
Color system module for FlowSandbox visualization.

Dark canvas palette: light particles on black, with a blue tool indicator.
"""

import numpy as np


BACKGROUND_COLOR = "#000000"   # Canvas and figure background
PANEL_COLOR = "#1A1A1A"        # Widget panel background
TEXT_COLOR = "#DDDDDD"         # Labels and status text
INDICATOR_COLOR = "#6496FF"    # Attract/repulse radius ring
FIELD_VECTOR_COLOR = "#4477AA" # Optional flow field overlay


def hex_to_rgb(hex_color):
    """Convert hex color to RGB tuple (0-1 range)."""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) / 255.0 for i in (0, 2, 4))


def hex_to_rgba(hex_color, alpha=1.0):
    """Convert hex color plus alpha to an RGBA tuple (0-1 range)."""
    r, g, b = hex_to_rgb(hex_color)
    return (r, g, b, float(np.clip(alpha, 0.0, 1.0)))


def speed_alpha(speeds, base_alpha, max_speed):
    """
    Per-particle alpha that brightens faster particles.

    Args:
        speeds (np.ndarray): Particle speeds, shape (N,)
        base_alpha (float): Alpha of a particle at max speed
        max_speed (float): Speed cap used for normalization

    Returns:
        np.ndarray: Alpha values, shape (N,)
    """
    if max_speed <= 0 or len(speeds) == 0:
        return np.full(len(speeds), base_alpha)
    normalized = np.clip(speeds / max_speed, 0.0, 1.0)
    return np.clip(base_alpha * (0.4 + 0.6 * normalized), 0.0, 1.0)
