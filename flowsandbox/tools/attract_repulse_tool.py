"""
AttractRepulseTool: pulls particles toward the pointer or pushes them away.

The primary button attracts, the secondary button repulses. Force falls off
linearly from full strength at the pointer to zero at the radius.
"""

import math

import numpy as np

from .base import Tool, ToolParam, BUTTON_PRIMARY

# Particles closer than this have no well-defined direction
MIN_DISTANCE = 0.1


def radial_force(position, origin, radius, strength, attract=True):
    """
    Force exerted on a particle at ``position`` by a pointer at ``origin``.

    Args:
        position (array-like): Particle position (x, y)
        origin (array-like): Pointer position (x, y)
        radius (float): Effective range
        strength (float): Force scale at zero distance
        attract (bool): Toward the pointer when True, away from it otherwise

    Returns:
        np.ndarray or None: Force vector, or None when the particle is out of range
    """
    offset = np.asarray(origin, dtype=float) - np.asarray(position, dtype=float)
    distance = math.hypot(offset[0], offset[1])

    if not distance < radius or distance < MIN_DISTANCE:
        return None

    direction = offset / distance
    if not attract:
        direction = -direction

    # Linear falloff, capped so tiny distances cannot blow up
    magnitude = min(strength * (1.0 - distance / radius), 2.0 * strength)
    force = direction * magnitude

    if not np.all(np.isfinite(force)):
        return None
    return force


class AttractRepulseTool(Tool):
    """Radial attract/repulse around the pointer."""

    def __init__(self):
        super().__init__('attract', 'Attract/Repulse', 'move')

        self.params = {
            'strength': ToolParam(5, 0.1, 20, label='Strength'),
            'radius': ToolParam(200, 10, 500, label='Radius'),
        }

        # Pointer state for the indicator
        self.pointer_x = 0.0
        self.pointer_y = 0.0
        self.pointer_pressed = False
        self.pointer_button = None

    def on_pointer_down(self, world, pointer):
        self.pointer_x = pointer.x
        self.pointer_y = pointer.y
        self.pointer_pressed = True
        self.pointer_button = pointer.button
        self.apply_force(world, pointer.x, pointer.y, pointer.is_primary)

    def on_pointer_drag(self, world, pointer):
        self.pointer_x = pointer.x
        self.pointer_y = pointer.y
        self.pointer_button = pointer.button
        self.apply_force(world, pointer.x, pointer.y, pointer.is_primary)

    def on_pointer_up(self, world, pointer):
        self.pointer_pressed = False
        self.pointer_button = None

    def on_deselect(self):
        super().on_deselect()
        self.pointer_pressed = False
        self.pointer_button = None

    def apply_force(self, world, x, y, is_attract):
        """
        Apply attract or repulse force to every particle in range.

        Returns:
            int: Number of particles affected
        """
        radius = self.get_param('radius')
        strength = self.get_param('strength')

        def rule(particle, origin):
            return radial_force(particle.position, origin, radius, strength, attract=is_attract)

        return world.apply_force_field((x, y), rule)

    def indicator(self):
        if not self.pointer_pressed:
            return None
        alpha = 100 / 255 if self.pointer_button == BUTTON_PRIMARY else 200 / 255
        return {
            'x': self.pointer_x,
            'y': self.pointer_y,
            'radius': self.get_param('radius'),
            'alpha': alpha,
        }
