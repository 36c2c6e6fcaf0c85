"""
Particle module for FlowSandbox.

A particle carries position, velocity and acceleration as numpy 2-vectors
and advances with explicit Euler integration and a toroidal wrap.
"""

import numpy as np


def is_finite_vector(vec):
    """True when every component of ``vec`` is a finite number."""
    return bool(np.all(np.isfinite(vec)))


def limit_magnitude(vec, max_magnitude):
    """
    Clamp the magnitude of a vector in place.

    Args:
        vec (np.ndarray): Vector to clamp, shape (2,)
        max_magnitude (float): Upper bound for the vector length

    Returns:
        np.ndarray: The same array, rescaled if it was too long
    """
    magnitude = np.linalg.norm(vec)
    if magnitude > max_magnitude and magnitude > 0:
        vec *= max_magnitude / magnitude
    return vec


class Particle:
    """Point mass pushed around by the flow field and tools."""

    __slots__ = ('position', 'velocity', 'acceleration', 'size_modifier')

    def __init__(self, x, y):
        self.position = np.array([x, y], dtype=float)
        self.velocity = np.zeros(2)
        self.acceleration = np.zeros(2)
        self.size_modifier = 1.0

    def apply_force(self, force):
        """
        Accumulate a force into the acceleration.

        Non-finite forces are dropped.

        Args:
            force (array-like): Force vector (fx, fy)

        Returns:
            bool: True if the force was accumulated
        """
        force = np.asarray(force, dtype=float)
        if not is_finite_vector(force):
            return False
        self.acceleration += force
        return True

    def integrate(self, max_speed):
        """Euler step: v += a, clamp |v|, p += v, reset a."""
        self.velocity += self.acceleration
        limit_magnitude(self.velocity, max_speed)
        self.position += self.velocity
        self.acceleration[:] = 0.0

    def wrap_edges(self, width, height):
        """
        Teleport across the canvas edges.

        A particle leaving one edge reappears on the opposite edge with the
        other coordinate and its velocity unchanged. The domain is half-open,
        so leaving through the low edge lands just inside the high edge.
        """
        x, y = self.position
        if x < 0:
            self.position[0] = _just_below(width)
        elif x >= width:
            self.position[0] = 0.0

        if y < 0:
            self.position[1] = _just_below(height)
        elif y >= height:
            self.position[1] = 0.0

    @property
    def speed(self):
        return float(np.linalg.norm(self.velocity))

    def __repr__(self):
        x, y = self.position
        vx, vy = self.velocity
        return f"Particle(pos=({x:.2f}, {y:.2f}), vel=({vx:.2f}, {vy:.2f}))"


def _just_below(limit):
    # Largest float strictly below the edge, keeps wrapped positions in [0, limit)
    return float(np.nextafter(float(limit), 0.0)) if limit > 0 else 0.0
