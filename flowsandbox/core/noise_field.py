"""
Noise field sampler for FlowSandbox.

Wraps 3D Perlin noise from the ``noise`` package into two pure sampling
functions: an angle in [0, 2*pi) for steering and a scalar in [0, 1) for
size modulation. Both read the same primitive; callers decorrelate them by
passing different scales and time arguments.
"""

import math

import numpy as np
from noise import pnoise3

from .. import config

TWO_PI = 2.0 * math.pi

# Largest float strictly below 1.0, keeps mapped samples in [0, 1)
_BELOW_ONE = float(np.nextafter(1.0, 0.0))


class NoiseSampler:
    """
    Deterministic smooth scalar noise over (x, y, t).

    The sampler holds no time state; the advancing phase is owned by the
    caller (see FlowField) and passed in as ``t``.
    """

    def __init__(self, seed=None, octaves=None, persistence=None, period=None):
        """
        Args:
            seed (int, optional): Permutation offset for the noise lattice
            octaves (int, optional): Number of summed octaves
            persistence (float, optional): Amplitude falloff per octave
            period (int, optional): Lattice period the coordinates fold into
        """
        self.seed = config.NOISE_SEED if seed is None else int(seed)
        self.octaves = config.NOISE_OCTAVES if octaves is None else int(octaves)
        self.persistence = config.NOISE_PERSISTENCE if persistence is None else float(persistence)
        self.period = config.NOISE_PERIOD if period is None else int(period)

    def _fold(self, value):
        # pnoise3 tiles with the repeat period, so folding keeps continuity
        return float(value) % self.period

    def raw(self, x, y, t):
        """Raw noise value, roughly in [-1, 1]."""
        return pnoise3(
            self._fold(x), self._fold(y), self._fold(t),
            octaves=self.octaves,
            persistence=self.persistence,
            repeatx=self.period,
            repeaty=self.period,
            repeatz=self.period,
            base=self.seed % 256,
        )

    def sample_scalar(self, x, y, t):
        """
        Sample the noise mapped into [0, 1).

        Args:
            x, y (float): Lattice coordinates (already scaled)
            t (float): Time coordinate

        Returns:
            float: Smooth value in [0, 1)
        """
        value = (self.raw(x, y, t) + 1.0) * 0.5
        if not math.isfinite(value):
            return 0.0
        return min(max(value, 0.0), _BELOW_ONE)

    def sample_angle(self, x, y, t):
        """Sample the noise as an angle in [0, 2*pi)."""
        angle = self.sample_scalar(x, y, t) * TWO_PI
        # Rounding can land exactly on 2*pi for values just below 1
        return angle if angle < TWO_PI else 0.0

    def sample_scalar_scaled(self, x, y, t, scale):
        """Sample at canvas coordinates with a signed spatial scale."""
        sx, sy = scale_coordinates(x, y, scale)
        return self.sample_scalar(sx, sy, t)

    def sample_angle_scaled(self, x, y, t, scale):
        """Sample an angle at canvas coordinates with a signed spatial scale."""
        sx, sy = scale_coordinates(x, y, scale)
        return self.sample_angle(sx, sy, t)


def scale_coordinates(x, y, scale):
    """
    Map canvas coordinates onto the noise lattice.

    The magnitude of ``scale`` sets the spatial frequency; a negative scale
    negates the coordinates, mirroring the sampled pattern.

    Returns:
        tuple: (sx, sy) lattice coordinates
    """
    magnitude = abs(scale)
    sign = -1.0 if scale < 0 else 1.0
    return sign * x * magnitude, sign * y * magnitude


def angle_to_vector(angle, magnitude=1.0):
    """Vector of the given magnitude pointing along ``angle``."""
    return np.array([math.cos(angle), math.sin(angle)]) * magnitude
