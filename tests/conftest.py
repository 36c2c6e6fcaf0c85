import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

from flowsandbox.config import SimulationConfig
from flowsandbox.physics.world import World


@pytest.fixture
def quiet_config():
    """Small canvas, no initial particles, no field force."""
    return SimulationConfig(width=400.0, height=300.0, initial_particles=0,
                            max_particles=100, force_strength=0.0)


@pytest.fixture
def empty_world(quiet_config):
    return World(quiet_config, rng=np.random.default_rng(7), populate=False)
