import numpy as np
import pytest

from fluid2d import FluidGrid, FluidSolver, SimulationConfig


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def small_config():
    return SimulationConfig(N=8, dt=0.1, diff=0.0001, visc=0.0)


@pytest.fixture
def grid(small_config):
    return FluidGrid(small_config)


@pytest.fixture
def solver(small_config):
    return FluidSolver(small_config)


def random_field(rng, N, low=-1.0, high=1.0):
    """(N+2, N+2) float32 field of uniform noise."""
    return rng.uniform(low, high, size=(N + 2, N + 2)).astype(np.float32)
