import numpy as np
import pytest

from fluid2d import FluidGrid, SimulationConfig
from fluid2d.utils import ix

from .conftest import random_field


def test_fields_are_allocated_zeroed(grid, small_config):
    for name in FluidGrid.FIELDS:
        field = getattr(grid, name)
        assert field.shape == small_config.shape
        assert field.size == small_config.size()
        assert field.dtype == np.float32
        assert not field.any()


def test_flat_index_matches_2d_view(grid, small_config):
    grid.u[3, 5] = 7.0
    assert grid.u.reshape(-1)[ix(3, 5, small_config)] == 7.0


def test_add_source_constant(grid, small_config):
    s = np.full(small_config.shape, 4.0, dtype=np.float32)
    grid.add_source(grid.r_dens, s)
    np.testing.assert_allclose(grid.r_dens, small_config.dt * 4.0, rtol=1e-6)


def test_add_source_accumulates(grid, rng):
    s = random_field(rng, grid.N)
    grid.add_source(grid.u, s)
    grid.add_source(grid.u, s)
    np.testing.assert_allclose(grid.u, 2 * grid.config.dt * s, rtol=1e-5)


def test_swap_exchanges_contents(grid, rng):
    a = random_field(rng, grid.N)
    b = random_field(rng, grid.N)
    grid.u[:] = a
    grid.u_prev[:] = b
    u_id, prev_id = id(grid.u), id(grid.u_prev)

    grid.swap(grid.u, grid.u_prev)
    np.testing.assert_array_equal(grid.u, b)
    np.testing.assert_array_equal(grid.u_prev, a)
    # buffers stay the same objects, only contents move
    assert id(grid.u) == u_id and id(grid.u_prev) == prev_id


def test_swap_twice_restores(grid, rng):
    a = random_field(rng, grid.N)
    b = random_field(rng, grid.N)
    grid.v[:] = a
    grid.v_prev[:] = b

    grid.swap(grid.v, grid.v_prev)
    grid.swap(grid.v, grid.v_prev)
    np.testing.assert_array_equal(grid.v, a)
    np.testing.assert_array_equal(grid.v_prev, b)


def test_channels(grid):
    x, x0 = grid.channel("g")
    assert x is grid.g_dens
    assert x0 is grid.g_dens_prev
    with pytest.raises(ValueError):
        grid.channel("alpha")


def test_reset(grid, rng):
    for name in FluidGrid.FIELDS:
        getattr(grid, name)[:] = random_field(rng, grid.N)
    grid.reset()
    for name in FluidGrid.FIELDS:
        assert not getattr(grid, name).any()


def test_repr_mentions_divergence():
    grid = FluidGrid(SimulationConfig(N=4))
    assert "divergence" in repr(grid)
