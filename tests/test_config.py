import pytest

from fluid2d import SimulationConfig
from fluid2d.utils import interior_diagonals, ix


def test_size_includes_boundary_ring():
    config = SimulationConfig(N=10)
    assert config.size() == 144
    assert config.shape == (12, 12)


def test_defaults():
    config = SimulationConfig()
    assert config.N == 64
    assert config.dt == 0.1
    assert config.solver_iterations == 20


@pytest.mark.parametrize("kwargs", [
    {"N": 0},
    {"N": -4},
    {"dt": 0.0},
    {"dt": -0.1},
    {"diff": -1e-4},
    {"visc": -1.0},
    {"solver_iterations": 0},
])
def test_invalid_parameters_fail_fast(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


def test_ix_is_row_major_over_i():
    config = SimulationConfig(N=4)
    assert ix(0, 0, config) == 0
    assert ix(0, 1, config) == 1
    assert ix(1, 0, config) == 6
    assert ix(5, 5, config) == config.size() - 1


def test_interior_diagonals_cover_interior_once():
    N = 5
    seen = []
    for k, (I, J) in enumerate(interior_diagonals(N), start=2):
        assert all(I + J == k)
        seen.extend(zip(I.tolist(), J.tolist()))
    expected = [(i, j) for i in range(1, N + 1) for j in range(1, N + 1)]
    assert sorted(seen) == expected
