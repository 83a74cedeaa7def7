"""
config.py — Simulation Parameters
==================================
A passive holder for the handful of numbers every physics step reads.

  N                 : interior resolution (N×N cells, plus a 1-cell boundary ring)
  dt                : timestep
  diff              : diffusion rate of the density channels
  visc              : viscosity of the velocity field
  solver_iterations : fixed Gauss-Seidel sweeps per linear solve
"""


class SimulationConfig:
    """
    Grid size, timestep and transport coefficients for one solver.

    Usage:
        config = SimulationConfig(N=64, dt=0.1, diff=0.0001, visc=0.0)
        config.size()    # (N+2)² → length of every field buffer
    """

    def __init__(self, N: int = 64, dt: float = 0.1, diff: float = 0.0001,
                 visc: float = 0.0, solver_iterations: int = 20):
        if N < 1:
            raise ValueError(f"Grid resolution must be positive, got N={N}")
        if dt <= 0.0:
            raise ValueError(f"Timestep must be positive, got dt={dt}")
        if diff < 0.0 or visc < 0.0:
            raise ValueError(f"Diffusion and viscosity must be >= 0, got diff={diff}, visc={visc}")
        if solver_iterations < 1:
            raise ValueError(f"Need at least one relaxation sweep, got {solver_iterations}")

        self.N = int(N)
        self.dt = float(dt)
        self.diff = float(diff)
        self.visc = float(visc)
        self.solver_iterations = int(solver_iterations)

    @property
    def shape(self) -> tuple[int, int]:
        """2D shape of every field, boundary ring included."""
        return (self.N + 2, self.N + 2)

    def size(self) -> int:
        """Total number of cells in one field buffer: (N+2)²."""
        return (self.N + 2) * (self.N + 2)

    def __repr__(self):
        return (
            f"SimulationConfig(N={self.N}, dt={self.dt}, diff={self.diff}, "
            f"visc={self.visc}, solver_iterations={self.solver_iterations})"
        )
