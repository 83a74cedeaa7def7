"""
diffuse.py — Diffusion via Gauss-Seidel Relaxation
===================================================
Diffusion makes quantities spread out over time.
  - High diffusion  → dye bleeds into its neighbours quickly
  - High viscosity  → velocity evens out (thick fluid, like honey)

The math: backward-Euler (implicit) heat equation on the grid

  x[i,j] - a·(x[i-1,j] + x[i+1,j] + x[i,j-1] + x[i,j+1] - 4·x[i,j]) = x0[i,j]

where a = dt · rate · N². Rearranged for relaxation:

  x[i,j] = (x0[i,j] + a·(sum of 4 neighbours)) / (1 + 4a)

Why implicit? Explicit diffusion blows up once a > 1/4. The implicit form
stays bounded for any rate and any dt.

We never solve it exactly. `lin_solve` runs a FIXED number of Gauss-Seidel
sweeps (updating in-place, so each cell already sees this sweep's values of
its left/lower neighbours). A fixed count keeps frame time predictable.

Gauss-Seidel is inherently sequential, but it can still be vectorised: all
cells on one anti-diagonal (i + j = k) are independent of each other, so we
sweep diagonal by diagonal with NumPy fancy indexing. Same numbers as the
cell-by-cell loop, roughly 2N array ops per sweep instead of N² Python steps.
"""

import numpy as np

from .boundary import Boundary, set_bnd
from .utils import interior_diagonals


def _check_pair(x: np.ndarray, x0: np.ndarray):
    if x.shape != x0.shape:
        raise ValueError(f"Field shapes differ: {x.shape} vs {x0.shape}")


def lin_solve(b: Boundary, x: np.ndarray, x0: np.ndarray,
              a: float, c: float, iterations: int = 20):
    """
    Approximately solve  c·x[i,j] = x0[i,j] + a·(sum of 4 neighbours of x).

    Used with (a, 1 + 4a) for diffusion and with (1, 4) for the pressure
    Poisson equation in the projection step.

    Args:
        b          : Boundary kind of x, re-applied after every sweep
        x          : (N+2, N+2) unknown, refined in-place from its current values
        x0         : (N+2, N+2) right-hand side
        a, c       : Neighbour weight and normalisation
        iterations : Number of full Gauss-Seidel sweeps (fixed, no early exit)
    """
    _check_pair(x, x0)
    N = x.shape[0] - 2
    diagonals = interior_diagonals(N)

    for _ in range(iterations):
        for I, J in diagonals:
            x[I, J] = (x0[I, J] + a * (
                x[I - 1, J] + x[I + 1, J] +
                x[I, J - 1] + x[I, J + 1]
            )) / c
        set_bnd(b, x)


def diffuse(b: Boundary, x: np.ndarray, x0: np.ndarray,
            rate: float, dt: float, iterations: int = 20):
    """
    One implicit diffusion step: x ← diffuse(x0).

    Args:
        b          : Boundary kind of the field
        x          : (N+2, N+2) destination, modified in-place
        x0         : (N+2, N+2) field before diffusion
        rate       : Diffusion rate (density) or viscosity (velocity)
        dt         : Timestep
        iterations : Gauss-Seidel sweeps
    """
    _check_pair(x, x0)
    N = x.shape[0] - 2
    # N² factor converts the rate from domain units to grid-index units
    a = dt * rate * N * N

    if a == 0.0:
        # Nothing spreads: every sweep would just reproduce x0
        np.copyto(x, x0)
        set_bnd(b, x)
        return

    lin_solve(b, x, x0, a, 1.0 + 4.0 * a, iterations)
