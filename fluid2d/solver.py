"""
solver.py — Pressure Projection
================================
The projection step pushes the velocity field toward INCOMPRESSIBILITY:
  div(v) ≈ 0 everywhere

After forces, diffusion or advection the velocity field generally has
divergence (fluid "piles up" in some cells and drains from others). We fix
this by:
  1. Computing the divergence of the current velocity field
  2. Relaxing the Poisson equation for pressure: ∇²p = div(v)
  3. Subtracting the pressure gradient from velocity: v = v - ∇p

This is the Helmholtz-Hodge decomposition: any vector field splits into a
divergence-free part plus a curl-free part (a gradient). We keep the
divergence-free part.

The Poisson solve is the same fixed-sweep Gauss-Seidel used for diffusion,
so the result is approximate, not exact.
"""

import numpy as np

from .boundary import Boundary, set_bnd
from .diffuse import lin_solve


def compute_divergence(u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Discrete divergence of (u, v) at every interior cell, scaled by -1/(2N).

      div[i,j] = -0.5 · (u[i+1,j] - u[i-1,j] + v[i,j+1] - v[i,j-1]) / N

    This is the right-hand side the pressure solve expects. Use it to check
    the velocity field too: a well-projected field is close to zero here.

    Returns: (N, N) array
    """
    N = u.shape[0] - 2
    return -0.5 * (
        u[2:, 1:-1] - u[:-2, 1:-1] +
        v[1:-1, 2:] - v[1:-1, :-2]
    ) / N


def project(u: np.ndarray, v: np.ndarray, p: np.ndarray, div: np.ndarray,
            iterations: int = 20):
    """
    Remove the divergent part of the velocity field (u, v), in-place.

    Args:
        u, v       : (N+2, N+2) velocity components, modified in-place
        p          : (N+2, N+2) workspace, ends up holding the pressure
        div        : (N+2, N+2) workspace, ends up holding the divergence
        iterations : Gauss-Seidel sweeps for the pressure solve
    """
    if not (u.shape == v.shape == p.shape == div.shape):
        raise ValueError(
            f"Field shapes differ: u={u.shape}, v={v.shape}, p={p.shape}, div={div.shape}"
        )
    N = u.shape[0] - 2

    # Step 1: divergence of the current velocity, pressure starts from zero
    div[1:-1, 1:-1] = compute_divergence(u, v)
    p[1:-1, 1:-1] = 0.0
    set_bnd(Boundary.SCALAR, div)
    set_bnd(Boundary.SCALAR, p)

    # Step 2: relax the pressure Poisson equation
    lin_solve(Boundary.SCALAR, p, div, 1.0, 4.0, iterations)

    # Step 3: subtract the pressure gradient (central differences)
    u[1:-1, 1:-1] -= 0.5 * N * (p[2:, 1:-1] - p[:-2, 1:-1])
    v[1:-1, 1:-1] -= 0.5 * N * (p[1:-1, 2:] - p[1:-1, :-2])
    set_bnd(Boundary.HORIZONTAL_VELOCITY, u)
    set_bnd(Boundary.VERTICAL_VELOCITY, v)
