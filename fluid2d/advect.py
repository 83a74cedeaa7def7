"""
advect.py — Semi-Lagrangian Advection
======================================
This is what makes the fluid look like it's *actually flowing*.

The algorithm (per interior cell):
  1. Start at the cell centre (i, j).
  2. Trace BACKWARD along the velocity field by one timestep.
     → "Where did the stuff in this cell come FROM?"
  3. Clamp that point into [0.5, N+0.5] so the lookup never leaves the
     buffer (boundary ring included).
  4. Bilinearly interpolate the old field there. That is the new value.

Why "Semi-Lagrangian"?
  - Forward-moving particles can overshoot and blow up for large dt.
  - Asking "what arrived here?" only ever blends existing values, so the
    result is bounded by the old field's min/max. Unconditionally stable.

Key reference: Jos Stam, "Stable Fluids" (SIGGRAPH 1999)
"""

import numpy as np

from .boundary import Boundary, set_bnd


def _bilinear_interpolate(field: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Bilinear interpolation of a 2D field at fractional positions.

    x, y must already be clamped to [0.5, N+0.5] so both the lower corner
    (floor) and the upper corner (floor + 1) are valid indices.

    Weights: s0/s1 along i, t0/t1 along j, each pair summing to 1.
    """
    i0 = np.floor(x).astype(np.intp)
    j0 = np.floor(y).astype(np.intp)
    i1 = i0 + 1
    j1 = j0 + 1

    s1 = x - i0
    s0 = 1.0 - s1
    t1 = y - j0
    t0 = 1.0 - t1

    return (
        s0 * (t0 * field[i0, j0] + t1 * field[i0, j1]) +
        s1 * (t0 * field[i1, j0] + t1 * field[i1, j1])
    )


def advect(b: Boundary, d: np.ndarray, d0: np.ndarray,
           u: np.ndarray, v: np.ndarray, dt: float):
    """
    Move field d0 through the velocity (u, v) for one timestep, into d.

    Args:
        b      : Boundary kind of the advected field
        d      : (N+2, N+2) destination, modified in-place
        d0     : (N+2, N+2) field being carried (not modified)
        u, v   : (N+2, N+2) velocity components doing the carrying
        dt     : Timestep

    d must not be the same buffer as d0, u or v.
    """
    if not (d.shape == d0.shape == u.shape == v.shape):
        raise ValueError(
            f"Field shapes differ: d={d.shape}, d0={d0.shape}, u={u.shape}, v={v.shape}"
        )
    N = d.shape[0] - 2

    # Interior cell positions in grid-index space
    i, j = np.meshgrid(
        np.arange(1, N + 1, dtype=np.float32),
        np.arange(1, N + 1, dtype=np.float32),
        indexing='ij'
    )

    # Back-trace. dt·N converts domain velocity to cells per step.
    dt0 = dt * N
    x = i - dt0 * u[1:-1, 1:-1]
    y = j - dt0 * v[1:-1, 1:-1]

    x = np.clip(x, 0.5, N + 0.5)
    y = np.clip(y, 0.5, N + 0.5)

    d[1:-1, 1:-1] = _bilinear_interpolate(d0, x, y)
    set_bnd(b, d)
