"""
boundary.py — Boundary Ring Enforcement
========================================
Every field carries a 1-cell ring of ghost cells around the N×N interior.
After anything touches the interior, the ring has to be rebuilt from it,
otherwise the next relaxation sweep or advection lookup reads stale values.

Rules (a closed box with solid walls):
  - Scalars (density, pressure, divergence) copy the nearest interior cell.
    → zero gradient across the wall (Neumann condition)
  - Horizontal velocity u is NEGATED at the left/right walls.
  - Vertical velocity v is NEGATED at the top/bottom walls.
    → the ghost cell cancels the interior one, so the velocity through the
      wall averages to zero (fluid can't leave the box)
  - Corners are the average of their two edge neighbours.
"""

from enum import IntEnum

import numpy as np


class Boundary(IntEnum):
    """Which rule a field follows on the boundary ring."""
    SCALAR = 0
    HORIZONTAL_VELOCITY = 1
    VERTICAL_VELOCITY = 2


def _check_square(x: np.ndarray) -> int:
    """Return N for an (N+2, N+2) field, or raise."""
    if x.ndim != 2 or x.shape[0] != x.shape[1] or x.shape[0] < 3:
        raise ValueError(f"Expected an (N+2, N+2) field with N >= 1, got shape {x.shape}")
    return x.shape[0] - 2


def set_bnd(b: Boundary, x: np.ndarray):
    """
    Rebuild the boundary ring of x from its interior.

    Args:
        b : Boundary kind (or its integer value 0/1/2)
        x : (N+2, N+2) field, modified in-place
    """
    b = Boundary(b)
    N = _check_square(x)

    if b is Boundary.HORIZONTAL_VELOCITY:
        sign_x, sign_y = -1.0, 1.0
    elif b is Boundary.VERTICAL_VELOCITY:
        sign_x, sign_y = 1.0, -1.0
    else:
        sign_x, sign_y = 1.0, 1.0

    # ── Left / right walls (i = 0, i = N+1) ──────────────────────────────
    x[0,     1:N+1] = sign_x * x[1, 1:N+1]
    x[N + 1, 1:N+1] = sign_x * x[N, 1:N+1]

    # ── Bottom / top walls (j = 0, j = N+1) ──────────────────────────────
    x[1:N+1, 0]     = sign_y * x[1:N+1, 1]
    x[1:N+1, N + 1] = sign_y * x[1:N+1, N]

    # ── Corners: average of the two edge cells next to them ──────────────
    x[0,     0]     = 0.5 * (x[1, 0]         + x[0, 1])
    x[0,     N + 1] = 0.5 * (x[1, N + 1]     + x[0, N])
    x[N + 1, 0]     = 0.5 * (x[N, 0]         + x[N + 1, 1])
    x[N + 1, N + 1] = 0.5 * (x[N, N + 1]     + x[N + 1, N])
