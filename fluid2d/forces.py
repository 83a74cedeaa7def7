"""
forces.py — Sources and External Forces
========================================
Everything that feeds the simulation from outside: mouse drags, emitters,
wind. All of it is written into the "_prev" buffers, which the next
vel_step() / dens_steps() folds in as  field += dt · source.

Nothing here touches the current fields directly, so the order of the
physics pipeline stays exactly as the stepping code defines it.
"""

import numpy as np

from .grid import FluidGrid


def _check_interior(grid: FluidGrid, i: int, j: int):
    N = grid.N
    if not (1 <= i <= N and 1 <= j <= N):
        raise IndexError(f"Cell ({i}, {j}) is outside the interior 1..{N}")


def _falloff(grid: FluidGrid, i: int, j: int, radius: float) -> np.ndarray:
    """
    Linear falloff weights over the whole grid: 1 at (i, j), 0 at `radius`.
    Boundary ring cells always get 0.
    """
    if radius <= 0:
        raise ValueError(f"Radius must be positive, got {radius}")
    n = grid.N + 2
    ii, jj = np.meshgrid(np.arange(n), np.arange(n), indexing='ij')
    dist = np.sqrt((ii - i) ** 2 + (jj - j) ** 2)
    weight = np.clip(1.0 - dist / radius, 0.0, None)
    weight[0, :] = weight[-1, :] = 0.0
    weight[:, 0] = weight[:, -1] = 0.0
    return weight.astype(np.float32)


def add_velocity(grid: FluidGrid, i: int, j: int, du: float, dv: float):
    """Add a force (du, dv) at a single interior cell."""
    _check_interior(grid, i, j)
    grid.u_prev[i, j] += du
    grid.v_prev[i, j] += dv


def add_density(grid: FluidGrid, i: int, j: int,
                r: float = 0.0, g: float = 0.0, b: float = 0.0):
    """Add dye of colour (r, g, b) at a single interior cell."""
    _check_interior(grid, i, j)
    grid.r_dens_prev[i, j] += r
    grid.g_dens_prev[i, j] += g
    grid.b_dens_prev[i, j] += b


def apply_impulse(grid: FluidGrid, i: int, j: int,
                  fx: float, fy: float, radius: float = 3.0):
    """
    Apply a localized force (a fan, a mouse drag) centred on (i, j).
    Force falls off linearly with distance from the centre.

    Args:
        i, j   : Centre cell (interior indices)
        fx, fy : Force components
        radius : Influence radius in cells
    """
    _check_interior(grid, i, j)
    w = _falloff(grid, i, j, radius)
    grid.u_prev += fx * w
    grid.v_prev += fy * w


def emit_density(grid: FluidGrid, i: int, j: int,
                 color: tuple = (1.0, 1.0, 1.0), amount: float = 10.0,
                 radius: float = 2.0):
    """
    Inject dye around (i, j), split across channels by `color`.

    Args:
        i, j   : Centre cell (interior indices)
        color  : (r, g, b) weights, usually in [0, 1]
        amount : Peak source strength at the centre
        radius : Injection radius in cells
    """
    _check_interior(grid, i, j)
    w = amount * _falloff(grid, i, j, radius)
    r, g, b = color
    grid.r_dens_prev += r * w
    grid.g_dens_prev += g * w
    grid.b_dens_prev += b * w


def apply_wind(grid: FluidGrid, direction: tuple = (1.0, 0.0), strength: float = 0.5):
    """
    Apply a constant force across the whole interior.
    Useful for testing: blow dye in a consistent direction.

    Args:
        direction : (dx, dy) direction of the wind
        strength  : Force magnitude
    """
    dx, dy = direction
    grid.u_prev[1:-1, 1:-1] += strength * dx
    grid.v_prev[1:-1, 1:-1] += strength * dy


def clear_sources(grid: FluidGrid):
    """Zero every "_prev" buffer, ready for the next frame's input."""
    for name in ("u_prev", "v_prev", "r_dens_prev", "g_dens_prev", "b_dens_prev"):
        getattr(grid, name)[:] = 0.0


# ── Demo emitters ─────────────────────────────────────────────────────────────
EMITTER_COLORS = (
    (1.0, 0.25, 0.05),   # red-orange
    (0.1, 1.0, 0.3),     # green
    (0.2, 0.4, 1.0),     # blue
)


def rotating_emitters(grid: FluidGrid, frame: int,
                      force: float = 20.0, amount: float = 10.0):
    """
    Three coloured jets along the bottom wall, each swinging its direction
    slowly back and forth so the plumes braid into each other.

    Args:
        frame  : Frame counter, drives the swing
        force  : Jet force magnitude
        amount : Dye strength per jet
    """
    N = grid.N
    j = max(1, N // 8)
    for k, color in enumerate(EMITTER_COLORS):
        i = max(1, min(N, (k + 1) * N // 4))
        angle = 0.5 * np.pi + 0.6 * np.sin(0.05 * frame + k * 2.0 * np.pi / 3.0)
        radius = max(1.0, N / 32.0)
        apply_impulse(grid, i, j, force * np.cos(angle), force * np.sin(angle), radius + 1.0)
        emit_density(grid, i, j, color, amount, radius)
