"""
grid.py — Collocated Grid with a Boundary Ring
===============================================
The storage every physics step works on.

Layout:
  - An N×N interior of cells, indices 1..N on each axis
  - A 1-cell ring of ghost cells around it, indices 0 and N+1
  - Every field (u, v, each density channel) lives at cell centres
    → shape (N+2, N+2), flat size (N+2)²

Field (i, j) sits at flat offset i*(N+2) + j (see utils.ix). Axis 0 is x,
axis 1 is y.

Each field has a "_prev" twin. Callers fill the twins with this frame's
sources/forces; during a step they are reused as scratch space (pressure,
divergence, swap partner), so they hold garbage afterwards.
"""

import numpy as np

from .config import SimulationConfig
from .solver import compute_divergence


class FluidGrid:
    """
    All buffers of one 2D simulation, allocated once and zero-filled.
    """

    FIELDS = (
        "u", "v", "u_prev", "v_prev",
        "r_dens", "r_dens_prev",
        "g_dens", "g_dens_prev",
        "b_dens", "b_dens_prev",
        "tmp",
    )
    CHANNELS = ("r", "g", "b")

    def __init__(self, config: SimulationConfig):
        """
        Args:
            config : Grid size, timestep and transport coefficients
        """
        self.config = config
        self.N = config.N

        for name in self.FIELDS:
            buffer = np.zeros(config.size(), dtype=np.float32)
            setattr(self, name, buffer.reshape(config.shape))

    def add_source(self, x: np.ndarray, s: np.ndarray):
        """x += dt · s, over every cell including the boundary ring."""
        x += self.config.dt * s

    def swap(self, a: np.ndarray, b: np.ndarray):
        """
        Exchange the contents of two fields through the scratch buffer.

        The arrays themselves stay put, so views handed out earlier remain
        attached to the same named field.
        """
        np.copyto(self.tmp, a)
        np.copyto(a, b)
        np.copyto(b, self.tmp)

    def channel(self, name: str) -> tuple[np.ndarray, np.ndarray]:
        """(current, prev) buffers of one density channel: "r", "g" or "b"."""
        if name not in self.CHANNELS:
            raise ValueError(f"Unknown density channel: {name!r}. Use 'r', 'g' or 'b'.")
        return getattr(self, f"{name}_dens"), getattr(self, f"{name}_dens_prev")

    def compute_divergence(self) -> np.ndarray:
        """Divergence of (u, v) on the interior. Should be small after a velocity step."""
        return compute_divergence(self.u, self.v)

    def reset(self):
        """Zero out all fields."""
        for name in self.FIELDS:
            getattr(self, name)[:] = 0.0

    def __repr__(self):
        max_div = np.abs(self.compute_divergence()).max()
        max_vel = max(np.abs(self.u).max(), np.abs(self.v).max())
        return (
            f"FluidGrid(N={self.N}, dt={self.config.dt})\n"
            f"  density  : r={self.r_dens.sum():.2f}, g={self.g_dens.sum():.2f}, b={self.b_dens.sum():.2f}\n"
            f"  velocity : max_component={max_vel:.4f}\n"
            f"  divergence: max={max_div:.6f} (target: ~0)"
        )
