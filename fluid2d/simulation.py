"""
simulation.py — Frame Stepping
===============================
Ties the physics modules together. One call to `step()` advances the
fluid by dt.

Velocity step (vel_step):
  1. Add forces                 u += dt·u_prev,  v += dt·v_prev
  2. Diffuse velocity           (viscosity, implicit)
  3. Project                    remove divergence introduced by 2
  4. Advect velocity            (self-advection)
  5. Project again              remove divergence introduced by 4

Density step (dens_step, once per colour channel):
  1. Add sources                x += dt·x_prev
  2. Diffuse                    (implicit)
  3. Advect                     through the velocity from vel_step

Between stages the current field and its "_prev" twin are swapped, so each
stage always READS the prev slot and WRITES the current slot. The order is
not negotiable: diffusion must see the sourced field, advection must see the
diffused field.

This follows the "Stable Fluids" method by Jos Stam.
"""

import time

import numpy as np

from .advect import advect
from .boundary import Boundary
from .config import SimulationConfig
from .diffuse import diffuse
from .forces import (add_density, add_velocity, apply_impulse, apply_wind,
                     clear_sources, emit_density, rotating_emitters)
from .grid import FluidGrid
from .solver import project


def _read_only(field: np.ndarray) -> np.ndarray:
    view = field.view()
    view.flags.writeable = False
    return view


class FluidSolver:
    """
    A 2D stable-fluids solver with three dye channels.

    Usage:
        solver = FluidSolver(SimulationConfig(N=64))
        for frame in range(100):
            solver.clear_sources()
            solver.add_velocity_splat(32, 8, 0.0, 50.0)
            solver.add_density_splat(32, 8, color=(1.0, 0.3, 0.1))
            solver.step()
            image = solver.r_dens      # Hand to the renderer (read-only)
    """

    def __init__(self, config: SimulationConfig = None):
        """
        Args:
            config : Simulation parameters (default: SimulationConfig())
        """
        self.config = config if config is not None else SimulationConfig()
        self._grid = FluidGrid(self.config)
        self.frame = 0
        self.perf_log = []   # stores timing data per frame

    # ── Read access for renderers ─────────────────────────────────────────

    @property
    def u(self) -> np.ndarray:
        return _read_only(self._grid.u)

    @property
    def v(self) -> np.ndarray:
        return _read_only(self._grid.v)

    @property
    def r_dens(self) -> np.ndarray:
        return _read_only(self._grid.r_dens)

    @property
    def g_dens(self) -> np.ndarray:
        return _read_only(self._grid.g_dens)

    @property
    def b_dens(self) -> np.ndarray:
        return _read_only(self._grid.b_dens)

    def compute_divergence(self) -> np.ndarray:
        """Interior divergence of the current velocity field, shape (N, N)."""
        return self._grid.compute_divergence()

    # ── Input: everything lands in the _prev buffers ──────────────────────

    def add_velocity(self, i: int, j: int, du: float, dv: float):
        """Add a force at one interior cell, applied on the next vel_step()."""
        add_velocity(self._grid, i, j, du, dv)

    def add_density(self, i: int, j: int, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        """Add dye at one interior cell, applied on the next dens_steps()."""
        add_density(self._grid, i, j, r, g, b)

    def add_velocity_splat(self, i: int, j: int, fx: float, fy: float, radius: float = 3.0):
        apply_impulse(self._grid, i, j, fx, fy, radius)

    def add_density_splat(self, i: int, j: int, color: tuple = (1.0, 1.0, 1.0),
                          amount: float = 10.0, radius: float = 2.0):
        emit_density(self._grid, i, j, color, amount, radius)

    def apply_wind(self, direction: tuple = (1.0, 0.0), strength: float = 0.5):
        apply_wind(self._grid, direction, strength)

    def add_demo_emitters(self):
        """Three coloured swinging jets along the bottom wall, phased by the frame counter."""
        rotating_emitters(self._grid, self.frame)

    def clear_sources(self):
        """
        Zero all source/force buffers.

        The _prev buffers are scratch space during a step, so call this
        before injecting the next frame's input.
        """
        clear_sources(self._grid)

    # ── Stepping ──────────────────────────────────────────────────────────

    def dens_step(self, channel: str):
        """
        Advance one density channel: source → diffuse → advect.

        Args:
            channel : "r", "g" or "b"
        """
        g = self._grid
        c = self.config
        x, x0 = g.channel(channel)

        g.add_source(x, x0)
        g.swap(x0, x)
        diffuse(Boundary.SCALAR, x, x0, c.diff, c.dt, c.solver_iterations)
        g.swap(x0, x)
        advect(Boundary.SCALAR, x, x0, g.u, g.v, c.dt)

    def dens_steps(self):
        """Advance the red, green and blue channels through the current velocity."""
        for channel in FluidGrid.CHANNELS:
            self.dens_step(channel)

    def vel_step(self):
        """
        Advance the velocity field by one timestep.
        Forces must already be accumulated in the _prev buffers.
        """
        g = self._grid
        c = self.config
        iters = c.solver_iterations

        g.add_source(g.u, g.u_prev)
        g.add_source(g.v, g.v_prev)

        # ── Viscous diffusion ─────────────────────────────────────────────
        g.swap(g.u_prev, g.u)
        diffuse(Boundary.HORIZONTAL_VELOCITY, g.u, g.u_prev, c.visc, c.dt, iters)
        g.swap(g.v_prev, g.v)
        diffuse(Boundary.VERTICAL_VELOCITY, g.v, g.v_prev, c.visc, c.dt, iters)

        # prev buffers double as pressure / divergence workspace
        project(g.u, g.v, g.u_prev, g.v_prev, iters)

        # ── Self-advection ────────────────────────────────────────────────
        g.swap(g.u_prev, g.u)
        g.swap(g.v_prev, g.v)
        advect(Boundary.HORIZONTAL_VELOCITY, g.u, g.u_prev, g.u_prev, g.v_prev, c.dt)
        advect(Boundary.VERTICAL_VELOCITY, g.v, g.v_prev, g.u_prev, g.v_prev, c.dt)

        project(g.u, g.v, g.u_prev, g.v_prev, iters)

    def step(self) -> dict:
        """
        Advance velocity, then all density channels, by one timestep.

        Returns performance metrics dict for benchmarking.
        """
        t_total_start = time.perf_counter()

        t0 = time.perf_counter()
        self.vel_step()
        t_vel = (time.perf_counter() - t0) * 1000

        t0 = time.perf_counter()
        self.dens_steps()
        t_dens = (time.perf_counter() - t0) * 1000

        self.frame += 1
        t_total = (time.perf_counter() - t_total_start) * 1000

        g = self._grid
        div = np.abs(g.compute_divergence())
        metrics = {
            "frame"          : self.frame,
            "total_ms"       : t_total,
            "fps"            : 1000.0 / t_total if t_total > 0 else 0,
            "vel_step_ms"    : t_vel,
            "dens_steps_ms"  : t_dens,
            "divergence_max" : float(div.max()),
            "divergence_mean": float(div.mean()),
            "density_total"  : (
                float(g.r_dens[1:-1, 1:-1].sum()),
                float(g.g_dens[1:-1, 1:-1].sum()),
                float(g.b_dens[1:-1, 1:-1].sum()),
            ),
        }
        self.perf_log.append(metrics)
        return metrics

    def reset(self):
        """Zero every buffer and restart the frame counter."""
        self._grid.reset()
        self.frame = 0
        self.perf_log = []
        print(f"[Simulation] Reset (N={self.config.N})")

    def print_status(self):
        """Pretty-print current simulation state."""
        g = self._grid
        div = g.compute_divergence()
        print(f"\n{'='*50}")
        print(f"  Frame: {self.frame}  |  N={self.config.N}  |  dt={self.config.dt}")
        print(f"  Density   : r={g.r_dens.sum():.2f}, g={g.g_dens.sum():.2f}, b={g.b_dens.sum():.2f}")
        print(f"  Velocity  : max_u={np.abs(g.u).max():.4f}, max_v={np.abs(g.v).max():.4f}")
        print(f"  Divergence: max={np.abs(div).max():.6f}, mean={np.abs(div).mean():.8f}")
        if self.perf_log:
            last = self.perf_log[-1]
            print(f"  Perf      : {last['total_ms']:.1f}ms/frame ({last['fps']:.1f} FPS)")
        print(f"{'='*50}")
