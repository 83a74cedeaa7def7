"""
fluid2d/ — 2D Stable Fluids
============================
Exports the interfaces a driver or renderer needs.

Driver (main.py) imports: SimulationConfig, FluidSolver → step()
Renderer (visualizer.py) imports: FluidSolver → r_dens, g_dens, b_dens
"""

from .boundary import Boundary
from .config import SimulationConfig
from .grid import FluidGrid
from .simulation import FluidSolver

__all__ = ["Boundary", "SimulationConfig", "FluidGrid", "FluidSolver"]
