"""
visualizer.py — RGB Dye Viewer
===============================
Renders the three density channels of the 2D solver as one colour image.

  - Red / green / blue channels → the R, G, B planes of the image
  - Interior cells only (the boundary ring is not drawn)
  - Left mouse drag  → stirs the fluid and drops white dye
  - Right mouse drag → stirs without dye
  - "r"              → reset

Uses matplotlib FuncAnimation for real-time updates.
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation


def density_to_rgb(solver, gain: float = 1.0) -> np.ndarray:
    """
    Compose the three dye channels into an image.

    Args:
        solver : FluidSolver
        gain   : Brightness multiplier applied before clipping

    Returns:
        (N, N, 3) float array in [0, 1], indexed [y, x] for imshow(origin='lower')
    """
    rgb = np.stack(
        [solver.r_dens[1:-1, 1:-1], solver.g_dens[1:-1, 1:-1], solver.b_dens[1:-1, 1:-1]],
        axis=-1,
    )
    # Grid axis 0 is x; imshow wants rows = y
    rgb = np.transpose(rgb, (1, 0, 2))
    return np.clip(gain * rgb, 0.0, 1.0)


class FluidVisualizer:
    """
    Real-time viewer of the 2D fluid simulation.

    Usage (standalone):
        from fluid2d import FluidSolver, SimulationConfig
        from visualizer import FluidVisualizer

        solver = FluidSolver(SimulationConfig(N=96))
        viz = FluidVisualizer(solver)
        viz.run()  # Opens live window
    """

    def __init__(self, solver, emitters: bool = True, gain: float = 1.0):
        """
        Args:
            solver   : FluidSolver instance
            emitters : Keep the three demo jets running every frame
            gain     : Brightness multiplier for the dye image
        """
        self.solver = solver
        self.N = solver.config.N
        self.emitters = emitters
        self.gain = gain
        self.mouse = {"left": False, "right": False, "last": None}

        self._setup_figure()

    def _setup_figure(self):
        """Initialize the matplotlib figure and hook up mouse/keyboard input."""
        N = self.N
        self.fig, self.ax = plt.subplots(figsize=(7, 7))
        self.fig.patch.set_facecolor('#0a0a0a')
        self.ax.set_facecolor('#0a0a0a')
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        for spine in self.ax.spines.values():
            spine.set_edgecolor('#333333')

        self.img = self.ax.imshow(
            np.zeros((N, N, 3)),
            interpolation='bilinear',
            origin='lower',
            extent=[0, N, 0, N],
            aspect='equal'
        )

        self.title_text = self.ax.set_title(
            "Stable Fluids — Frame 0 | 0.0 FPS",
            color='#cccccc', fontsize=10, fontfamily='monospace'
        )

        self.fig.canvas.mpl_connect('button_press_event', self._on_press)
        self.fig.canvas.mpl_connect('button_release_event', self._on_release)
        self.fig.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.fig.canvas.mpl_connect('key_press_event', self._on_key)

        plt.tight_layout()

    # ── Input ─────────────────────────────────────────────────────────────

    def _to_cell(self, event):
        """Mouse position → interior cell (i, j), or None outside the axes."""
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return None
        i = int(np.clip(event.xdata, 0, self.N - 1)) + 1
        j = int(np.clip(event.ydata, 0, self.N - 1)) + 1
        return i, j

    def _on_press(self, event):
        if event.button == 1:
            self.mouse["left"] = True
        elif event.button == 3:
            self.mouse["right"] = True
        self.mouse["last"] = (event.xdata, event.ydata)

    def _on_release(self, event):
        if event.button == 1:
            self.mouse["left"] = False
        elif event.button == 3:
            self.mouse["right"] = False
        self.mouse["last"] = None

    def _on_motion(self, event):
        if not (self.mouse["left"] or self.mouse["right"]):
            return
        cell = self._to_cell(event)
        last = self.mouse["last"]
        self.mouse["last"] = (event.xdata, event.ydata)
        if cell is None or last is None or last[0] is None or last[1] is None:
            return

        i, j = cell
        # Drag distance in cells → force
        fx = (event.xdata - last[0]) * 20.0
        fy = (event.ydata - last[1]) * 20.0
        radius = max(2.0, self.N / 24.0)
        self.solver.add_velocity_splat(i, j, fx, fy, radius=radius)
        if self.mouse["left"]:
            self.solver.add_density_splat(i, j, color=(1.0, 1.0, 1.0),
                                          amount=20.0, radius=radius)

    def _on_key(self, event):
        if event.key and event.key.lower() == 'r':
            self.solver.reset()

    # ── Animation ─────────────────────────────────────────────────────────

    def update(self, frame_num):
        """Called by FuncAnimation each frame. Steps sim and updates the image."""
        if self.emitters:
            self.solver.add_demo_emitters()

        metrics = self.solver.step()
        # Sources were folded in; start the next frame from a clean slate
        self.solver.clear_sources()

        self.img.set_data(density_to_rgb(self.solver, self.gain))
        self.title_text.set_text(
            f"Stable Fluids — Frame {metrics['frame']} | "
            f"{metrics['fps']:.1f} FPS | "
            f"div_max={metrics['divergence_max']:.5f}"
        )
        return [self.img, self.title_text]

    def run(self, fps: int = 30, frames: int = None):
        """
        Start the live animation window.

        Args:
            fps    : Target animation frame rate
            frames : Total frames to render (None = infinite)
        """
        interval_ms = 1000 // fps
        self.anim = animation.FuncAnimation(
            self.fig,
            self.update,
            frames=frames,
            interval=interval_ms,
            blit=False,
            cache_frame_data=False
        )
        plt.show()

    def save_gif(self, path: str = "fluid2d.gif", fps: int = 20, frames: int = 100):
        """Save animation as a GIF (for reports and demos)."""
        print(f"Rendering {frames} frames to {path}...")
        self.anim = animation.FuncAnimation(
            self.fig, self.update, frames=frames, interval=1000 // fps, blit=False
        )
        writer = animation.PillowWriter(fps=fps)
        self.anim.save(path, writer=writer)
        print(f"Saved: {path}")
