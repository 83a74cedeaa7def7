"""
main.py — Entry Point
======================
Runs the 2D solver with a few demo emitters.

Usage:
    python main.py                    # Headless run, prints stats (default)
    python main.py --mode live        # Live visualization
    python main.py --mode benchmark   # Per-phase timing
    python main.py --mode gif         # Render an animated GIF
"""

import argparse
import numpy as np


def make_solver(args):
    from fluid2d import FluidSolver, SimulationConfig

    config = SimulationConfig(N=args.N, dt=args.dt, diff=args.diff,
                              visc=args.visc, solver_iterations=args.iterations)
    print(f"[Simulation] {config}")
    return FluidSolver(config)


def run_live(args):
    """Live interactive visualization."""
    from visualizer import FluidVisualizer

    print(f"Starting live simulation (N={args.N})...")
    print("Drag with the mouse to stir. Press 'r' to reset. Close the window to exit.\n")

    viz = FluidVisualizer(make_solver(args))
    viz.run(fps=30)


def run_gif(args):
    """Render the demo emitters to a GIF without opening a window."""
    import matplotlib
    matplotlib.use("Agg")
    from visualizer import FluidVisualizer

    viz = FluidVisualizer(make_solver(args))
    viz.save_gif(args.output, frames=args.frames)


def run_headless(args):
    """Run simulation without display — prints stats every 10 frames."""
    N, frames = args.N, args.frames
    print(f"\nHeadless simulation | N={N} | {frames} frames")
    print(f"{'─'*60}")

    solver = make_solver(args)
    total_times = []

    for f in range(frames):
        solver.add_demo_emitters()
        metrics = solver.step()
        solver.clear_sources()
        total_times.append(metrics["total_ms"])

        if f % 10 == 0:
            r, g, b = metrics["density_total"]
            print(f"  Frame {f:03d} | {metrics['total_ms']:6.1f}ms "
                  f"({metrics['fps']:.1f} FPS) | "
                  f"div_max={metrics['divergence_max']:.5f} | "
                  f"dye=({r:.1f}, {g:.1f}, {b:.1f})")

    print(f"\n{'─'*60}")
    print(f"  Average: {np.mean(total_times):.1f}ms/frame ({1000/np.mean(total_times):.1f} FPS)")
    print(f"  Min:     {np.min(total_times):.1f}ms")
    print(f"  Max:     {np.max(total_times):.1f}ms")
    solver.print_status()


def run_benchmark(args):
    """
    Per-phase performance breakdown.
    Shows how long the velocity and density steps take.
    """
    N, frames = args.N, args.frames
    print(f"\n{'='*60}")
    print(f"  BENCHMARK | N={N} | {frames} frames | {args.iterations} sweeps")
    print(f"{'='*60}")

    solver = make_solver(args)

    # Warm up
    for _ in range(5):
        solver.add_demo_emitters()
        solver.step()
        solver.clear_sources()

    logs = []
    for _ in range(frames):
        solver.add_demo_emitters()
        logs.append(solver.step())
        solver.clear_sources()

    keys = ["vel_step_ms", "dens_steps_ms", "total_ms"]

    print(f"\n{'Step':<20} {'Mean':>8} {'Min':>8} {'Max':>8}")
    print(f"{'─'*50}")
    for k in keys:
        vals = [m[k] for m in logs]
        print(f"  {k:<18} {np.mean(vals):>7.1f}ms {np.min(vals):>7.1f}ms {np.max(vals):>7.1f}ms")

    total_vals = [m["total_ms"] for m in logs]
    print(f"\n{'─'*50}")
    print(f"  FPS (physics only): {1000/np.mean(total_vals):.1f}")


def build_parser():
    parser = argparse.ArgumentParser(description="2D Stable Fluids")
    parser.add_argument(
        "--mode", choices=["live", "headless", "benchmark", "gif"],
        default="headless",
        help="Run mode (default: headless)"
    )
    parser.add_argument("--N",          type=int,   default=64,     help="Interior resolution (default: 64)")
    parser.add_argument("--dt",         type=float, default=0.1,    help="Timestep (default: 0.1)")
    parser.add_argument("--diff",       type=float, default=0.0001, help="Dye diffusion rate")
    parser.add_argument("--visc",       type=float, default=0.0,    help="Viscosity")
    parser.add_argument("--iterations", type=int,   default=20,     help="Gauss-Seidel sweeps per solve")
    parser.add_argument("--frames",     type=int,   default=100,    help="Number of frames")
    parser.add_argument("--output",     default="fluid2d.gif",      help="GIF path for --mode gif")
    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()

    if args.mode == "live":
        run_live(args)
    elif args.mode == "headless":
        run_headless(args)
    elif args.mode == "benchmark":
        run_benchmark(args)
    elif args.mode == "gif":
        run_gif(args)
