#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  KINEMATICS TRAJECTORY SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Parameter acquisition (defaults → config → problem text → flags)
    2. Trajectory computation
    3. Projectile vs free-fall comparison
    4. Time-step convergence check
    5. Validation against closed-form kinematics
    6. Trajectory plot and dashboard
    7. Animated trajectory GIF

  All outputs saved to the output directory (default: outputs/).

  Usage:
    python main.py                                   # Default launch
    python main.py --quick                           # Skip animation
    python main.py --problem "A ball is thrown at 15 m/s at 30 degrees"
    python main.py --config run.yaml --mode free-fall --height 20
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import os
import sys
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from kinematics.parameters import (
    DEFAULT_PARAMETERS, SIMULATION_MODES, FREE_FALL, PROJECTILE, merge_parameters,
)
from kinematics.calculator import compute_trajectory
from kinematics.extraction import extract_parameters
from kinematics.config import load_config, parameters_from_config
from kinematics.validation import validate_against_reference
from kinematics.visualization import (
    plot_trajectory, plot_mode_comparison, plot_dashboard,
    plot_validation, create_trajectory_animation, ensure_output_dir,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


logger = logging.getLogger(__name__)


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     KINEMATICS TRAJECTORY SIMULATOR                                   ║
║     ─────────────────────────────────────────────────────             ║
║     Projectile motion · Free-fall · Closed-form time of flight        ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def build_parser():
    parser = argparse.ArgumentParser(description='Kinematics trajectory simulator.')
    parser.add_argument('--config', type=str, help='Path to YAML configuration file.')
    parser.add_argument('--problem', type=str,
                        help='Physics problem text to extract parameters from.')
    parser.add_argument('--mode', choices=SIMULATION_MODES, help='Simulation mode.')
    parser.add_argument('--velocity', type=float, help='Initial velocity (m/s).')
    parser.add_argument('--angle', type=float, help='Launch angle (degrees).')
    parser.add_argument('--height', type=float, help='Initial height (m).')
    parser.add_argument('--gravity', type=float, help='Gravitational acceleration (m/s²).')
    parser.add_argument('--dt', type=float, help='Sampling time step (s).')
    parser.add_argument('--output-dir', type=str, help='Directory for results.')
    parser.add_argument('--quick', action='store_true', help='Skip animation (faster).')
    return parser


def resolve_parameters(args, config):
    """Defaults, then config, then problem text, then explicit flags."""
    params = parameters_from_config(config, DEFAULT_PARAMETERS)

    if args.problem:
        extracted = extract_parameters(args.problem)
        if extracted:
            print(f"  Extracted from problem text: {extracted}")
            params = merge_parameters(params, extracted)
        else:
            logger.warning("Nothing recognisable in problem text, keeping previous parameters")

    overrides = {
        'mode': args.mode,
        'initial_velocity': args.velocity,
        'angle': args.angle,
        'initial_height': args.height,
        'gravity': args.gravity,
        'time_step': args.dt,
    }
    return merge_parameters(params, overrides)


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    args = build_parser().parse_args(argv)
    start_time = time.time()

    try:
        config = load_config(args.config)
        params = resolve_parameters(args, config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return 1

    output_cfg = config['output']
    banner()
    out = ensure_output_dir(args.output_dir or output_cfg['directory'])

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Parameters
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Simulation Parameters")
    for name, value in params.as_dict().items():
        print(f"  {name:<18s} {value}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Trajectory
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Trajectory")
    result = compute_trajectory(params)
    print(result.summary())
    if not result.is_finite:
        logger.error("Result is not finite (degenerate parameters), nothing to render")
        return 1

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Projectile vs Free-Fall
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Projectile vs Free-Fall (same height)")
    comparison = {
        'Projectile': compute_trajectory(merge_parameters(params, {'mode': PROJECTILE,
                                                                   'angle': params.angle or 45.0})),
        'Free-fall': compute_trajectory(merge_parameters(params, {'mode': FREE_FALL})),
    }
    for label, r in comparison.items():
        print(f"  {label:<12s}  Max height: {r.max_height:>7.2f} m  "
              f"Distance: {r.distance:>7.2f} m  ToF: {r.time_of_flight:>6.3f} s")

    fig_cmp = plot_mode_comparison(comparison, save_path=f'{out}/02_mode_comparison.png')
    plt.close(fig_cmp)
    print(f"\n  ✓ Saved: {out}/02_mode_comparison.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Time-Step Convergence
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Time-Step Convergence")
    print(f"  {'dt (s)':>8} {'Samples':>8} {'Max H (m)':>10} {'Dist (m)':>10} {'ToF (s)':>8}")
    dt = params.time_step
    for _ in range(4):
        r = compute_trajectory(merge_parameters(params, {'time_step': dt}))
        print(f"  {dt:>8.4f} {len(r.samples):>8d} {r.max_height:>10.4f} "
              f"{r.distance:>10.4f} {r.time_of_flight:>8.4f}")
        dt /= 2

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Validation — Closed-Form Kinematics")
    val_results = validate_against_reference()
    fig_val = plot_validation(val_results, save_path=f'{out}/03_validation.png')
    plt.close(fig_val)
    print(f"  ✓ Saved: {out}/03_validation.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Plots
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Trajectory Plot & Dashboard")
    fig_traj = plot_trajectory(result, save_path=f'{out}/01_trajectory.png')
    plt.close(fig_traj)
    print(f"  ✓ Saved: {out}/01_trajectory.png")

    fig_dash = plot_dashboard(result, save_path=f'{out}/04_dashboard.png')
    plt.close(fig_dash)
    print(f"  ✓ Saved: {out}/04_dashboard.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Animation
    # ══════════════════════════════════════════════════════════════════════
    if not args.quick:
        section("PHASE 7: Trajectory Animation (GIF)")
        create_trajectory_animation(result,
                                    save_path=f'{out}/05_trajectory_animation.gif',
                                    frames=output_cfg['animation_frames'],
                                    duration=output_cfg['animation_duration'])
        print(f"  ✓ Saved: {out}/05_trajectory_animation.gif")
    else:
        section("PHASE 7: Animation SKIPPED (--quick mode)")

    # ══════════════════════════════════════════════════════════════════════
    #  SUMMARY
    # ══════════════════════════════════════════════════════════════════════
    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Generated files:
    01_trajectory.png            — Height vs distance
    02_mode_comparison.png       — Projectile vs free-fall
    03_validation.png            — Calculator vs closed form
    04_dashboard.png             — Flight data dashboard
    {'05_trajectory_animation.gif — Animated trajectory' if not args.quick else '(animation skipped)'}

  Total runtime: {elapsed:.1f} seconds
""")
    return 0


if __name__ == "__main__":
    sys.exit(main())
