"""
Validation Against Closed-Form Kinematics
==========================================
Compares calculator output against two independent references:
  - Closed-form drag-free kinematics (apex height, impact time, range)
  - A numerical root of y(t) = 0 found with scipy's Brent solver

Reference launches sweep the launch angle at the default muzzle speed
and height, plus a free-fall drop.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from scipy.optimize import brentq

from .parameters import SimulationParameters, PROJECTILE, FREE_FALL
from .calculator import compute_trajectory, is_degenerate


# ══════════════════════════════════════════════════════════════════════════
#  Reference launches
# ══════════════════════════════════════════════════════════════════════════

REFERENCE_LAUNCHES = [
    SimulationParameters(initial_velocity=10.0, angle=angle, initial_height=1.0,
                         gravity=9.8, time_step=0.1, mode=PROJECTILE)
    for angle in (15.0, 30.0, 45.0, 60.0, 75.0, 90.0)
] + [
    SimulationParameters(initial_velocity=0.0, angle=0.0, initial_height=10.0,
                         gravity=9.8, time_step=0.1, mode=FREE_FALL),
]


@dataclass
class ReferenceValues:
    """Analytic summary quantities for one launch."""
    time_of_flight: float
    max_height: float
    distance: float


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    parameters: SimulationParameters
    ref_tof: float
    sim_tof: float
    tof_error_pct: float
    ref_max_height: float
    sim_max_height: float
    height_error_pct: float
    ref_distance: float
    sim_distance: float
    distance_error_pct: float
    root_tof: float          # impact time from brentq


def closed_form_reference(params: SimulationParameters) -> ReferenceValues:
    """
    Drag-free apex, impact time and range.

    Degenerate launches follow the calculator: infinite time of flight.
    A launch that never reaches the ground from below (negative radicand)
    gives NaN.
    """
    vx0, vy0 = params.velocity_components()
    g = params.gravity
    h0 = params.initial_height

    if is_degenerate(params):
        return ReferenceValues(time_of_flight=math.inf,
                               max_height=math.inf if vy0 > 0 else h0,
                               distance=math.inf if vx0 > 0 else 0.0)

    radicand = vy0 ** 2 + 2.0 * g * h0
    if radicand < 0:
        return ReferenceValues(time_of_flight=math.nan, max_height=math.nan,
                               distance=math.nan)

    tof = (vy0 + math.sqrt(radicand)) / g
    apex = h0 + max(vy0, 0.0) ** 2 / (2.0 * g)
    return ReferenceValues(time_of_flight=tof, max_height=apex, distance=vx0 * tof)


def numerical_impact_time(params: SimulationParameters) -> float:
    """
    Impact time found by bracketing the sign change of y(t) and refining
    with Brent's method. Returns 0 when launched from the ground with no
    upward velocity, infinity for degenerate launches and NaN when the
    apex is already below ground.
    """
    if is_degenerate(params):
        return math.inf

    _, vy0 = params.velocity_components()
    g = params.gravity
    h0 = params.initial_height

    def height(t):
        return h0 + vy0 * t - 0.5 * g * t * t

    # Descent starts at the apex; search forward from there
    t_apex = max(vy0 / g, 0.0)
    if height(t_apex) < 0:
        return math.nan
    if height(t_apex) == 0:
        return t_apex
    upper = max(2.0 * t_apex, 1.0)
    while height(upper) > 0:
        upper *= 2.0
    return brentq(height, t_apex, upper)


def _error_pct(sim, ref):
    if ref == 0:
        return 0.0 if sim == 0 else math.inf
    return 100.0 * (sim - ref) / ref


def validate_against_reference(launches: Sequence[SimulationParameters] = REFERENCE_LAUNCHES,
                               verbose: bool = True) -> List[ValidationResult]:
    """
    Run the calculator for every launch and compare against the analytic
    and numerical references.
    """
    results = []

    if verbose:
        print(f"\n{'='*86}")
        print(f"  VALIDATION: calculator vs closed-form kinematics")
        print(f"{'='*86}")
        print(f"{'Mode':>10} {'Angle':>6} {'Ref T':>8} {'Sim T':>8} {'Err %':>7} "
              f"{'Ref H':>8} {'Sim H':>8} {'Err %':>7} "
              f"{'Ref R':>8} {'Sim R':>8} {'Err %':>7}")
        print("-" * 86)

    for params in launches:
        ref = closed_form_reference(params)
        traj = compute_trajectory(params)

        vr = ValidationResult(
            parameters=params,
            ref_tof=ref.time_of_flight,
            sim_tof=traj.time_of_flight,
            tof_error_pct=_error_pct(traj.time_of_flight, ref.time_of_flight),
            ref_max_height=ref.max_height,
            sim_max_height=traj.max_height,
            height_error_pct=_error_pct(traj.max_height, ref.max_height),
            ref_distance=ref.distance,
            sim_distance=traj.distance,
            distance_error_pct=_error_pct(traj.distance, ref.distance),
            root_tof=numerical_impact_time(params),
        )
        results.append(vr)

        if verbose:
            print(f"{params.mode:>10} {params.angle:>6.0f} "
                  f"{vr.ref_tof:>8.3f} {vr.sim_tof:>8.3f} {vr.tof_error_pct:>+7.2f} "
                  f"{vr.ref_max_height:>8.3f} {vr.sim_max_height:>8.3f} {vr.height_error_pct:>+7.2f} "
                  f"{vr.ref_distance:>8.3f} {vr.sim_distance:>8.3f} {vr.distance_error_pct:>+7.2f}")

    if verbose:
        avg_tof_err = np.mean([abs(r.tof_error_pct) for r in results])
        avg_h_err = np.mean([abs(r.height_error_pct) for r in results])
        avg_r_err = np.mean([abs(r.distance_error_pct) for r in results])
        print("-" * 86)
        print(f"  Mean absolute errors — Time: {avg_tof_err:.2f}% | "
              f"Height: {avg_h_err:.2f}% | Distance: {avg_r_err:.2f}%")
        status = "✓ PASS" if max(avg_tof_err, avg_h_err, avg_r_err) < 1.0 else "✗ CHECK"
        print(f"  Status: {status}")
        print(f"{'='*86}\n")

    return results


def run_all_validations(verbose: bool = True):
    """Validate the angle sweep at two sampling resolutions."""
    all_results = {}
    for dt in (0.1, 0.01):
        launches = [SimulationParameters(**{**p.as_dict(), 'time_step': dt})
                    for p in REFERENCE_LAUNCHES]
        all_results[dt] = validate_against_reference(launches, verbose=verbose)
    return all_results


if __name__ == "__main__":
    run_all_validations(verbose=True)
