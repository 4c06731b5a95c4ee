"""
Trajectory Calculator
=====================
Closed-form kinematics for projectile motion and free-fall:

    x(t) = vx0 · t
    y(t) = h0 + vy0 · t − g · t² / 2

1. **Time of flight** — positive root of y(t) = 0, with a fallback
   estimate when the root is non-positive or not real.
2. **Sampling** — positions every ``time_step`` up to a margined bound,
   cut off at the first point below ground.
3. **Impact point** — the exact zero crossing is appended so the
   trajectory always ends on the ground.

The calculator is a pure function: it holds no state between calls and
never raises. Degenerate inputs come back as non-finite results, see
``TrajectoryResult.is_finite``.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .parameters import SimulationParameters, PROJECTILE


logger = logging.getLogger(__name__)

# Sampling runs this far past the analytic impact time
FLIGHT_TIME_MARGIN = 1.1


@dataclass(frozen=True)
class PositionSample:
    """One point on the trajectory."""
    x: float   # m
    y: float   # m
    t: float   # s


@dataclass(frozen=True)
class TrajectoryResult:
    """Complete trajectory output."""
    samples: Tuple[PositionSample, ...]
    max_height: float        # m
    distance: float          # m
    time_of_flight: float    # s, unmargined analytic impact time
    mode: str = PROJECTILE
    parameters: Optional[SimulationParameters] = None

    @property
    def x(self) -> np.ndarray:
        return np.array([s.x for s in self.samples])

    @property
    def y(self) -> np.ndarray:
        return np.array([s.y for s in self.samples])

    @property
    def time(self) -> np.ndarray:
        return np.array([s.t for s in self.samples])

    @property
    def apex(self) -> PositionSample:
        """Highest emitted sample."""
        return max(self.samples, key=lambda s: s.y)

    @property
    def is_finite(self) -> bool:
        """False when a degeneracy leaked into the summary or the samples."""
        values = [self.max_height, self.distance, self.time_of_flight]
        for s in self.samples:
            values.extend((s.x, s.y, s.t))
        return bool(self.samples) and bool(np.all(np.isfinite(values)))

    def summary(self) -> str:
        """Human-readable summary string."""
        p = self.parameters
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY — {self.mode.upper():<30s} ║",
            f"╠══════════════════════════════════════════════════════╣",
        ]
        if p is not None:
            lines += [
                f"║  Launch vel   : {p.initial_velocity:>10.2f} m/s{'':<22s} ║",
                f"║  Angle        : {p.angle:>10.1f} °{'':<24s} ║",
                f"║  Init height  : {p.initial_height:>10.2f} m{'':<24s} ║",
                f"║  Gravity      : {p.gravity:>10.2f} m/s²{'':<21s} ║",
                f"║  Timestep     : {p.time_step:>10.4f} s{'':<24s} ║",
                f"╠══════════════════════════════════════════════════════╣",
            ]
        lines += [
            f"║  Max height   : {self.max_height:>10.2f} m{'':<24s} ║",
            f"║  Distance     : {self.distance:>10.2f} m{'':<24s} ║",
            f"║  Flight time  : {self.time_of_flight:>10.3f} s{'':<24s} ║",
            f"║  Samples      : {len(self.samples):>10d}{'':<26s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def _positive_root(vy0: float, h0: float, g: float) -> float:
    """Larger root of −g/2·t² + vy0·t + h0 = 0, NaN when not real."""
    a = -g / 2.0
    b = vy0
    c = h0
    radicand = b * b - 4.0 * a * c
    if radicand < 0:
        return math.nan
    discriminant = math.sqrt(radicand)
    return max((-b + discriminant) / (2.0 * a), (-b - discriminant) / (2.0 * a))


def _fallback_flight_time(vy0: float, h0: float, g: float) -> float:
    """Rise-and-fall estimate used when the quadratic gives no usable root."""
    if h0 < 0:
        return math.nan
    return abs(2.0 * vy0 / g) + math.sqrt(2.0 * h0 / g)


def time_of_flight(params: SimulationParameters) -> float:
    """
    Unmargined analytic time from launch to ground impact (s).

    Infinite for degenerate parameters (non-positive gravity or a
    non-finite input): the object never reaches the ground.
    """
    if is_degenerate(params):
        return math.inf

    g = params.gravity
    h0 = params.initial_height
    _, vy0 = params.velocity_components()

    if params.mode != PROJECTILE:
        return math.sqrt(2.0 * h0 / g) if h0 >= 0 else math.nan

    root = _positive_root(vy0, h0, g)
    if root > 0:
        return root

    fallback = _fallback_flight_time(vy0, h0, g)
    if fallback == 0.0:
        # Ground launch with no upward component: resolve to one step
        logger.debug("Zero-duration projectile, flooring flight time to dt=%s",
                     params.time_step)
        return float(params.time_step)
    return fallback


def is_degenerate(params: SimulationParameters) -> bool:
    """Non-positive gravity or any non-finite input."""
    values = (params.initial_velocity, params.angle, params.initial_height,
              params.gravity, params.time_step)
    return not all(math.isfinite(v) for v in values) or params.gravity <= 0


def _degenerate_result(params: SimulationParameters) -> TrajectoryResult:
    """Launch point only; the object never comes back down."""
    vx0, vy0 = params.velocity_components()
    h0 = params.initial_height
    logger.warning("Degenerate parameters (gravity=%s), trajectory is unbounded",
                   params.gravity)
    return TrajectoryResult(
        samples=(PositionSample(0.0, h0, 0.0),),
        max_height=math.inf if vy0 > 0 else h0,
        distance=math.inf if vx0 > 0 else 0.0,
        time_of_flight=math.inf,
        mode=params.mode,
        parameters=params,
    )


def compute_trajectory(params: SimulationParameters) -> TrajectoryResult:
    """
    Sample the trajectory for ``params`` and append the exact impact point.

    Points are emitted at t = k·dt while t ≤ 1.1·T and y ≥ 0, then
    (vx0·T, 0, T) closes the trajectory with the unmargined flight time T.
    """
    if is_degenerate(params):
        return _degenerate_result(params)

    vx0, vy0 = params.velocity_components()
    h0 = params.initial_height
    g = params.gravity
    dt = params.time_step

    final_t = time_of_flight(params)
    bound = final_t * FLIGHT_TIME_MARGIN

    samples = []
    step = 0
    t = 0.0
    while t <= bound:
        x = vx0 * t
        y = h0 + vy0 * t - g * t * t / 2.0
        if y < 0:
            break
        samples.append(PositionSample(x, y, t))
        if dt <= 0:
            break
        step += 1
        t = step * dt

    # Points at or past the impact instant are replaced by the exact one
    while samples and samples[-1].t >= final_t:
        samples.pop()

    final_x = vx0 * final_t
    samples.append(PositionSample(final_x, 0.0, final_t))

    max_height = max([h0] + [s.y for s in samples])
    distance = max([0.0] + [s.x for s in samples])

    return TrajectoryResult(
        samples=tuple(samples),
        max_height=max_height,
        distance=distance,
        time_of_flight=final_t,
        mode=params.mode,
        parameters=params,
    )
