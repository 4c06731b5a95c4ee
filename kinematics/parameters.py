"""
Simulation Parameters
=====================
Defines the immutable parameter set consumed by the trajectory calculator:
  - Initial velocity and launch angle
  - Initial height above the ground
  - Gravitational acceleration
  - Sampling time step
  - Simulation mode (projectile or free-fall)

Partial parameter sets (from the free-text extractor, a config file or
command-line overrides) are folded onto a complete set with
``merge_parameters``, last writer wins per field.

Coordinate system:
  x = horizontal distance from the launch point
  y = height above the ground (up positive)
"""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Tuple

import numpy as np


logger = logging.getLogger(__name__)


# ── Simulation modes ──────────────────────────────────────────────────────
PROJECTILE = 'projectile'
FREE_FALL = 'free-fall'
SIMULATION_MODES = (PROJECTILE, FREE_FALL)

# Payloads from the form / extractor use camelCase keys
FIELD_ALIASES = {
    'initialVelocity': 'initial_velocity',
    'initialHeight': 'initial_height',
    'timeStep': 'time_step',
    'simulationType': 'mode',
    'velocity': 'initial_velocity',
    'height': 'initial_height',
    'dt': 'time_step',
}


@dataclass(frozen=True)
class SimulationParameters:
    """
    Complete specification of one kinematics run.
    """
    initial_velocity: float = 10.0    # m/s
    angle: float = 45.0               # degrees above horizontal
    initial_height: float = 1.0       # m
    gravity: float = 9.8              # m/s²
    time_step: float = 0.1            # s
    mode: str = PROJECTILE

    def __post_init__(self):
        if self.mode not in SIMULATION_MODES:
            raise ValueError(f"Unknown simulation mode: {self.mode!r} "
                             f"(expected one of {SIMULATION_MODES})")

    @property
    def is_projectile(self) -> bool:
        return self.mode == PROJECTILE

    def velocity_components(self) -> Tuple[float, float]:
        """
        Convert launch speed + angle to (vx0, vy0).

        Free-fall ignores both speed and angle and starts at rest.
        """
        if not self.is_projectile:
            return 0.0, 0.0
        theta = np.radians(self.angle)
        vx = self.initial_velocity * np.cos(theta)
        vy = self.initial_velocity * np.sin(theta)
        return float(vx), float(vy)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any]) -> 'SimulationParameters':
        """Build a full parameter set from the defaults plus ``mapping``."""
        return merge_parameters(DEFAULT_PARAMETERS, mapping)


DEFAULT_PARAMETERS = SimulationParameters()

_FIELD_NAMES = tuple(f.name for f in fields(SimulationParameters))


def normalize_keys(updates: Mapping[str, Any]) -> dict:
    """Map alias keys onto field names, rejecting anything unknown."""
    normalized = {}
    for key, value in updates.items():
        name = FIELD_ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            raise ValueError(f"Unknown simulation parameter: {key!r}")
        normalized[name] = value
    return normalized


def merge_parameters(base: SimulationParameters,
                     updates: Optional[Mapping[str, Any]]) -> SimulationParameters:
    """
    Overwrite fields of ``base`` with the values present in ``updates``.

    ``None`` values are skipped so that a partial set only touches the
    fields it actually carries. Switching to free-fall resets the angle to
    zero unless the same update supplies one.
    """
    if not updates:
        return base

    changes = {k: v for k, v in normalize_keys(updates).items() if v is not None}
    for name, value in changes.items():
        if name != 'mode':
            changes[name] = float(value)

    if changes.get('mode') == FREE_FALL and 'angle' not in changes:
        changes['angle'] = 0.0

    merged = replace(base, **changes)
    logger.debug("Merged parameter fields %s -> %s", sorted(changes), merged)
    return merged
