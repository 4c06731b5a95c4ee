"""
Kinematics Trajectory Simulator
===============================
Computes and visualizes two-dimensional drag-free trajectories:
  - Projectile motion (launch speed, angle and height)
  - Free-fall from rest

The core is a pure calculator that derives a time series of positions
plus maximum height, horizontal distance and time of flight from a small
parameter set. Around it sit parameter acquisition (defaults, YAML
config, free-text problem extraction), progressive replay for animation,
matplotlib plotting, and validation against closed-form kinematics.
"""

from .parameters import (
    SimulationParameters, DEFAULT_PARAMETERS, merge_parameters,
    PROJECTILE, FREE_FALL, SIMULATION_MODES,
)
from .calculator import (
    PositionSample, TrajectoryResult, compute_trajectory, time_of_flight,
    FLIGHT_TIME_MARGIN,
)
from .extraction import extract_parameters
from .replay import TrajectoryReplay
from .config import load_config, parameters_from_config
from .validation import (
    closed_form_reference, numerical_impact_time,
    validate_against_reference, run_all_validations, REFERENCE_LAUNCHES,
)
from .visualization import (
    plot_trajectory, plot_placeholder, plot_mode_comparison,
    plot_dashboard, plot_validation, create_trajectory_animation,
)

__version__ = "1.0.0"
__all__ = [
    'SimulationParameters', 'DEFAULT_PARAMETERS', 'merge_parameters',
    'PROJECTILE', 'FREE_FALL', 'SIMULATION_MODES',
    'PositionSample', 'TrajectoryResult', 'compute_trajectory',
    'time_of_flight', 'FLIGHT_TIME_MARGIN',
    'extract_parameters', 'TrajectoryReplay',
    'load_config', 'parameters_from_config',
    'closed_form_reference', 'numerical_impact_time',
    'validate_against_reference', 'run_all_validations', 'REFERENCE_LAUNCHES',
    'plot_trajectory', 'plot_placeholder', 'plot_mode_comparison',
    'plot_dashboard', 'plot_validation', 'create_trajectory_animation',
]
