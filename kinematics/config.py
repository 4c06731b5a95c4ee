"""
Configuration Loading
=====================
YAML run configuration for the simulator runner. Example file:

    parameters:
      initial_velocity: 15.0
      angle: 30.0
      initial_height: 2.0
      mode: projectile
    output:
      directory: outputs
      animation_frames: 90

Any section or key left out keeps its default.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .parameters import DEFAULT_PARAMETERS, SimulationParameters, merge_parameters


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    'parameters': {},
    'output': {
        'directory': 'outputs',
        'animation_frames': 60,
        'animation_duration': 2.0,
    },
}


def _update_recursively(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _update_recursively(target[key], value)
        else:
            target[key] = value
    return target


def load_config(config_file: Union[str, Path, None] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration and merge it onto ``DEFAULT_CONFIG``.

    Raises FileNotFoundError for a missing file and ValueError for
    unknown top-level sections or a non-mapping document.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_file is None:
        return config

    config_path = Path(config_file)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    logger.info("Loading configuration from %s", config_path)
    with open(config_path, 'r') as f:
        user_config = yaml.safe_load(f)

    if user_config is None:
        return config
    if not isinstance(user_config, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(user_config).__name__}")

    unknown = set(user_config) - set(DEFAULT_CONFIG)
    if unknown:
        raise ValueError(f"Unknown configuration section(s): {sorted(unknown)}")

    return _update_recursively(config, user_config)


def parameters_from_config(config: Dict[str, Any],
                           base: SimulationParameters = DEFAULT_PARAMETERS) -> SimulationParameters:
    """Fold the ``parameters`` section onto ``base``."""
    return merge_parameters(base, config.get('parameters') or {})
