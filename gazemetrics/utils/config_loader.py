"""
Configuration loader utility

The YAML file holds four optional sections: screen, calibration,
segmentation and logging. Missing keys fall back to gazemetrics.constants.
"""

import yaml
from typing import Any, Dict, Union
from pathlib import Path


SECTIONS = ('screen', 'calibration', 'segmentation', 'logging')


def load_config(config_path: Union[str, Path] = 'config/config.yaml') -> Dict[str, Any]:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to configuration file

    Returns:
        Dictionary with configuration values (empty for an empty file)
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    unknown = set(config) - set(SECTIONS)
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

    return config


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a named section, treating a missing or null section as empty"""
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section
