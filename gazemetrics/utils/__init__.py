"""
Utilities: logging setup and YAML configuration loading
"""

from gazemetrics.utils.config_loader import load_config, get_section
from gazemetrics.utils.logger import setup_logger, setup_logger_from_config, get_logger

__all__ = [
    'load_config',
    'get_section',
    'setup_logger',
    'setup_logger_from_config',
    'get_logger'
]
