"""
Utility modules.
"""

from .logging import setup_logging, get_logger
from .seed import make_rng, get_seed_from_config
from .config import DesignConfig, DEFAULT_CONFIG, load_config, config_from_dict

__all__ = [
    'setup_logging',
    'get_logger',
    'make_rng',
    'get_seed_from_config',
    'DesignConfig',
    'DEFAULT_CONFIG',
    'load_config',
    'config_from_dict',
]
