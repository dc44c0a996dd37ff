"""
Configuration loading for wordvec.
"""

from .config_loader import load_config, validate_config

__all__ = [
    "load_config",
    "validate_config",
]
