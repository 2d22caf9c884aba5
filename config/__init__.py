"""
Configuration management for spex.
"""
from .config_manager import (
    Config,
    ConfigManager,
    DEFAULT_SETTINGS,
    SETTINGS_SPEC,
    get_config_manager,
    load_config,
    get_config,
    set_config,
    configure_logging
)
from .presets import ConfigPresets

__all__ = [
    'Config',
    'ConfigManager',
    'DEFAULT_SETTINGS',
    'SETTINGS_SPEC',
    'get_config_manager',
    'load_config',
    'get_config',
    'set_config',
    'configure_logging',
    'ConfigPresets',
]
