"""
Predefined configuration presets for common deployments.
"""
from typing import Dict, Any


class ConfigPresets:
    """Collection of predefined configuration presets."""

    @staticmethod
    def default() -> Dict[str, Any]:
        """Library defaults: console logging at INFO, no log files."""
        return {
            'logging': {
                'log_level': 'INFO',
                'enable_console': True,
                'enable_file': False,
                'enable_structured': False
            },
            'validation': {
                'max_depth': 256
            }
        }

    @staticmethod
    def development() -> Dict[str, Any]:
        """Verbose console logging of spec construction and rejections."""
        return {
            'logging': {
                'log_level': 'DEBUG',
                'enable_console': True,
                'enable_file': False,
                'enable_structured': False
            }
        }

    @staticmethod
    def production() -> Dict[str, Any]:
        """Structured JSON logs written to rotating files."""
        return {
            'logging': {
                'log_level': 'WARNING',
                'log_dir': 'logs/spex',
                'enable_console': False,
                'enable_file': True,
                'enable_structured': True,
                'max_bytes': 10 * 1024 * 1024,
                'backup_count': 5
            }
        }

    @staticmethod
    def strict() -> Dict[str, Any]:
        """Shallow nesting limit for payloads from untrusted clients."""
        return {
            'validation': {
                'max_depth': 32
            }
        }
