"""
Configuration management for spex.

Settings come from defaults, YAML/JSON files, ``SPEX_`` environment variables
and dicts, deep-merged in load order and validated with spex's own specs.
"""
import os
import json
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from copy import deepcopy
from utils.logging_config import get_logger, LoggerFactory
from utils.exceptions import ConfigurationError
from spex import BooleanSpec, IntegerSpec, MapSpec, StringSpec, validate
from spex.dispatch import DEFAULT_MAX_DEPTH

logger = get_logger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

DEFAULT_SETTINGS: Dict[str, Any] = {
    'logging': {
        'log_level': 'INFO',
        'log_dir': 'logs',
        'enable_console': True,
        'enable_file': False,
        'enable_structured': False,
    },
    'validation': {
        'max_depth': DEFAULT_MAX_DEPTH,
    },
}

SETTINGS_SPEC = MapSpec(
    optional={
        'logging': MapSpec(
            optional={
                'log_level': StringSpec(one_of_ci=LOG_LEVELS),
                'log_dir': StringSpec(),
                'enable_console': BooleanSpec(),
                'enable_file': BooleanSpec(),
                'enable_structured': BooleanSpec(),
                'max_bytes': IntegerSpec(gt=0),
                'backup_count': IntegerSpec(gte=0),
            },
            exclusive=True
        ),
        'validation': MapSpec(
            optional={'max_depth': IntegerSpec(gte=1)},
            exclusive=True
        ),
    },
    exclusive=True
)


class Config:
    """Configuration container with dot notation access."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = data or {}

    def __getattr__(self, key: str) -> Any:
        """Get config value using dot notation."""
        if key.startswith('_'):
            return object.__getattribute__(self, key)

        if key not in self._data:
            raise AttributeError(f"Config has no attribute '{key}'")

        value = self._data[key]
        if isinstance(value, dict):
            return Config(value)
        return value

    def __getitem__(self, key: str) -> Any:
        """Get config value using bracket notation."""
        return self._data[key]

    def __setitem__(self, key: str, value: Any):
        """Set config value using bracket notation."""
        self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dotted key, e.g. ``validation.max_depth``."""
        try:
            value = self._data
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any):
        """Set config value using dot notation."""
        keys = key.split('.')
        data = self._data
        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return deepcopy(self._data)

    def update(self, other: Dict[str, Any]):
        """Update configuration with another dict."""
        self._deep_update(self._data, other)

    @staticmethod
    def _deep_update(base: Dict, update: Dict):
        """Recursively update nested dictionaries."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                Config._deep_update(base[key], value)
            else:
                base[key] = value


class ConfigManager:
    """
    Settings for the validation engine and its logging.

    Every source is validated against ``SETTINGS_SPEC`` before it is merged,
    so a bad file or variable never replaces a good setting.
    """

    def __init__(self, defaults: Optional[Dict[str, Any]] = None):
        self._defaults = deepcopy(defaults if defaults is not None else DEFAULT_SETTINGS)
        self._config = Config(deepcopy(self._defaults))
        self.logger = get_logger(self.__class__.__name__)

    def validate_settings(self, data: Any, source: str = 'settings'):
        """Raise ConfigurationError if ``data`` does not match SETTINGS_SPEC."""
        errors = validate(data, SETTINGS_SPEC, max_depth=DEFAULT_MAX_DEPTH)
        if errors is None:
            return

        if isinstance(errors, str):
            details = {'errors': {'': errors}}
        else:
            details = {
                'errors': {'.'.join(str(part) for part in path): msg for path, msg in errors.items()}
            }
        raise ConfigurationError(
            f"Invalid configuration in {source}",
            details={'source': source, **details}
        )

    def load_from_file(self, filepath: str, validate: bool = True):
        """
        Load configuration from file (JSON or YAML).

        Args:
            filepath: Path to configuration file
            validate: Whether to validate against SETTINGS_SPEC
        """
        path = Path(filepath)

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {filepath}",
                details={'filepath': str(path)}
            )

        if path.suffix not in ['.yaml', '.yml', '.json']:
            raise ConfigurationError(
                f"Unsupported file format: {path.suffix}",
                details={'filepath': str(path)}
            )

        try:
            with open(path, 'r') as f:
                if path.suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {filepath}: {e}",
                details={'filepath': str(path), 'error': str(e)}
            ) from e

        # An empty YAML document loads as None.
        data = data or {}

        if validate:
            self.validate_settings(data, source=str(path))

        self._config.update(data)
        self.logger.info(f"Loaded configuration from {filepath}")

    def load_from_env(self, prefix: str = "SPEX_", environ: Optional[Dict[str, str]] = None):
        """
        Load configuration from environment variables.

        A double underscore separates nesting levels:
        ``SPEX_VALIDATION__MAX_DEPTH=64`` sets ``validation.max_depth``.
        Values are parsed as JSON when possible, so ``true`` and ``64`` keep
        their types.

        Args:
            prefix: Prefix for environment variables
            environ: Mapping to read instead of ``os.environ``
        """
        environ = os.environ if environ is None else environ
        env_config = Config()

        for key, value in environ.items():
            if not key.startswith(prefix):
                continue

            config_key = key[len(prefix):].lower().replace('__', '.')

            try:
                parsed_value = json.loads(value)
            except json.JSONDecodeError:
                parsed_value = value

            env_config.set(config_key, parsed_value)

        data = env_config.to_dict()
        self.validate_settings(data, source='environment')
        self._config.update(data)
        self.logger.info(f"Loaded {len(data)} configuration sections from environment")

    def load_from_dict(self, data: Dict[str, Any], validate: bool = True):
        """
        Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            validate: Whether to validate against SETTINGS_SPEC
        """
        if validate:
            self.validate_settings(data, source='dict')

        self._config.update(deepcopy(data))
        self.logger.info("Loaded configuration from dictionary")

    def save_to_file(self, filepath: str, format: str = 'yaml'):
        """
        Save configuration to file.

        Args:
            filepath: Path to save configuration
            format: File format ('yaml' or 'json')
        """
        if format not in ('yaml', 'json'):
            raise ConfigurationError(f"Unsupported format: {format}")

        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, 'w') as f:
                if format == 'yaml':
                    yaml.safe_dump(self._config.to_dict(), f, default_flow_style=False)
                else:
                    json.dump(self._config.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save configuration to {filepath}: {e}",
                details={'filepath': str(path), 'error': str(e)}
            ) from e

        self.logger.info(f"Saved configuration to {filepath}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set configuration value after validating the resulting settings."""
        candidate = Config(self._config.to_dict())
        candidate.set(key, value)
        self.validate_settings(candidate.to_dict(), source=key)
        self._config = candidate
        self.logger.debug(f"Set config: {key} = {value}")

    def get_config(self) -> Config:
        """Get the full configuration object."""
        return self._config

    def configure_logging(self, force: bool = True):
        """Apply the ``logging`` section to the spex loggers."""
        settings = self._config.get('logging', {})
        LoggerFactory.configure(**settings, force=force)

    def reset(self):
        """Restore the default settings."""
        self._config = Config(deepcopy(self._defaults))
        self.logger.info("Reset configuration to defaults")


# Global configuration manager instance
_global_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _global_config_manager
    if _global_config_manager is None:
        _global_config_manager = ConfigManager()
    return _global_config_manager


def load_config(filepath: str):
    """Load configuration from file into global manager."""
    manager = get_config_manager()
    manager.load_from_file(filepath)


def get_config(key: str, default: Any = None) -> Any:
    """Get configuration value from global manager."""
    manager = get_config_manager()
    return manager.get(key, default)


def set_config(key: str, value: Any):
    """Set configuration value in global manager."""
    manager = get_config_manager()
    manager.set(key, value)


def configure_logging(force: bool = True):
    """Apply the global logging settings."""
    get_config_manager().configure_logging(force=force)
