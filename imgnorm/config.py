"""Configuration management."""

from pathlib import Path
from typing import Optional, Dict, Any, Callable
import os

import yaml

from imgnorm.core.conversion import ConversionPolicy
from imgnorm.core.logging_utils import get_logger


class Config:
    """Configuration manager."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self.config = self._load_defaults()

        if config_file and config_file.exists():
            self.load_from_file(config_file)

        # Override with environment variables
        self._load_from_env()

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default configuration."""
        return {
            'percentiles': {
                'low': 1.0,
                'high': 99.0,
            },
            'histogram': {
                'float_bin_count': 256,
                'int_bin_shift': 0,
            },
            'formats': {
                'wide': ['tif', 'tiff'],
                'rgb_only': ['ppm'],
                'gray_only': ['pbm', 'pgm'],
            },
            'image': {
                'extensions': ['.mrc', '.tif', '.tiff', '.png', '.jpg', '.jpeg',
                               '.bmp', '.ppm', '.pgm', '.pbm'],
            },
            'output': {
                'folder': 'converted',
            },
        }

    def load_from_file(self, config_file: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, 'r') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            get_logger().warning(f"Could not load config file {config_file}: {e}")
            return

        if isinstance(file_config, dict):
            self._merge_config(self.config, file_config)

    def _merge_config(self, base: Dict, override: Dict) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        env_mappings: Dict[str, tuple] = {
            'IMGNORM_LOW_PERCENTILE': (('percentiles', 'low'), float),
            'IMGNORM_HIGH_PERCENTILE': (('percentiles', 'high'), float),
            'IMGNORM_FLOAT_BINS': (('histogram', 'float_bin_count'), int),
            'IMGNORM_OUTPUT_FOLDER': (('output', 'folder'), str),
        }

        for env_var, (config_path, cast) in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                self._set_nested(self.config, config_path, self._cast(env_var, value, cast))

    def _cast(self, env_var: str, value: str, cast: Callable[[str], Any]) -> Any:
        try:
            return cast(value)
        except ValueError:
            raise ValueError(f"Invalid value for {env_var}: {value!r}") from None

    def _set_nested(self, config: Dict, path: tuple, value: Any) -> None:
        """Set nested configuration value."""
        for key in path[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]
        config[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def percentiles(self) -> tuple:
        """Get the (low, high) percentiles used for 8-bit rescaling."""
        return (float(self.get('percentiles.low', 1.0)),
                float(self.get('percentiles.high', 99.0)))

    def conversion_policy(self) -> ConversionPolicy:
        """Build the output format policy from the formats section."""
        return ConversionPolicy.from_lists(
            wide=self.get('formats.wide', []),
            rgb_only=self.get('formats.rgb_only', []),
            gray_only=self.get('formats.gray_only', []),
        )


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        config_file: Path to config file (optional)

    Returns:
        Config instance
    """
    return Config(config_file)
