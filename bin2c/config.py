#!/usr/bin/env python3
"""
Configuration management for bin2c.
Handles loading default encoder settings from YAML files and merging them
with command-line overrides.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from .errors import ConfigError
from .options import EncoderConfig


class ConfigManager:
    """Manages configuration loading and merging."""

    DEFAULT_CONFIG_NAMES = ['bin2c.yaml', 'bin2c.yml']

    # Single source of truth: Default configuration as YAML string
    DEFAULT_CONFIG_YAML = """# bin2c configuration file
# Place this file in your project directory, in ~/.useful_scripts/bin2c/,
# or use --config to specify its location. Command-line flags win.

encoder:
  line_width: 80  # encoded bytes per output line
  output_format: "char"  # Output formats: char | string | nsstring
  # - char: const unsigned char name[] = {...}; plus name_len
  # - string: const char *name = "\\x..";
  # - nsstring: const NSString *name = @"\\x..";
  static: false  # prefix declarations with 'static'
  null_terminate: false  # append a 0x00 byte (char format only)
  declaration_prefix: "const "  # text placed before the type
"""

    def __init__(self):
        self.config: Dict[str, Any] = self._get_default_config()
        self.config_path: Optional[Path] = None

    def _get_default_config(self) -> Dict[str, Any]:
        """Parse default configuration from YAML string."""
        return yaml.safe_load(self.DEFAULT_CONFIG_YAML) or {}

    def find_config_file(self, explicit_path: Optional[str] = None) -> Optional[Path]:
        """Find configuration file in order of precedence."""
        if explicit_path:
            path = Path(explicit_path)
            if path.exists():
                return path
            raise ConfigError(f"Config file not found: {explicit_path}")

        for name in self.DEFAULT_CONFIG_NAMES:
            path = Path.cwd() / name
            if path.exists():
                return path

        config_dir = Path.home() / '.useful_scripts' / 'bin2c'
        for name in self.DEFAULT_CONFIG_NAMES:
            path = config_dir / name
            if path.exists():
                return path

        return None

    def load_config(self, config_path: Optional[str] = None) -> None:
        """Load configuration from file."""
        path = self.find_config_file(config_path)
        if not path:
            return  # Use defaults

        try:
            with open(path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        self.config_path = path
        self.config = self._deep_merge(self.config, user_config)

    def _deep_merge(self, base: Dict, overlay: Dict) -> Dict:
        """Deep merge overlay dict into base dict."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path (e.g., 'encoder.line_width')."""
        keys = key_path.split('.')
        value = self.config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set config value by dot-notation path."""
        keys = key_path.split('.')
        target = self.config
        for key in keys[:-1]:
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value

    def update_from_args(self, args: Any) -> None:
        """Update configuration from command-line arguments."""
        arg_mapping = {
            'line_width': 'encoder.line_width',
            'type': 'encoder.output_format',
            'prefix': 'encoder.declaration_prefix',
        }

        for arg_name, config_path in arg_mapping.items():
            if hasattr(args, arg_name):
                value = getattr(args, arg_name)
                if value is not None:
                    self.set(config_path, value)

        # Switches can only turn a setting on
        flag_mapping = {
            'static': 'encoder.static',
            'null_terminate': 'encoder.null_terminate',
        }
        for arg_name, config_path in flag_mapping.items():
            if getattr(args, arg_name, False):
                self.set(config_path, True)

    def build_encoder_config(self, variable_name: str,
                             input_path: Optional[str] = None,
                             output_path: Optional[str] = None) -> EncoderConfig:
        """Freeze the merged settings into an EncoderConfig."""
        settings = self.get('encoder', {})
        if not isinstance(settings, dict):
            raise ConfigError("The 'encoder' section must be a mapping")
        return EncoderConfig.from_dict(
            settings,
            variable_name=variable_name,
            input_path=input_path,
            output_path=output_path,
        )

    def generate_default_config_file(self, path: Path = None) -> Path:
        """Generate a default configuration file with comments."""
        if not path:
            path = Path.cwd() / self.DEFAULT_CONFIG_NAMES[0]

        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.DEFAULT_CONFIG_YAML)

        return path
