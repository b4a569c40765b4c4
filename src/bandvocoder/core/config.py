"""
Configuration Management
========================

This module provides TOML-based configuration file support for bandvocoder.

Configuration files are searched in the following order (highest to lowest priority):
1. Path specified via --config option
2. ./bandvocoder.toml (current directory)
3. ~/.config/bandvocoder/config.toml (user config)
4. /etc/bandvocoder/config.toml (system config)
5. Built-in defaults

Example configuration file (bandvocoder.toml):

    [engine]
    min_hz = 80.0
    max_hz = 7000.0
    envelope_cutoff_hz = 40.0
    default_width = 50
    channel_policy = "mix"
    block_size = 16384

    [compressor]
    threshold_db = -24.0
    knee_db = 10.0
    ratio = 12.0
    attack = 0.003
    release = 0.25

    [output]
    summing_gain = 1.0
    makeup_gain = 4.0
    subtype = "PCM_16"

    [queue]
    workers = 1
    max_pending = 0
    overflow = "queue"
    history = 100

    [logging]
    level = "INFO"

The band count and the working sample rate are fixed by the engine; they are
listed under [engine] for reference only and a file that changes them is
rejected.
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bandvocoder.core import globals as G
from bandvocoder.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Use tomli for Python < 3.11, tomllib for Python >= 3.11
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "engine": {
        "work_rate": G.WORK_RATE,
        "band_count": G.BAND_COUNT,
        "min_hz": G.MIN_BAND_HZ,
        "max_hz": G.MAX_BAND_HZ,
        "envelope_cutoff_hz": G.ENVELOPE_CUTOFF_HZ,
        "envelope_q_db": G.ENVELOPE_Q_DB,
        "min_q": G.MIN_Q,
        "max_q": G.MAX_Q,
        "default_width": G.DEFAULT_WIDTH,
        "channel_policy": "mix",  # "mix" or "first"
        "block_size": G.DEFAULT_BLOCK_SIZE,
    },
    "compressor": {
        "threshold_db": G.COMPRESSOR_THRESHOLD_DB,
        "knee_db": G.COMPRESSOR_KNEE_DB,
        "ratio": G.COMPRESSOR_RATIO,
        "attack": G.COMPRESSOR_ATTACK,
        "release": G.COMPRESSOR_RELEASE,
    },
    "output": {
        "summing_gain": G.SUMMING_GAIN,
        "makeup_gain": G.MAKEUP_GAIN,
        "subtype": G.OUTPUT_SUBTYPE,
    },
    "queue": {
        "workers": 1,
        "max_pending": 0,  # 0 = unbounded
        "overflow": "queue",  # "queue" or "reject"
        "history": 100,  # finished jobs kept for inspection
    },
    "logging": {
        "level": "INFO",
    },
}

# Keys the engine does not allow to change
_FIXED_KEYS = {
    ("engine", "work_rate"): G.WORK_RATE,
    ("engine", "band_count"): G.BAND_COUNT,
}

# Standard config file locations
CONFIG_LOCATIONS = [
    Path("bandvocoder.toml"),
    Path("~/.config/bandvocoder/config.toml").expanduser(),
    Path("/etc/bandvocoder/config.toml"),
]


@dataclass
class Config:
    """
    Configuration container for bandvocoder settings.

    Attributes:
        engine: Band layout, envelope and rendering settings
        compressor: Dynamics compressor settings
        output: Summing/makeup gains and WAV subtype
        queue: Job queue worker pool settings
        logging: Logging settings
        _source: Path to the config file that was loaded
    """

    engine: Dict[str, Any] = field(default_factory=dict)
    compressor: Dict[str, Any] = field(default_factory=dict)
    output: Dict[str, Any] = field(default_factory=dict)
    queue: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)
    _source: Optional[str] = None

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        section_dict = getattr(self, section, {})
        if section_dict is None:
            return default
        return section_dict.get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a configuration value."""
        section_dict = getattr(self, section, None)
        if section_dict is not None:
            section_dict[key] = value

    @property
    def sections(self) -> List[str]:
        return list(DEFAULT_CONFIG.keys())

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "engine": self.engine,
            "compressor": self.compressor,
            "output": self.output,
            "queue": self.queue,
            "logging": self.logging,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "Config":
        """Create Config from dictionary."""
        return cls(
            engine=data.get("engine", {}),
            compressor=data.get("compressor", {}),
            output=data.get("output", {}),
            queue=data.get("queue", {}),
            logging=data.get("logging", {}),
            _source=source,
        )


def load_toml(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a TOML configuration file.

    Args:
        filepath: Path to the TOML file

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If file doesn't exist
        tomllib.TOMLDecodeError: If TOML parsing fails
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(path, "rb") as f:
        return tomllib.load(f)


def save_toml(config: Dict[str, Any], filepath: Union[str, Path]) -> str:
    """
    Save configuration to a TOML file.

    Args:
        config: Configuration dictionary
        filepath: Path to save the file

    Returns:
        Path to the saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    for section, values in config.items():
        if isinstance(values, dict) and values:
            lines.append(f"[{section}]")
            for key, value in values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, (int, float)):
                    lines.append(f"{key} = {value}")
                elif isinstance(value, list):
                    items = ", ".join(f'"{v}"' if isinstance(v, str) else str(v) for v in value)
                    lines.append(f"{key} = [{items}]")
            lines.append("")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))

    return str(path)


def find_config_file(config_path: Optional[str] = None) -> Optional[Path]:
    """
    Find the configuration file to use.

    Args:
        config_path: Explicit path to config file (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if config_path:
        path = Path(config_path)
        if path.exists():
            return path
        logger.warning(f"Specified config file not found: {config_path}")
        return None

    for location in CONFIG_LOCATIONS:
        if location.exists():
            return location

    return None


def validate_config_data(config_data: Dict[str, Any]) -> None:
    """
    Reject settings the engine cannot honour.

    Raises:
        ValidationError: If a fixed key was changed or a choice is unknown
    """
    for (section, key), expected in _FIXED_KEYS.items():
        value = config_data.get(section, {}).get(key, expected)
        if value != expected:
            raise ValidationError(
                f"[{section}].{key} is fixed at {expected}, got {value}", field=key
            )

    policy = config_data.get("engine", {}).get("channel_policy", "mix")
    if policy not in ("mix", "first"):
        raise ValidationError(f"Unknown channel_policy: {policy}", field="channel_policy")

    overflow = config_data.get("queue", {}).get("overflow", "queue")
    if overflow not in ("queue", "reject"):
        raise ValidationError(f"Unknown queue overflow policy: {overflow}", field="overflow")


def get_default_config() -> Config:
    """Get the default configuration."""
    return Config.from_dict(_deep_copy_dict(DEFAULT_CONFIG))


def create_default_config_file(filepath: Optional[str] = None) -> str:
    """
    Create a default configuration file.

    Args:
        filepath: Path to create the file (default: ./bandvocoder.toml)

    Returns:
        Path to the created file
    """
    if filepath is None:
        filepath = "bandvocoder.toml"

    return save_toml(DEFAULT_CONFIG, filepath)


def _deep_copy_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    """Create a deep copy of a dictionary."""
    result = {}
    for key, value in d.items():
        if isinstance(value, dict):
            result[key] = _deep_copy_dict(value)
        elif isinstance(value, list):
            result[key] = value.copy()
        else:
            result[key] = value
    return result


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two dictionaries, with override taking precedence."""
    result = _deep_copy_dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


# Global configuration instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config_cascade()
    return _global_config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to None (will reload on next access)."""
    global _global_config
    _global_config = None


def get_config_locations() -> List[Path]:
    """
    Get configuration file search locations in priority order.

    Returns:
        List of paths to search, in priority order (highest first)
    """
    return CONFIG_LOCATIONS.copy()


def load_config_cascade(
    explicit_path: Optional[str] = None,
) -> Config:
    """
    Load configuration with full cascade support.

    Merges configs from all levels in priority order:
    defaults -> system -> user -> current dir -> explicit

    Higher priority configs override lower priority ones. Unreadable files
    are skipped with a warning.

    Args:
        explicit_path: Explicit config file path (highest priority)

    Returns:
        Config object with merged settings from all sources

    Raises:
        ValidationError: If the merged settings change fixed engine settings
    """
    config_data = _deep_copy_dict(DEFAULT_CONFIG)
    source = "defaults"

    paths = list(reversed(get_config_locations()))
    if explicit_path:
        if Path(explicit_path).exists():
            paths.append(Path(explicit_path))
        else:
            logger.warning(f"Specified config file not found: {explicit_path}")

    # Lowest priority first so later files override earlier ones
    for location in paths:
        if not location.exists():
            continue
        try:
            file_config = load_toml(location)
        except Exception as e:
            logger.warning(f"Error loading {location}: {e}")
            continue
        config_data = _merge_dicts(config_data, file_config)
        source = str(location)
        logger.debug(f"Merged configuration from {location}")

    validate_config_data(config_data)
    return Config.from_dict(config_data, source=source)
