"""
Configuration loading for chawuek.

Config files are YAML. Values missing from the file fall back to
``DEFAULT_CONFIG``. Relative data paths in a config file are resolved
against the file's directory.

Example:
    data:
      char_map: data/attacut-c/characters.json
      model: data/attacut-c/model.pt
    segmentation:
      threshold: 0.5
      separator: "|"
    runtime:
      device: cpu
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_DIR = PACKAGE_DIR / 'data' / 'attacut-c'

CONFIG_ENV_VAR = 'CHAWUEK_CONFIG'

DEFAULT_CONFIG: Dict[str, Any] = {
    'data': {
        'char_map': str(DEFAULT_DATA_DIR / 'characters.json'),
        'model': str(DEFAULT_DATA_DIR / 'model.pt'),
    },
    'segmentation': {
        'threshold': 0.5,
        'separator': '|',
    },
    'runtime': {
        'device': 'cpu',
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check value types and ranges.

    Raises:
        ConfigError: Invalid value
    """
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")

    seg_cfg = config['segmentation']

    threshold = seg_cfg.get('threshold')
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ConfigError(f"segmentation.threshold must be a number, got {threshold!r}")
    if not 0.0 <= threshold <= 1.0:
        raise ConfigError(f"segmentation.threshold must be within [0, 1], got {threshold}")

    separator = seg_cfg.get('separator')
    if not isinstance(separator, str):
        raise ConfigError(f"segmentation.separator must be a string, got {separator!r}")

    for key in ('char_map', 'model'):
        value = config['data'].get(key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"data.{key} must be a path, got {value!r}")

    return config


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration.

    Args:
        path: YAML file (default: $CHAWUEK_CONFIG, else built-in defaults only)

    Returns:
        Config dict with every default filled in

    Raises:
        ConfigError: File missing, invalid YAML or invalid values
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None

    if path is None:
        return validate_config(copy.deepcopy(DEFAULT_CONFIG))

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(loaded).__name__}")

    # Resolve data paths relative to the config file
    data_cfg = loaded.get('data')
    if isinstance(data_cfg, dict):
        for key in ('char_map', 'model'):
            value = data_cfg.get(key)
            if isinstance(value, str) and value and not Path(value).is_absolute():
                data_cfg[key] = str(path.parent / value)

    return validate_config(_merge(DEFAULT_CONFIG, loaded))


def apply_overrides(config: Dict[str, Any], **overrides) -> Dict[str, Any]:
    """
    Return a copy of config with CLI overrides applied.

    Keyword names: char_map, model, threshold, separator, device.
    ``None`` values are ignored.
    """
    sections = {
        'char_map': 'data',
        'model': 'data',
        'threshold': 'segmentation',
        'separator': 'segmentation',
        'device': 'runtime',
    }

    updated = copy.deepcopy(config)
    for key, value in overrides.items():
        if key not in sections:
            raise ConfigError(f"Unknown config override: {key}")
        if value is None:
            continue
        if isinstance(value, Path):
            value = str(value)
        updated.setdefault(sections[key], {})[key] = value

    return validate_config(updated)
