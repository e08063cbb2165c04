"""
Application settings for the launcher.

Settings live in ``$XDG_CONFIG_HOME/linuxblox/settings.yaml`` (falling back
to ``~/.config/linuxblox``). A missing or unreadable file yields defaults.
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .constants import DEFAULT_LAUNCH_COMMAND, FLAGS_OBJECT_KEY, SETTINGS_DIR_NAME, SETTINGS_FILE_NAME

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Custom exception for configuration errors."""

    pass


@dataclass
class AppSettings:
    config_path: Optional[str] = None
    flags_key: str = FLAGS_OBJECT_KEY
    launch_command: List[str] = field(default_factory=lambda: list(DEFAULT_LAUNCH_COMMAND))
    log_level: str = "INFO"
    roblox_installed: bool = False
    roblox_base_path: Optional[str] = None


_FIELD_TYPES = {
    "config_path": (str, type(None)),
    "flags_key": (str,),
    "launch_command": (list,),
    "log_level": (str,),
    "roblox_installed": (bool,),
    "roblox_base_path": (str, type(None)),
}


def settings_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Directory holding the settings file."""
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / SETTINGS_DIR_NAME
    home = env.get("HOME")
    if home:
        return Path(home) / ".config" / SETTINGS_DIR_NAME
    raise ConfigurationError("Could not determine configuration directory. Set XDG_CONFIG_HOME or HOME.")


def default_settings_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    return settings_dir(environ) / SETTINGS_FILE_NAME


def settings_from_mapping(data: Mapping[str, Any]) -> AppSettings:
    """
    Build AppSettings from a parsed YAML mapping.

    Raises:
        ConfigurationError: If a known key has the wrong type.
    """
    known = {f.name for f in fields(AppSettings)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.debug(f"Ignoring unknown settings key: {key}")
            continue
        if not isinstance(value, _FIELD_TYPES[key]):
            raise ConfigurationError(
                f"Setting '{key}' has invalid type {type(value).__name__}"
            )
        values[key] = value

    if "launch_command" in values:
        command = values["launch_command"]
        if not command or not all(isinstance(part, str) for part in command):
            raise ConfigurationError("Setting 'launch_command' must be a non-empty list of strings")
    if "flags_key" in values and not values["flags_key"]:
        raise ConfigurationError("Setting 'flags_key' must not be empty")

    return AppSettings(**values)


def load_settings(path: Optional[Union[str, Path]] = None) -> AppSettings:
    """
    Load settings from ``path`` (or the default location).

    Returns defaults when the file is missing, unreadable or not valid YAML.
    """
    if path is None:
        try:
            path = default_settings_path()
        except ConfigurationError as e:
            logger.warning(f"{e} Using default settings.")
            return AppSettings()

    settings_path = Path(path)
    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug(f"Settings file does not exist: {settings_path}")
        return AppSettings()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read settings file {settings_path}: {e}")
        return AppSettings()
    except yaml.YAMLError as e:
        logger.warning(f"Settings file {settings_path} is not valid YAML: {e}")
        return AppSettings()

    if data is None:
        return AppSettings()
    if not isinstance(data, dict):
        logger.warning(f"Settings file {settings_path} must contain a mapping; using defaults")
        return AppSettings()

    settings = settings_from_mapping(data)
    logger.debug(f"Loaded settings from {settings_path}")
    return settings


def save_settings(settings: AppSettings, path: Optional[Union[str, Path]] = None) -> Path:
    """Write ``settings`` as YAML, creating the directory if needed."""
    settings_path = Path(path) if path is not None else default_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    with open(settings_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(settings), f, default_flow_style=False, sort_keys=False)
    logger.info(f"Saved settings to {settings_path}")
    return settings_path
