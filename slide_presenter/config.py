"""
Presenter configuration.

Loads ``config.yaml`` (see :func:`find_config_file` for the lookup order)
into a :class:`PresenterConfig`. Every field has a default, so a missing
file simply means "use the defaults".

Example::

    heading_marker: "#"
    keys:
      next: [n, KEY_RIGHT]
      previous: [p, KEY_LEFT]
      quit: [q]
    options:
      cmdheight: 0
      cursor: 0
    source_label: Quarterly review
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigError
from .models import OptionOverride
from .slide_parser import DEFAULT_HEADING_MARKER

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SLIDE_PRESENTER_CONFIG"
USER_CONFIG_PATH = Path("~/.config/slide-presenter/config.yaml")


@dataclass
class KeyBindings:
    """Keys driving navigation, all bound on the body surface."""
    next: List[str] = field(default_factory=lambda: ["n"])
    previous: List[str] = field(default_factory=lambda: ["p"])
    quit: List[str] = field(default_factory=lambda: ["q"])
    mode: str = "n"

    def actions(self):
        """Yield ``(action, keys)`` pairs."""
        yield "next", self.next
        yield "previous", self.previous
        yield "quit", self.quit


@dataclass
class PresenterConfig:
    """Settings for one presentation session."""
    heading_marker: str = DEFAULT_HEADING_MARKER
    keys: KeyBindings = field(default_factory=KeyBindings)
    # Host display options changed while presenting, restored afterwards
    options: Dict[str, Any] = field(default_factory=lambda: {"cmdheight": 0})
    source_label: Optional[str] = None

    def option_overrides(self) -> List[OptionOverride]:
        """Fresh override records; original values are filled in at session start."""
        return [OptionOverride(option_id=name, present_value=value) for name, value in self.options.items()]


def _key_list(section: str, value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and value and all(isinstance(v, str) and v for v in value):
        return list(value)
    raise ConfigError(f"keys.{section} must be a key name or a non-empty list of key names, got {value!r}")


def _parse_config_dict(data: Dict[str, Any]) -> PresenterConfig:
    """Parse a configuration dictionary into a PresenterConfig."""
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    config = PresenterConfig()
    known = {"heading_marker", "keys", "options", "source_label"}
    for key in sorted(set(data) - known):
        logger.warning(f"Ignoring unknown configuration key: {key}")

    if "heading_marker" in data:
        marker = data["heading_marker"]
        if not isinstance(marker, str) or not marker:
            raise ConfigError(f"heading_marker must be a non-empty string, got {marker!r}")
        config.heading_marker = marker

    if "keys" in data:
        keys = data["keys"] or {}
        if not isinstance(keys, dict):
            raise ConfigError("keys must be a mapping")
        config.keys = KeyBindings(
            next=_key_list("next", keys["next"]) if "next" in keys else config.keys.next,
            previous=_key_list("previous", keys["previous"]) if "previous" in keys else config.keys.previous,
            quit=_key_list("quit", keys["quit"]) if "quit" in keys else config.keys.quit,
            mode=str(keys.get("mode", config.keys.mode)),
        )

    if "options" in data:
        options = data["options"] or {}
        if not isinstance(options, dict):
            raise ConfigError("options must be a mapping of option name to value")
        config.options = dict(options)

    if data.get("source_label") is not None:
        config.source_label = str(data["source_label"])

    return config


def find_config_file() -> Optional[Path]:
    """
    Find the configuration file.

    Search order:
    1. $SLIDE_PRESENTER_CONFIG
    2. ~/.config/slide-presenter/config.yaml
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path).expanduser()
        if path.exists():
            return path
        logger.warning(f"{CONFIG_ENV_VAR} points to missing file: {path}")

    user_config = USER_CONFIG_PATH.expanduser()
    if user_config.exists():
        return user_config

    return None


def load_config(config_path: Optional[Path] = None) -> PresenterConfig:
    """
    Load configuration from a YAML file.

    A file that cannot be read or parsed is reported and replaced by the
    defaults. Values of the wrong type raise :class:`ConfigError`.

    Args:
        config_path: Path to config file (auto-detected if None)

    Returns:
        PresenterConfig instance
    """
    if config_path is None:
        config_path = find_config_file()

    if not config_path or not Path(config_path).exists():
        logger.info("No config file found, using defaults")
        return PresenterConfig()

    logger.info(f"Loading config from: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config: {e}, using defaults")
        return PresenterConfig()

    return _parse_config_dict(data)


def config_from_dict(data: Dict[str, Any]) -> PresenterConfig:
    """Build a configuration from an in-memory mapping (the ``setup()`` style entry point)."""
    return _parse_config_dict(data or {})
