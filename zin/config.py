"""User configuration: key bindings, colors and logging setup.

The configuration is read once at startup from a JSON file in the user's
config directory. Anything missing or invalid falls back to the built-in
defaults, with a warning logged for each rejected entry. Example::

    {
        "keys": {"insert_mode": 105, "yank": "y"},
        "colors": {"background": [24, 24, 24], "green": [115, 201, 54]}
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import platformdirs

from .constants import EditorConstants
from .highlighter import Category

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Keybindings:
    """Key codes for the mode keys."""
    insert_mode: int = ord('i')
    visual_mode: int = ord('v')
    normal_mode: int = EditorConstants.ESCAPE_CODE
    yank: int = ord('y')
    paste: int = ord('p')


@dataclass(frozen=True)
class Theme:
    """Named RGB colors used by the terminal backend."""
    background: RGB = (24, 24, 24)
    background1: RGB = (40, 40, 40)
    foreground: RGB = (228, 228, 239)
    foreground1: RGB = (228, 228, 239)
    green: RGB = (115, 201, 54)
    orange: RGB = (204, 140, 60)
    yellow: RGB = (255, 221, 51)
    quartz: RGB = (149, 169, 159)

    def category_colors(self) -> Dict[Category, Tuple[RGB, RGB]]:
        """Map each token category to (foreground, background)."""
        return {
            Category.PLAIN: (self.foreground, self.background),
            Category.KEYWORD: (self.yellow, self.background),
            Category.TYPE: (self.quartz, self.background),
            Category.OPERATOR: (self.orange, self.background),
            Category.STRING: (self.green, self.background),
            Category.COMMENT: (self.background1, self.background),
        }

    def mode_label_colors(self, normal: bool) -> Tuple[RGB, RGB]:
        if normal:
            return (self.background, self.green)
        return (self.background, self.orange)

    def bar_colors(self) -> Tuple[RGB, RGB]:
        return (self.foreground1, self.background1)


@dataclass(frozen=True)
class Config:
    keys: Keybindings = field(default_factory=Keybindings)
    theme: Theme = field(default_factory=Theme)


def default_config_path() -> Path:
    return Path(platformdirs.user_config_dir(EditorConstants.APP_NAME)) / EditorConstants.CONFIG_FILENAME


def _parse_key_code(value: Any) -> Optional[int]:
    """Accept an integer code or a one-character string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and 0 <= value <= 0x10FFFF:
        return value
    if isinstance(value, str) and len(value) == 1:
        return ord(value)
    return None


def _parse_rgb(value: Any) -> Optional[RGB]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return None
    if not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
        return None
    return (value[0], value[1], value[2])


def _parse_section(section: Any, defaults, parse_value, section_name: str):
    """Overlay valid entries of a JSON object onto a frozen dataclass."""
    if not isinstance(section, dict):
        logger.warning(f"Config section '{section_name}' is not an object, ignoring")
        return defaults
    known = {f.name for f in fields(defaults)}
    updates = {}
    for name, raw in section.items():
        if name not in known:
            logger.warning(f"Unknown config entry '{section_name}.{name}', ignoring")
            continue
        value = parse_value(raw)
        if value is None:
            logger.warning(f"Invalid value for '{section_name}.{name}': {raw!r}, using default")
            continue
        updates[name] = value
    return replace(defaults, **updates)


def load_config(path: Optional[os.PathLike] = None) -> Config:
    """Load the configuration file, falling back to defaults.

    Args:
        path: Config file to read. Defaults to config.json in the
            platform-specific user config directory.

    Returns:
        The merged configuration. Never raises for a bad or missing file.
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        return Config()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config from {config_path}: {e}")
        return Config()

    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a dict), ignoring")
        return Config()

    for name in data:
        if name not in ("keys", "colors"):
            logger.warning(f"Unknown config section '{name}', ignoring")

    keys = _parse_section(data.get("keys", {}), Keybindings(), _parse_key_code, "keys")
    theme = _parse_section(data.get("colors", {}), Theme(), _parse_rgb, "colors")
    logger.debug(f"Loaded config from {config_path}")
    return Config(keys=keys, theme=theme)


def configure_logging() -> Optional[Path]:
    """Send zin's log records to a file when ZIN_LOG_LEVEL is set.

    The editor owns the whole terminal, so logs cannot go to stderr.

    Returns:
        Path of the log file, or None if logging stays disabled
    """
    package_logger = logging.getLogger(EditorConstants.APP_NAME)
    level_name = os.environ.get(EditorConstants.LOG_LEVEL_ENV)
    if not level_name:
        package_logger.addHandler(logging.NullHandler())
        return None

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    log_dir = Path(platformdirs.user_log_dir(EditorConstants.APP_NAME))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None

    log_path = log_dir / EditorConstants.LOG_FILENAME
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return log_path
