"""TOML configuration loader for render settings.

Loads the ``[render]`` table from defaults.toml, or from a user-supplied
file, into a validated RenderConfig.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from chatmark.errors import ConfigError
from chatmark.schemas.config import RenderConfig

logger = logging.getLogger(__name__)

# Default config directory relative to the chatmark package
_CONFIG_DIR = Path(__file__).parent / "config"
DEFAULT_CONFIG_PATH = _CONFIG_DIR / "defaults.toml"


def load_render_config(config_path: Path | None = None) -> RenderConfig:
    """Load render settings from a TOML file.

    Args:
        config_path: Path to a TOML file with a ``[render]`` table.
            Defaults to chatmark/config/defaults.toml.

    Returns:
        RenderConfig with values from the file; keys it omits keep their
        defaults.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigError: If the TOML is unparsable, the ``[render]`` table is
            missing, or a value fails validation.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Render config not found: {path}")

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    section = raw.get("render")
    if not isinstance(section, dict):
        raise ConfigError(f"No [render] section found in {path}")

    try:
        config = RenderConfig(**section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid render settings in {path}: {exc}") from exc

    logger.debug("Loaded render config from %s", path)
    return config
