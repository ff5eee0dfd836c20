"""Settings lookup for holybible.

Values come from, highest priority first: process environment, a ``.env``
file (python-dotenv, never overriding variables already set), the YAML file
``~/.holybible/config.yaml``, and finally the caller's default.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".holybible"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"

_yaml_settings: Dict[str, Any] = {}
_loaded = False


def _read_yaml(config_file: Path) -> Dict[str, Any]:
    if not config_file.exists():
        logger.debug(f"No settings file at {config_file}")
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Could not read settings file {config_file}: {e}")
        return {}
    if content is None:
        return {}
    if not isinstance(content, dict):
        logger.warning(f"Ignoring settings file {config_file}: top level is not a mapping.")
        return {}
    logger.info(f"Read {len(content)} setting(s) from {config_file}")
    return content


def load_configuration(
    config_file: Optional[Path] = None,
    env_file: Optional[Path] = None,
    force: bool = False,
) -> None:
    """Reads the YAML settings file and the .env file once per process.

    Args:
        config_file: YAML file to read (defaults to DEFAULT_CONFIG_FILE).
        env_file: .env file to load (searched for from the cwd upwards if None).
        force: Read again even if settings were already loaded.
    """
    global _yaml_settings, _loaded
    if _loaded and not force:
        return

    _yaml_settings = _read_yaml(config_file or DEFAULT_CONFIG_FILE)

    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path is None:
        logger.debug("No .env file found.")
    elif load_dotenv(dotenv_path=dotenv_path, override=False):
        logger.info(f"Environment variables loaded from {dotenv_path}")

    _loaded = True


def _coerce(value: str) -> Any:
    """Turns 'true'/'false' and numeric strings from the environment into values."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for number_type in (int, float):
        try:
            return number_type(value)
        except ValueError:
            continue
    return value


def get_config(key: str, default: Any = None) -> Any:
    """Looks up a setting such as 'bible_version'.

    The environment is consulted under the upper-cased key with dots turned
    into underscores (``bible.cache.ttl`` -> ``BIBLE_CACHE_TTL``), then the
    YAML settings, then ``default`` is returned.
    """
    env_value = os.environ.get(key.upper().replace(".", "_"))
    if env_value is not None:
        return _coerce(env_value)
    return _yaml_settings.get(key, default)


def find_dotenv_path() -> Optional[Path]:
    """Returns the nearest .env file in the cwd or one of its parents."""
    cwd = Path.cwd()
    return next(
        (candidate for candidate in (d / ENV_FILE_NAME for d in (cwd, *cwd.parents)) if candidate.is_file()),
        None,
    )


def reset_configuration() -> None:
    """Forgets loaded YAML values so the next load_configuration() reads again."""
    global _yaml_settings, _loaded
    _yaml_settings = {}
    _loaded = False
