# favsync Configuration Loader
# Load, validate, and create YAML configuration files

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from favsync.config.defaults import generate_default_config
from favsync.config.schema import SyncConfiguration

CONFIG_ENV_VAR = "FAVSYNC_CONFIG"
DEFAULT_CONFIG_NAME = "config.yaml"


class ConfigError(Exception):
    """Exception raised when the configuration cannot be loaded."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return self.message + "\n" + "\n".join(f"  {e}" for e in self.errors)


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def format_validation_errors(error: ValidationError) -> list[str]:
    """Render pydantic errors as 'loc: msg' lines."""
    lines = []
    for err in error.errors():
        loc = " -> ".join(str(part) for part in err["loc"])
        lines.append(f"{loc}: {err['msg']}")
    return lines


def _read_yaml(config_path: Path) -> dict:
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}\nRun 'favsync config init' to create one.")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e

    if data is None:
        raise ConfigError(f"Configuration file is empty: {config_path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {config_path}")

    return data


def load_config(config_path: Optional[Path] = None) -> SyncConfiguration:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        SyncConfiguration: Validated, read-only configuration object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    data = _read_yaml(config_path)

    try:
        return SyncConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}", format_validation_errors(e)) from e


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without starting anything.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, messages). Messages are errors when invalid and
        warnings when valid.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        return False, e.errors or [e.message]

    warnings: list[str] = []
    if not config.favorite_list:
        warnings.append("No favorite lists defined")

    return True, warnings


def write_default_config(config_path: Optional[Path] = None, *, force: bool = False) -> tuple[Path, bool]:
    """
    Write the commented default configuration.

    Args:
        config_path: Destination path. Uses default if not provided.
        force: Overwrite an existing file.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists() and not force:
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True
