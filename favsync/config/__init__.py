# favsync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from favsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from favsync.config.loader import (
    ConfigError,
    get_config_path,
    load_config,
    validate_config_file,
    write_default_config,
)
from favsync.config.schema import (
    ClientConfig,
    Credential,
    OutputConfig,
    SmtpConfig,
    SyncConfiguration,
    parse_collection_id,
)

__all__ = [
    # Schema
    "SyncConfiguration",
    "Credential",
    "SmtpConfig",
    "ClientConfig",
    "OutputConfig",
    "parse_collection_id",
    # Loader
    "ConfigError",
    "load_config",
    "get_config_path",
    "validate_config_file",
    "write_default_config",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
