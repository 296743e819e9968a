"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import structlog
import yaml

from ..utils.errors import ConfigError
from ..utils.logging import LogEventNames
from .schema import StackMapperConfig

log = structlog.get_logger()


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> StackMapperConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated StackMapperConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or config is invalid
        ValidationError: If config doesn't match schema
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    # An empty file means "all defaults"
    config_dict = yaml.safe_load(yaml_with_env) or {}

    config = StackMapperConfig.model_validate(config_dict)

    validate_config(config)

    log.debug(LogEventNames.CONFIG_LOADED, path=str(path))
    return config


def validate_config(config: StackMapperConfig) -> None:
    """
    Perform additional cross-field validation.

    Args:
        config: Configuration to validate

    Raises:
        ConfigError: If the spec frame marker or a rewritten name is empty
    """
    if not config.stack.spec_frame_marker:
        raise ConfigError("Spec frame marker must not be empty")

    for source_name, target_name in config.stack.function_name_rewrites.items():
        if not source_name or not target_name:
            raise ConfigError("Function name rewrites must map non-empty names")
