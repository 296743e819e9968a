"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    CodeFrameConfig,
    LoggingConfig,
    StackConfig,
    StackMapperConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "StackMapperConfig",
    # Sections
    "CodeFrameConfig",
    "LoggingConfig",
    "StackConfig",
]
