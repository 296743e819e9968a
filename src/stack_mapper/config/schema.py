"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CodeFrameConfig(BaseModel):
    """Code frame rendering configuration."""

    lines_above: int = Field(2, ge=0, le=50)
    lines_below: int = Field(3, ge=0, le=50)


class StackConfig(BaseModel):
    """Stack parsing and rewriting configuration."""

    internal_origin: str = "cypress://"
    spec_frame_marker: str = "__getSpecFrameStack"
    function_name_rewrites: dict[str, str] = {"Context.eval": "Test.run"}

    @field_validator("internal_origin")
    @classmethod
    def validate_internal_origin(cls, v: str) -> str:
        """Validate the internal origin looks like a URL scheme."""
        if not v.endswith("://"):
            raise ValueError("Internal origin must end with ://")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"


class StackMapperConfig(BaseSettings):
    """Root configuration for the stack mapper."""

    project_root: Path = Path(".")
    code_frame: CodeFrameConfig = CodeFrameConfig()
    stack: StackConfig = StackConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="STACK_MAPPER_",
        env_nested_delimiter="__",
    )
