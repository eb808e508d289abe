"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from pydantic import Field, ValidationError, field_validator

from mdplain.options import PlainTextOptions


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPLAIN_"


class Settings(PlainTextOptions):
    """Rendering options plus the knobs the CLI and pipeline need."""
    app_name:      str = "mdplain"
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_dir:    str = Field(default="dist",     description="Directory for converted .txt files")
    log_level:     str = Field(default="WARNING",  pattern="^(DEBUG|INFO|WARNING|ERROR)$", description="Logging level")

    @field_validator("parser_config")
    @classmethod
    def validate_parser_config(cls, v: str) -> str:
        """Reject preset names markdown-it does not ship."""
        try:
            MarkdownIt(v)
        except KeyError as e:
            raise ValueError(f"Unknown markdown-it preset: {v!r}") from e
        return v

    def plain_text_options(self) -> PlainTextOptions:
        """Return only the rendering options, handed wholesale to the core."""
        return PlainTextOptions(**self.model_dump(include=set(PlainTextOptions.model_fields)))


def default_config_yaml() -> str:
    """Render the default settings as a config.yaml document."""
    data = Settings().model_dump(exclude={"app_name"})
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPLAIN_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}") from e
