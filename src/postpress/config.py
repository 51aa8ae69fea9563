"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from postpress.core.render import PRESETS


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str = "postpress"
    content_dir:   str = Field(default="_posts",   description="Directory of Markdown posts to build")
    layouts_dir:   str = Field(default="_layouts", description="Directory of *.html layout templates")
    output_dir:    str = Field(default="_site",    description="Directory for rendered HTML pages")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    strict:        bool = Field(default=False, description="Treat unclosed code fences as errors")

    @field_validator("parser_config")
    @classmethod
    def known_preset(cls, v: str) -> str:
        if v not in PRESETS:
            raise ValueError(f"parser_config must be one of: {', '.join(PRESETS)}")
        return v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then POSTPRESS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"POSTPRESS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
