"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from pkgdiff.core.models import DiffOptions, parse_options


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:              str   = "pkgdiff"
    merge_modified_lines:  bool  = Field(default=True, description="Show similar deleted/added lines as one modified row")
    max_change_ratio:      float = Field(default=0.45, description="Max share of changed characters for a modified row")
    max_diff_distance:     int   = Field(default=30,   description="Max positional offset between paired lines")
    inline_max_char_edits: int   = Field(default=4,    description="Max char edits before inline highlighting is dropped")
    max_file_size:         int   = Field(default=250 * 1024, ge=1, description="Largest file (bytes) read for diffing")
    log_level:             str   = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    def diff_options(self) -> DiffOptions:
        """Validated DiffOptions from these settings; raises InvalidOptions when out of range."""
        return parse_options({name: getattr(self, name) for name in DiffOptions.model_fields})


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then PKGDIFF_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"PKGDIFF_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
