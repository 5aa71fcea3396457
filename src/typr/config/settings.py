"""Configuration model for Typr."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


def default_data_dir() -> Path:
    env = os.environ.get("TYPR_DATA_DIR")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".typr"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    forgive_errors: bool = False
    default_time_limit: int = Field(default=60, ge=1)
    default_words_limit: int = Field(default=25, ge=1)
    show_wpm_live: bool = True
    auto_save_results: bool = True
    min_accuracy_to_save: float = Field(default=0.5, ge=0.0, le=1.0)
    data_dir: Path = Field(default_factory=default_data_dir)

    @property
    def config_path(self) -> Path:
        return self.data_dir / "config.yaml"

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "Settings":
        """Load settings from ``config.yaml``, falling back to defaults.

        A missing, unreadable or invalid file is not an error: the defaults
        are returned and the problem only shows up in the debug log.
        """
        data_dir = data_dir or default_data_dir()
        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            return cls(data_dir=data_dir)
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise TypeError(f"expected a mapping, got {type(data).__name__}")
            data["data_dir"] = data_dir
            return cls(**data)
        except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
            logger.debug("ignoring unreadable settings at %s: %s", config_path, e)
            return cls(data_dir=data_dir)

    def save(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                yaml.dump(
                    self.model_dump(mode="json", exclude={"data_dir"}),
                    f,
                    default_flow_style=False,
                )
        except OSError as e:
            logger.debug("could not write settings to %s: %s", self.config_path, e)
