# MIT License
"""Application settings.

Settings are a small pydantic model with defaults; each one can be
overridden through an ``ECON_MVP_*`` environment variable.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

STORAGE_KEY = "econ_mvp_scenario_v1"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    storage_dir: Path = Field(
        default_factory=lambda: Path.home() / ".econ_mvp",
        description="Directory holding the saved scenario record.",
    )
    storage_key: str = Field(STORAGE_KEY, min_length=1, description="File stem of the saved scenario.")
    log_level: str = Field("INFO", description="Root log level name.")

    @field_validator("log_level")
    def known_level(cls, v):
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v}")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build the config from ``ECON_MVP_STORAGE_DIR``, ``ECON_MVP_STORAGE_KEY``
        and ``ECON_MVP_LOG_LEVEL``; unset variables keep their defaults."""
        env = os.environ if environ is None else environ
        overrides = {}
        if env.get("ECON_MVP_STORAGE_DIR"):
            overrides["storage_dir"] = Path(env["ECON_MVP_STORAGE_DIR"]).expanduser()
        if env.get("ECON_MVP_STORAGE_KEY"):
            overrides["storage_key"] = env["ECON_MVP_STORAGE_KEY"]
        if env.get("ECON_MVP_LOG_LEVEL"):
            overrides["log_level"] = env["ECON_MVP_LOG_LEVEL"]
        return cls(**overrides)


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger once."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
