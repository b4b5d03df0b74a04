"""
Parser configuration domain model.

This module defines the ParserConfig entity containing the settings that
control where the plugin keeps its database and how it logs.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DB_PATH = Path("/opt/usr/dbspace/.notification_parser.db")
DEFAULT_MANIFEST_DIR = Path("/usr/share/packages")


class ParserConfig(BaseModel):
    """
    Domain model for plugin configuration.

    Config file settings win over defaults; environment overrides win over both.
    """

    model_config = ConfigDict(extra="ignore")

    db_path: Path = Field(DEFAULT_DB_PATH, description="SQLite database holding notification settings")
    manifest_dir: Path = Field(
        DEFAULT_MANIFEST_DIR,
        description="Directory of installed package manifests, used to enumerate app ids on uninstall"
    )
    log_level: str = Field("INFO", description="Console log level name")
    log_file: Optional[Path] = Field(None, description="Optional log file (always written at DEBUG)")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)
