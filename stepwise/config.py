"""
Configuration for Stepwise.

Settings come from an optional YAML file, then environment variables
(a `.env` file in the working directory is loaded first):

    STEPWISE_CONFIG          path to the YAML file (default: stepwise.yaml)
    STEPWISE_CONTENT_DIR     directory with chapter .md files
    STEPWISE_CONTENT_PATTERN glob for chapter files (default: *.md)
    STEPWISE_LOG_LEVEL       logging level name (default: INFO)

Without a content directory the chapters bundled with the package are used.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from stepwise.classroom.sources import DEFAULT_PATTERN, ContentSource, DirectorySource, PackageSource


DEFAULT_CONFIG_PATH = Path("stepwise.yaml")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

ENV_OVERRIDES = {
    "STEPWISE_CONTENT_DIR": "content_dir",
    "STEPWISE_CONTENT_PATTERN": "content_pattern",
    "STEPWISE_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    content_dir: Optional[Path] = None   # None -> bundled chapters
    content_pattern: str = DEFAULT_PATTERN
    log_level: str = "INFO"
    page_title: str = "Stepwise"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load the YAML settings file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the top level is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Build Settings from the YAML file and environment.

    Args:
        config_path: Explicit YAML file; must exist when given. Otherwise
            STEPWISE_CONFIG or ./stepwise.yaml is used if present.

    Returns:
        Settings instance
    """
    load_dotenv()

    if config_path is not None:
        data = load_config_file(config_path)
    else:
        path = Path(os.environ.get("STEPWISE_CONFIG", DEFAULT_CONFIG_PATH))
        data = load_config_file(path) if path.exists() else {}

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    return Settings(**data)


def configure_logging(settings: Settings):
    """Set up root logging for entry points (app, scripts)."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def create_content_source(settings: Settings) -> ContentSource:
    """Pick the chapter source described by the settings."""
    if settings.content_dir is not None:
        return DirectorySource(settings.content_dir, pattern=settings.content_pattern)
    return PackageSource()
