"""
Configuration loader — scaffolder settings from the environment.

Settings are read once at startup. Anything not set in the environment
falls back to the packaged defaults, so a plain ``rbxts-init init``
needs no configuration at all.

Environment variables:
    RBXTS_INIT_TEMPLATES_DIR     directory holding the project templates
    RBXTS_INIT_COMPILER_VERSION  compiler version pinned in compiler-types
    RBXTS_INIT_BUILD_COMMAND     command run by the final build step
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rbxts_init.core.errors import ConfigError

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_TEMPLATES_DIR = PACKAGE_ROOT / "templates"
DEFAULT_COMPILER_VERSION = "2.1.0"
DEFAULT_PACKAGE_SCOPE = "@rbxts"

_ENV_PREFIX = "RBXTS_INIT_"


class ScaffoldSettings(BaseModel):
    """Settings that are not per-project decisions."""

    model_config = ConfigDict(frozen=True)

    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    compiler_version: str = Field(default=DEFAULT_COMPILER_VERSION, min_length=1)
    package_scope: str = DEFAULT_PACKAGE_SCOPE
    build_command: str | None = None

    def template_dir(self, template_name: str) -> Path:
        """Directory of one project template (game, model, ...)."""
        return self.templates_dir / template_name

    def config_template(self, file_name: str) -> Path:
        """A shared config template (.gitignore, .eslintrc.yml, ...)."""
        return self.templates_dir / file_name


def load_settings(environ: Mapping[str, str] | None = None) -> ScaffoldSettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read from (default: ``os.environ``).

    Raises:
        ConfigError: If a value is invalid or the templates dir is missing.
    """
    env = os.environ if environ is None else environ

    raw: dict[str, str] = {}
    for field in ("templates_dir", "compiler_version", "build_command"):
        value = env.get(_ENV_PREFIX + field.upper())
        if value:
            raw[field] = value

    try:
        settings = ScaffoldSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    if not settings.templates_dir.is_dir():
        raise ConfigError(f"Templates directory not found: {settings.templates_dir}")

    logger.debug("Loaded settings: %s", settings.model_dump(mode="json"))
    return settings
