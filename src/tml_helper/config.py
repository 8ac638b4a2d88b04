# src/tml_helper/config.py

import logging
import os
from pathlib import Path
from typing import Optional

import typer
import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

APP_NAME = "tml-helper"
PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_DIR = PACKAGE_DIR / "bundled"
TEMPLATE_SUFFIX = ".template"

# Project-level config, looked up under the project root
PROJECT_CONFIG_PATH = Path(".tml-helper") / "config.yml"

STORAGE_DIR_ENV = "TML_HELPER_STORAGE_DIR"
INSTALL_DIR_ENV = "TML_HELPER_INSTALL_DIR"

PROJECT_OVERRIDE_KEYS = {"namespace", "output_dir", "default_extension", "fallback_namespace"}


class HelperConfig(BaseModel):
    """Resolved installation, storage and project paths handed to the registry."""
    install_path: Path
    storage_path: Path
    project_root: Optional[Path] = None

    template_suffix: str = TEMPLATE_SUFFIX
    default_extension: str = ".cs"
    fallback_namespace: str = "MyMod"

    # Project overrides (from .tml-helper/config.yml)
    namespace: Optional[str] = None
    output_dir: Optional[Path] = None

    @field_validator('template_suffix', 'default_extension')
    def validate_dotted(cls, v):
        if v and not v.startswith('.'):
            raise ValueError(f"must start with '.', got '{v}'")
        return v

    @field_validator('fallback_namespace')
    def validate_fallback(cls, v):
        if not v:
            raise ValueError("fallback_namespace cannot be empty")
        return v


def _load_project_overrides(config_file: Path) -> dict:
    """Read the optional YAML overrides file. Missing file means no overrides."""
    if not config_file.is_file():
        return {}

    with open(config_file, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping, got {type(data).__name__}")

    overrides = {}
    for key, value in data.items():
        if key not in PROJECT_OVERRIDE_KEYS:
            logger.warning(f"Ignoring unknown key '{key}' in {config_file}")
            continue
        overrides[key] = value

    logger.debug(f"Loaded project overrides from {config_file}: {sorted(overrides)}")
    return overrides


def load_config(
    project_root: Optional[Path] = None,
    config_file: Optional[Path] = None,
) -> HelperConfig:
    """
    Build the configuration for one invocation.

    Storage and install locations come from the environment (a .env file is
    honoured) and fall back to the per-user app dir and the packaged
    bundled/ directory. Project overrides are read from config_file, or from
    <project>/.tml-helper/config.yml when it exists.
    """
    load_dotenv()

    storage_path = os.getenv(STORAGE_DIR_ENV) or typer.get_app_dir(APP_NAME)
    install_path = os.getenv(INSTALL_DIR_ENV) or BUNDLED_DIR

    if config_file is None and project_root is not None:
        config_file = Path(project_root) / PROJECT_CONFIG_PATH

    overrides = _load_project_overrides(Path(config_file)) if config_file else {}

    if project_root is not None:
        project_root = Path(project_root).resolve()

    output_dir = overrides.get("output_dir")
    if output_dir and project_root is not None and not Path(output_dir).is_absolute():
        # Relative output dirs are relative to the project, not the cwd
        overrides["output_dir"] = project_root / output_dir

    return HelperConfig(
        install_path=Path(install_path),
        storage_path=Path(storage_path),
        project_root=project_root,
        **overrides,
    )
