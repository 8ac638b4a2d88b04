# src/tml_helper/templates/origins.py

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..config import HelperConfig

logger = logging.getLogger(__name__)

TEMPLATES_SUBDIR = "templates"
HIDDEN_WORKSPACE_DIR = ".tml-helper"


class Origin(Enum):
    """
    The three ranked sources of template files.

    Member order is resolution order: workspace overrides user overrides bundled.
    """
    WORKSPACE = (0, "workspace")
    USER = (1, "user")
    BUNDLED = (2, "bundled")

    def __init__(self, priority: int, label: str):
        self.priority = priority
        self.label = label

    @classmethod
    def in_priority_order(cls) -> List["Origin"]:
        return sorted(cls, key=lambda o: o.priority)


def workspace_candidate_dirs(project_root: Path) -> List[Path]:
    """Workspace locations in lookup order: hidden convention dir first, then plain templates/."""
    return [
        project_root / HIDDEN_WORKSPACE_DIR / TEMPLATES_SUBDIR,
        project_root / TEMPLATES_SUBDIR,
    ]


def workspace_templates_dir(project_root: Optional[Path]) -> Optional[Path]:
    """Returns the first existing workspace templates directory, or None if the origin is absent."""
    if project_root is None:
        return None

    for candidate in workspace_candidate_dirs(project_root):
        if candidate.is_dir():
            return candidate
    return None


def ensure_workspace_templates_dir(project_root: Optional[Path]) -> Optional[Path]:
    """
    Returns the workspace templates directory, creating the hidden one if
    neither candidate exists yet.

    Returns None when there is no project root to create it under.
    """
    if project_root is None:
        return None

    existing = workspace_templates_dir(project_root)
    if existing is not None:
        return existing

    templates_path = workspace_candidate_dirs(project_root)[0]
    templates_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created workspace templates directory: {templates_path}")
    return templates_path


def user_templates_dir(storage_path: Path) -> Path:
    """Returns the per-user templates directory, creating it on first use."""
    templates_path = storage_path / TEMPLATES_SUBDIR
    if not templates_path.exists():
        templates_path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created user templates directory: {templates_path}")
    return templates_path


def bundled_templates_dir(install_path: Path) -> Optional[Path]:
    """Returns the bundled templates directory, or None if the install is missing it."""
    templates_path = install_path / TEMPLATES_SUBDIR
    if not templates_path.is_dir():
        logger.warning(f"Bundled templates directory not found: {templates_path}")
        return None
    return templates_path


def resolve_origin_dir(origin: Origin, config: HelperConfig) -> Optional[Path]:
    """Applies the origin's location policy. None means the origin is absent."""
    if origin is Origin.WORKSPACE:
        return workspace_templates_dir(config.project_root)
    if origin is Origin.USER:
        return user_templates_dir(config.storage_path)
    if origin is Origin.BUNDLED:
        return bundled_templates_dir(config.install_path)
    raise ValueError(f"Unknown origin: {origin!r}")
