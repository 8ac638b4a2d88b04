# src/tml_helper/templates/registry.py

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from ..config import TEMPLATE_SUFFIX, HelperConfig
from ..errors import TemplateNotFoundError, TemplateReadError
from .enumerator import list_candidates
from .origins import Origin, resolve_origin_dir
from .substitution import default_namespace, substitute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateEntry:
    """One selectable template, resolved for the duration of a single catalog build."""

    raw_identifier: str
    display_name: str
    origin: Origin
    absolute_path: Path
    target_extension: str = ""


def split_template_name(filename: str, suffix: str = TEMPLATE_SUFFIX) -> Tuple[str, str]:
    """
    Splits a template file name into (display_name, target_extension).

    Examples:
        ModItem.cs.template -> ("ModItem", ".cs")
        Weapon.template     -> ("Weapon", "")
        .cs.template        -> (".cs", "")
    """
    name = filename[:-len(suffix)] if suffix and filename.endswith(suffix) else filename

    # A dot at position 0 starts a hidden name, not an extension
    last_dot = name.rfind(".")
    if last_dot > 0:
        return name[:last_dot], name[last_dot:]
    return name, ""


def display_name_for(filename: str, suffix: str = TEMPLATE_SUFFIX) -> str:
    """Logical template name: the file name minus the template suffix and target extension."""
    return split_template_name(filename, suffix)[0]


def _sort_key(entry: TemplateEntry):
    # Case-insensitive first so "apple" and "Banana" sort the way a user expects
    return (locale.strxfrm(entry.display_name.casefold()), locale.strxfrm(entry.display_name))


class TemplateRegistry:
    """
    Resolves the template catalog across the workspace, user and bundled origins.

    Nothing is cached: every call re-reads the file system, so templates added
    between calls are picked up.
    """

    def __init__(self, config: HelperConfig):
        self.config = config

    def _collect(self) -> Tuple[List[TemplateEntry], List[TemplateEntry]]:
        """Walks origins in priority order. Returns (admitted, shadowed)."""
        admitted: List[TemplateEntry] = []
        shadowed: List[TemplateEntry] = []
        seen: Dict[str, TemplateEntry] = {}
        suffix = self.config.template_suffix

        for origin in Origin.in_priority_order():
            try:
                directory = resolve_origin_dir(origin, self.config)
            except OSError as e:
                logger.warning(f"Skipping {origin.label} templates: {e}")
                continue
            if directory is None:
                logger.debug(f"Origin '{origin.label}' is absent")
                continue

            for raw_identifier, path in list_candidates(directory, suffix):
                display_name, target_extension = split_template_name(raw_identifier, suffix)
                entry = TemplateEntry(
                    raw_identifier=raw_identifier,
                    display_name=display_name,
                    origin=origin,
                    absolute_path=path,
                    target_extension=target_extension,
                )

                winner = seen.get(display_name)
                if winner is not None:
                    logger.debug(
                        f"Template '{display_name}' from {origin.label} ({path}) "
                        f"is shadowed by {winner.origin.label} ({winner.absolute_path})"
                    )
                    shadowed.append(entry)
                    continue

                seen[display_name] = entry
                admitted.append(entry)

        return admitted, shadowed

    def build_catalog(self) -> List[TemplateEntry]:
        """
        Deduplicated catalog sorted by display name.

        The first origin to define a display name wins. An empty list means no
        templates were found anywhere; it is not an error.
        """
        admitted, _ = self._collect()
        logger.debug(f"Catalog resolved with {len(admitted)} template(s)")
        return sorted(admitted, key=_sort_key)

    def shadowed(self, display_name: Optional[str] = None) -> List[TemplateEntry]:
        """Entries hidden by a higher-priority origin, optionally for one display name."""
        _, shadowed = self._collect()
        if display_name is None:
            return shadowed
        return [e for e in shadowed if e.display_name == display_name]

    def get_template(self, display_name: str) -> TemplateEntry:
        """Fetch a catalog entry by display name."""
        catalog = self.build_catalog()
        for entry in catalog:
            if entry.display_name == display_name:
                return entry

        available = [e.display_name for e in catalog]
        raise TemplateNotFoundError(
            f"Template '{display_name}' not found",
            display_name=display_name,
            available=available,
        )

    def read_template(self, entry: TemplateEntry) -> str:
        """Read a selected template. Failures here are hard errors."""
        try:
            return entry.absolute_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateReadError(
                f"Failed to read template '{entry.display_name}' from {entry.absolute_path}: {e}",
                path=entry.absolute_path,
            ) from e

    def render(self, entry: TemplateEntry, variables: Mapping[str, str]) -> str:
        """Read the entry and substitute variables into it."""
        return substitute(self.read_template(entry), variables)

    def default_namespace(self) -> str:
        """Namespace offered when the caller does not supply one."""
        if self.config.namespace:
            return self.config.namespace
        if self.config.project_root is None:
            return self.config.fallback_namespace
        return default_namespace(self.config.project_root.name, self.config.fallback_namespace)
