"""
Template resolution package for tml-helper.

Provides:
- Origin: the ranked template sources (workspace, user, bundled)
- TemplateRegistry: precedence-resolved catalog, lookup and rendering
- substitute: single-pass ${Key} replacement
- default_namespace: namespace derived from a project folder name
"""

from .enumerator import list_candidates
from .origins import (
    Origin,
    ensure_workspace_templates_dir,
    resolve_origin_dir,
    user_templates_dir,
)
from .registry import TemplateEntry, TemplateRegistry, display_name_for, split_template_name
from .substitution import default_namespace, find_placeholders, substitute

__all__ = [
    "Origin",
    "TemplateEntry",
    "TemplateRegistry",
    "default_namespace",
    "display_name_for",
    "ensure_workspace_templates_dir",
    "find_placeholders",
    "list_candidates",
    "resolve_origin_dir",
    "split_template_name",
    "substitute",
    "user_templates_dir",
]
