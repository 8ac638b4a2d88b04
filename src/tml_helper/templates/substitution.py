# src/tml_helper/templates/substitution.py

import re
from typing import List, Mapping

# ${Key}: case-sensitive, no whitespace or braces inside
PLACEHOLDER_PATTERN = re.compile(r"\$\{([^{}\s]+)\}")

NAMESPACE_STRIP_PATTERN = re.compile(r"[^A-Za-z0-9]")
DEFAULT_NAMESPACE = "MyMod"


def substitute(raw_text: str, variables: Mapping[str, str]) -> str:
    """
    Replace every ${key} whose key is in variables with its value.

    Unknown keys stay as literal text. The template is scanned once, so a
    value containing ${other} is inserted verbatim and never expanded.

    Example:
        >>> substitute("class ${ClassName} : ${Base}", {"ClassName": "Sword"})
        'class Sword : ${Base}'
    """
    if not variables:
        return raw_text

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, raw_text)


def find_placeholders(raw_text: str) -> List[str]:
    """Distinct placeholder keys in order of first appearance."""
    seen = {}
    for match in PLACEHOLDER_PATTERN.finditer(raw_text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def default_namespace(project_name: str, fallback: str = DEFAULT_NAMESPACE) -> str:
    """
    Derive a namespace from a project folder name.

    Drops every character that is not an ASCII letter or digit; an empty
    result falls back to the fixed default.
    """
    return NAMESPACE_STRIP_PATTERN.sub("", project_name or "") or fallback
