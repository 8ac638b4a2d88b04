# src/tml_helper/validators.py

import logging
import re
from typing import Dict, Iterable

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def validate_class_name(value: str) -> str:
    """
    Check a class name entered by the user.

    Returns the trimmed name.

    Raises:
        InvalidInputError if the name is empty or not a valid identifier
    """
    if not value or not value.strip():
        raise InvalidInputError("Class name cannot be empty", value=value)

    name = value.strip()
    if not IDENTIFIER_PATTERN.match(name):
        raise InvalidInputError(
            f"Invalid class name '{name}'. Must start with a letter or underscore.",
            value=value,
        )
    return name


def parse_variable_overrides(pairs: Iterable[str]) -> Dict[str, str]:
    """
    Parse KEY=VALUE pairs given on the command line.

    Keys must be identifiers. The value may be empty and may contain '='.
    Later pairs win over earlier ones.
    """
    variables: Dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise InvalidInputError(f"Expected KEY=VALUE, got '{pair}'", value=pair)

        key, value = pair.split("=", 1)
        key = key.strip()
        if not IDENTIFIER_PATTERN.match(key):
            raise InvalidInputError(f"Invalid variable name '{key}'", value=pair)

        if key in variables:
            logger.debug(f"Variable '{key}' given more than once; using the last value")
        variables[key] = value
    return variables
