# src/tml_helper/templates/enumerator.py

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import TEMPLATE_SUFFIX

logger = logging.getLogger(__name__)

Candidate = Tuple[str, Path]


def list_candidates(directory: Optional[Path], suffix: str = TEMPLATE_SUFFIX) -> List[Candidate]:
    """
    Lists template files in one origin directory.

    Returns (raw_identifier, absolute_path) pairs sorted by file name. A missing
    directory or a listing failure yields an empty list so that one broken
    origin cannot stop the others from contributing.
    """
    if directory is None:
        return []

    try:
        if not directory.exists():
            return []
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"Failed to list templates in {directory}: {e}")
        return []

    candidates: List[Candidate] = []
    for entry in entries:
        # A bare ".template" has no logical name
        if not entry.name.endswith(suffix) or entry.name == suffix:
            continue
        try:
            if not entry.is_file():
                logger.debug(f"Skipping non-file entry: {entry}")
                continue
        except OSError as e:
            logger.warning(f"Failed to stat {entry}: {e}")
            continue
        candidates.append((entry.name, entry.resolve()))

    logger.debug(f"Found {len(candidates)} template(s) in {directory}")
    return candidates
