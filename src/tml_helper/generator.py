# src/tml_helper/generator.py

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .errors import OutputExistsError, TemplateWriteError
from .templates.registry import TemplateEntry, TemplateRegistry
from .templates.substitution import find_placeholders, substitute
from .validators import validate_class_name

logger = logging.getLogger(__name__)

CLASS_NAME_KEY = "ClassName"
NAMESPACE_KEY = "Namespace"


@dataclass
class GenerationResult:
    """Outcome of one generate call."""

    entry: TemplateEntry
    output_path: Path
    variables: Dict[str, str]
    unresolved: List[str] = field(default_factory=list)


def build_variables(
    class_name: str,
    namespace: str,
    extra: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """ClassName and Namespace always win over extras with the same key."""
    variables: Dict[str, str] = dict(extra or {})
    variables[CLASS_NAME_KEY] = class_name
    variables[NAMESPACE_KEY] = namespace
    return variables


def output_path_for(
    entry: TemplateEntry,
    class_name: str,
    registry: TemplateRegistry,
    output: Optional[Path] = None,
) -> Path:
    """
    Where the generated file goes.

    An explicit output path wins. Otherwise <output_dir>/<ClassName><ext>,
    where output_dir is the configured one, then the project root, then the cwd.
    """
    if output is not None:
        return Path(output)

    config = registry.config
    extension = entry.target_extension or config.default_extension
    base_dir = config.output_dir or config.project_root or Path.cwd()
    return Path(base_dir) / f"{class_name}{extension}"


def write_output(path: Path, text: str, force: bool = False) -> Path:
    """
    Write the generated text in one step (temp file + rename).

    Raises:
        OutputExistsError if path exists and force is False
        TemplateWriteError on any I/O failure
    """
    if path.exists() and not force:
        raise OutputExistsError(
            f"Output file already exists: {path}. Use --force to overwrite.",
            path=path,
        )

    temp_file = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_file, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        temp_file.replace(path)
    except OSError as e:
        raise TemplateWriteError(f"Failed to write {path}: {e}", path=path) from e
    finally:
        if temp_file.exists():
            temp_file.unlink()

    logger.debug(f"Wrote {len(text)} characters to {path}")
    return path


def generate_from_template(
    registry: TemplateRegistry,
    display_name: str,
    class_name: str,
    namespace: Optional[str] = None,
    output: Optional[Path] = None,
    extra_variables: Optional[Mapping[str, str]] = None,
    force: bool = False,
) -> GenerationResult:
    """Resolve a template by name, fill in its placeholders and write the result."""
    class_name = validate_class_name(class_name)
    namespace = namespace or registry.default_namespace()

    entry = registry.get_template(display_name)
    variables = build_variables(class_name, namespace, extra_variables)
    raw_text = registry.read_template(entry)
    text = substitute(raw_text, variables)

    target = output_path_for(entry, class_name, registry, output)
    write_output(target, text, force=force)

    unresolved = [key for key in find_placeholders(raw_text) if key not in variables]
    if unresolved:
        logger.debug(
            f"Template '{entry.display_name}' left placeholders unresolved: {', '.join(unresolved)}"
        )

    logger.info(f"Generated {target} from {entry.display_name} ({entry.origin.label})")
    return GenerationResult(
        entry=entry,
        output_path=target,
        variables=variables,
        unresolved=unresolved,
    )
