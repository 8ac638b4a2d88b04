# src/tml_helper/cli.py
import typer
from pathlib import Path
from typing import List, Optional
from rich.console import Console

from .cli_plugins.template import template_app, get_registry, catalog_table, print_no_templates_hint
from .errors import TemplateError, InvalidInputError
from .generator import generate_from_template
from .logging_utils import HelperLogger, setup_logging
from .templates.registry import TemplateEntry
from .validators import validate_class_name, parse_variable_overrides

console = Console()
app = typer.Typer(help="tml-helper CLI")
app.add_typer(template_app, name="template")


def version_callback(value: bool):
    if value:
        from tml_helper import __version__
        console.print(f"tml-helper version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """tml-helper - Generate tModLoader classes from layered templates."""
    setup_logging(verbose)


def _select_template(catalog: List[TemplateEntry]) -> Optional[TemplateEntry]:
    """Numbered pick list. Returns None when the user cancels with an empty answer."""
    console.print(catalog_table(catalog, numbered=True))
    while True:
        choice = typer.prompt("Select a template (number or name, empty to cancel)", default="", show_default=False).strip()
        if not choice:
            return None
        if choice.isascii() and choice.isdecimal() and 1 <= int(choice) <= len(catalog):
            return catalog[int(choice) - 1]
        match = next((e for e in catalog if e.display_name == choice), None)
        if match is not None:
            return match
        console.print(f"[red]'{choice}' is not in the list[/red]")


def _prompt_class_name() -> str:
    while True:
        value = typer.prompt("Enter the class name (e.g., MySword)")
        try:
            return validate_class_name(value)
        except InvalidInputError as e:
            console.print(f"[red]{e}[/red]")


# ======================================================================================
# COMMAND: tml-helper generate
# ======================================================================================
@app.command()
def generate(
    name: Optional[str] = typer.Argument(None, help="Template name (prompted when omitted)"),
    class_name: Optional[str] = typer.Argument(None, help="Class name (prompted when omitted)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace (defaults to the project folder name)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Project root (defaults to cwd)"),
    variables: Optional[List[str]] = typer.Option(None, "--var", help="Extra KEY=VALUE placeholder values"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing output file"),
):
    """Generate a source file from a template."""
    log = HelperLogger(out=console)
    registry = get_registry(project)

    try:
        extra = parse_variable_overrides(variables or [])
    except InvalidInputError as e:
        log.error(str(e))
        raise typer.Exit(code=1)

    catalog = registry.build_catalog()
    if not catalog:
        print_no_templates_hint()
        raise typer.Exit(code=1)

    interactive = name is None or class_name is None
    if name is None:
        entry = _select_template(catalog)
        if entry is None:
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(code=1)
        name = entry.display_name
    elif all(e.display_name != name for e in catalog):
        log.error(f"Template '{name}' not found")
        console.print(f"Available templates: {', '.join(e.display_name for e in catalog)}")
        raise typer.Exit(code=1)

    if class_name is None:
        class_name = _prompt_class_name()

    if namespace is None and interactive:
        namespace = typer.prompt("Enter the namespace", default=registry.default_namespace())

    try:
        result = generate_from_template(
            registry,
            name,
            class_name,
            namespace=namespace,
            output=output,
            extra_variables=extra,
            force=force,
        )
    except TemplateError as e:
        log.error(str(e))
        available = getattr(e, "available", None)
        if available:
            console.print(f"Available templates: {', '.join(available)}")
        raise typer.Exit(code=1)

    log.info(f"{result.entry.raw_identifier} ({result.entry.origin.label})", prefix="TEMPLATE")
    for key in result.unresolved:
        log.warning(f"Placeholder ${{{key}}} was left unresolved")

    log.success(
        f"Created {result.output_path.name} from {result.entry.display_name} template",
        detail=str(result.output_path),
    )


# ======================================================================================
# ENTRYPOINT
# ======================================================================================
if __name__ == "__main__":
    app()
