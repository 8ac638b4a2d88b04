from pathlib import Path
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tml_helper.config import load_config
from tml_helper.errors import TemplateError
from tml_helper.templates.origins import (
    Origin,
    ensure_workspace_templates_dir,
    resolve_origin_dir,
    user_templates_dir,
    workspace_candidate_dirs,
)
from tml_helper.templates.registry import TemplateEntry, TemplateRegistry
from tml_helper.templates.substitution import find_placeholders

console = Console()
template_app = typer.Typer(help="Inspect and manage template folders")


def get_registry(project: Optional[Path], config_file: Optional[Path] = None) -> TemplateRegistry:
    """Load config for the project (cwd by default) and build a registry, exiting on bad config."""
    project_root = project if project is not None else Path.cwd()
    try:
        config = load_config(project_root=project_root, config_file=config_file)
    except (ValidationError, ValueError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]✗ Failed to load config: {e}[/red]")
        raise typer.Exit(code=1)
    return TemplateRegistry(config)


def catalog_table(catalog: List[TemplateEntry], numbered: bool = False) -> Table:
    """Rich table of catalog entries: display name, file and origin."""
    table = Table(show_header=True, header_style="bold")
    table.title = "AVAILABLE TEMPLATES"
    if numbered:
        table.add_column("#", style="dim", justify="right")
    table.add_column("Template", style="cyan", no_wrap=True)
    table.add_column("File", style="white")
    table.add_column("Origin", style="magenta")
    for index, entry in enumerate(catalog, start=1):
        row = [entry.display_name, entry.raw_identifier, entry.origin.label]
        if numbered:
            row.insert(0, str(index))
        table.add_row(*row)
    return table


def print_no_templates_hint():
    console.print("[yellow][WARN] No templates found.[/yellow]")
    console.print("Run `tml-helper template init` to create a workspace templates folder")


# ======================================================================================
# COMMAND: list
# ======================================================================================
@template_app.command("list")
def list_templates(
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Project root (defaults to cwd)"),
):
    """List all resolved templates with the origin each one comes from."""
    registry = get_registry(project)
    catalog = registry.build_catalog()

    if not catalog:
        print_no_templates_hint()
        raise typer.Exit(code=0)

    console.print(catalog_table(catalog))
    console.print("\nTip: Run `tml-helper template info <name>` for details")


# ======================================================================================
# COMMAND: info
# ======================================================================================
@template_app.command("info")
def template_info(
    name: str = typer.Argument(..., help="Template name to inspect"),
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Project root (defaults to cwd)"),
):
    """Show where a template resolves from, its placeholders and what it shadows."""
    registry = get_registry(project)

    try:
        entry = registry.get_template(name)
        raw_text = registry.read_template(entry)
    except TemplateError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("Run `tml-helper template list` to see available templates")
        raise typer.Exit(code=1)

    console.print(f"\n[bold]TEMPLATE:[/bold] {entry.display_name}")
    console.print("─" * 50)
    console.print(f"File: {entry.raw_identifier}")
    console.print(f"Origin: {entry.origin.label}")
    console.print(f"Path: {entry.absolute_path}")
    console.print(f"Output extension: {entry.target_extension or registry.config.default_extension}")

    console.print("\n[bold]PLACEHOLDERS[/bold]")
    placeholders = find_placeholders(raw_text)
    if not placeholders:
        console.print("[dim]none[/dim]")
    for key in placeholders:
        console.print(f"• ${{{key}}}", markup=False)

    shadowed = registry.shadowed(entry.display_name)
    if shadowed:
        console.print("\n[bold]SHADOWED[/bold]")
        for hidden in shadowed:
            console.print(f"• {hidden.origin.label}: {hidden.absolute_path}", markup=False)


# ======================================================================================
# COMMAND: init
# ======================================================================================
@template_app.command("init")
def init_templates(
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Project root (defaults to cwd)"),
    user: bool = typer.Option(False, "--user", help="Use the per-user templates folder instead"),
):
    """Create (if needed) and print the templates folder to put templates in."""
    registry = get_registry(project)
    config = registry.config

    try:
        existing = None if user else resolve_origin_dir(Origin.WORKSPACE, config)
        path = None if user else ensure_workspace_templates_dir(config.project_root)
        if path is None:
            path = user_templates_dir(config.storage_path)
            console.print(f"[green][OK] User templates folder: {path}[/green]")
        elif existing is not None:
            console.print(f"[green][OK] Workspace templates folder: {path}[/green]")
        else:
            console.print(f"[green][OK] Created workspace templates folder: {path}[/green]")
    except OSError as e:
        console.print(f"[red]✗ Failed to create templates folder: {e}[/red]")
        raise typer.Exit(code=1)


# ======================================================================================
# COMMAND: paths
# ======================================================================================
@template_app.command("paths")
def show_paths(
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Project root (defaults to cwd)"),
):
    """Show the template folder of each origin, in resolution order."""
    registry = get_registry(project)
    config = registry.config

    table = Table(show_header=True, header_style="bold")
    table.title = "TEMPLATE ORIGINS"
    table.add_column("Priority", style="dim", justify="right")
    table.add_column("Origin", style="magenta")
    table.add_column("Path", style="white")
    table.add_column("Status", style="green")

    for origin in Origin.in_priority_order():
        try:
            path = resolve_origin_dir(origin, config)
        except OSError as e:
            table.add_row(str(origin.priority), origin.label, "-", f"[red]error: {escape(str(e))}[/red]")
            continue
        if path is not None:
            table.add_row(str(origin.priority), origin.label, str(path), "present")
        elif origin is Origin.WORKSPACE and config.project_root is not None:
            candidates = " | ".join(str(p) for p in workspace_candidate_dirs(config.project_root))
            table.add_row(str(origin.priority), origin.label, candidates, "[dim]absent[/dim]")
        else:
            table.add_row(str(origin.priority), origin.label, "-", "[dim]absent[/dim]")

    console.print(table)
