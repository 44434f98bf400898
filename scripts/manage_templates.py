#!/usr/bin/env python3
"""
Manage the resume template table.

Commands:
    seed - Write the built-in templates into the database
    list - List templates served by the API (database, else built-in defaults)
    show - Show one template's layout and style

Examples:\n

    manage_templates.py seed

    manage_templates.py seed --overwrite

    manage_templates.py show modern-minimal
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from vitae.contexts.drafting.templates import (
    get_resume_templates,
    get_template_by_id,
    seed_default_templates,
)
from vitae.contexts.drafting.logger import setup_drafting_logger
from vitae.contexts.persistence.store import PersistenceError, ResumeStore

app = typer.Typer(
    help="Manage resume templates",
    add_completion=False,
    invoke_without_command=True,
)

DbOption = Annotated[
    Optional[Path], typer.Option("--db", help="SQLite database path (default: VITAE_DB_PATH)")
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store(db_path: Optional[Path]) -> ResumeStore:
    try:
        return ResumeStore(db_path)
    except PersistenceError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("seed")
def seed_command(
    overwrite: Annotated[bool, typer.Option(help="Replace templates that already exist")] = False,
    db_path: DbOption = None,
):
    """Write the built-in templates into the database."""
    setup_drafting_logger(console_level="WARNING")
    store = _open_store(db_path)
    written = seed_default_templates(store, overwrite=overwrite)

    for template_id in written:
        typer.secho(f"✓ {template_id}", fg=typer.colors.GREEN)
    if not written:
        typer.echo("All templates already present (use --overwrite to replace)")


@app.command("list")
def list_command(db_path: DbOption = None):
    """List templates (database first, built-in defaults as fallback)."""
    store = _open_store(db_path)
    for template in get_resume_templates(store):
        premium = " [premium]" if template.is_premium else ""
        typer.echo(f"{template.id:<24} {template.name}{premium}")
        typer.echo(f"{'':<24} {template.description}")


@app.command("show")
def show_command(
    template_id: Annotated[str, typer.Argument(help="Template id (e.g., classic-professional)")],
    db_path: DbOption = None,
):
    """Show one template's layout, colors and section order."""
    template = get_template_by_id(template_id, _open_store(db_path))
    if template is None:
        typer.secho(f"Error: template '{template_id}' not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{template.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Layout:   {template.layout}")
    for key, value in template.style.get("colors", {}).items():
        typer.echo(f"  {key + ':':<9} {value}")
    typer.echo(f"  Sections: {' → '.join(template.visible_sections())}")


if __name__ == "__main__":
    app()
