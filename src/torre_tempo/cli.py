"""Torre Tempo operations CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from torre_tempo import __version__
from torre_tempo.config import get_settings
from torre_tempo.core.logging import configure_logging


console = Console()

app = typer.Typer(
    name="torre-tempo",
    help="Run the Torre Tempo API and its maintenance tasks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Torre Tempo CLI."""
    if version:
        console.print(f"[bold cyan]torre-tempo[/bold cyan] version {__version__}")
        raise typer.Exit()


@app.command(name="migrate-scopes")
def migrate_scopes(
    db_path: Annotated[
        Path | None,
        typer.Option(
            "--db-path",
            help="SQLite store to migrate. Defaults to DB_PATH or data/torre-tempo.sqlite.",
        ),
    ] = None,
) -> None:
    """Backfill location and department scopes onto a legacy store.

    Safe to re-run: a second run changes nothing.
    """
    from torre_tempo.modules.scopes.backfill import (
        ScopeBackfillMigrator,
        ScopeMigrationError,
        open_store,
    )

    settings = get_settings()
    configure_logging(settings)
    path = db_path or settings.db_path

    try:
        engine = open_store(path)
    except ScopeMigrationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    try:
        report = ScopeBackfillMigrator(engine).run()
    except ScopeMigrationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None
    finally:
        engine.dispose()

    table = Table(title=f"Scope backfill: {path}")
    table.add_column("Step")
    table.add_column("Result", justify="right")
    table.add_row("Default location", report.defaults.location)
    table.add_row("Default department", report.defaults.department)
    table.add_row("Columns added", ", ".join(report.columns_added) or "none")
    table.add_row("user_scopes created", "yes" if report.scope_table_created else "no")
    table.add_row("Users backfilled", str(report.users_backfilled))
    table.add_row("Scope rows inserted", str(report.scopes_inserted))
    for rota_table, filled in report.rota_values_filled.items():
        table.add_row(f"{rota_table} values filled", str(filled))
    console.print(table)

    if not report.changed:
        console.print("[yellow]Nothing to change.[/yellow]")
    console.print("[green]✓[/green] Migration complete.")


@app.command(name="serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address."),
    port: int = typer.Option(8000, "--port", help="Bind port."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "torre_tempo.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
