"""CLI entry point."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="personspine",
    help="Person record enrichment service",
    no_args_is_help=True,
)
console = Console()


@app.command()
def version() -> None:
    """Show version."""
    from personspine import __version__

    console.print(f"personspine {__version__}")


@app.command()
def info() -> None:
    """Show system information and the active configuration."""
    import sys

    from personspine import __version__
    from personspine.core.config import get_settings

    settings = get_settings()

    console.print(f"[bold]PersonSpine[/bold] {__version__}")
    console.print(f"Python {sys.version}")

    table = Table(title="Backends")
    table.add_column("Concern", style="cyan")
    table.add_column("Backend")
    table.add_column("Target", style="dim")
    table.add_row("storage", settings.storage_backend, settings.database_url or "-")
    table.add_row("cache", settings.cache_backend, settings.redis_url or "-")
    table.add_row("queue", settings.queue_backend, settings.kafka_bootstrap_servers)
    table.add_row("topic", settings.kafka_topic, f"dead letters -> {settings.dead_letter_topic}")
    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, help="Bind port (default from settings)"),
) -> None:
    """Run the HTTP API and the queue consumer."""
    import uvicorn

    from personspine.api.fastapi import create_app
    from personspine.core.config import get_settings
    from personspine.core.logging import configure_logging
    from personspine.core.runtime import Runtime

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    runtime = Runtime.from_settings(settings)
    api = create_app(runtime.service, runtime=runtime)
    uvicorn.run(
        api,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command()
def enrich(
    name: str = typer.Argument(..., help="First name to look up"),
    surname: str = typer.Option("-", help="Surname for the record"),
) -> None:
    """Look up age, gender and nationality for NAME without storing it."""
    from personspine.core.config import get_settings
    from personspine.core.exceptions import AttributeLookupError
    from personspine.core.logging import configure_logging
    from personspine.core.runtime import Runtime
    from personspine.models.person import PersonInput

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    async def _enrich():
        async with Runtime.from_settings(settings) as runtime:
            return await runtime.service.enrich(PersonInput(name=name, surname=surname))

    try:
        person = asyncio.run(_enrich())
    except AttributeLookupError as e:
        console.print(f"[red]Enrichment failed:[/red] {e}")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Enrichment for {person.name}")
    table.add_column("Attribute", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("age", str(person.age))
    table.add_row("gender", str(person.gender))
    table.add_row("nationality", str(person.nationality))
    console.print(table)


if __name__ == "__main__":
    app()
