"""CLI commands for dailybrief."""

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from dailybrief import __version__
from dailybrief.cli.context import open_gateway, open_preferences
from dailybrief.cli.interests import interests_app
from dailybrief.cli.providers import providers_app
from dailybrief.config import load_config
from dailybrief.errors import DailyBriefError
from dailybrief.logging_utils import setup_logging

if TYPE_CHECKING:
    from dailybrief.briefing import BriefingGenerator
    from dailybrief.config.schema import Config
    from dailybrief.providers.gateway import ProviderGateway

app = typer.Typer(
    name="dailybrief",
    help="dailybrief - AI news briefings with satirical tweets",
    no_args_is_help=True,
)
app.add_typer(providers_app, name="providers")
app.add_typer(interests_app, name="interests")

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"dailybrief v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """dailybrief - Personal AI news briefings."""
    setup_logging(load_config().logging)


# ============================================================================
# Generator Factory
# ============================================================================


async def build_generator(config: "Config", gateway: "ProviderGateway") -> "BriefingGenerator":
    """Create a BriefingGenerator backed by the active provider."""
    from dailybrief.backends import create_backend
    from dailybrief.briefing import BriefingGenerator

    provider = await gateway.active_provider()
    if provider is None:
        raise DailyBriefError(
            "No active provider. Run `dailybrief providers activate <id>` first."
        )

    backend = create_backend(provider, timeout=config.generation.timeout)
    return BriefingGenerator(
        backend,
        max_tokens=config.generation.max_tokens,
        temperature=config.generation.temperature,
    )


def _print_briefing(result) -> None:
    console.print(f"\n[bold cyan]{result.title}[/bold cyan]\n")
    console.print(result.summary)
    console.print("\n[bold]Satirical Tweets[/bold]")
    for tweet in result.tweets:
        console.print(f"  [magenta]>[/magenta] {tweet}")
    console.print(f"\n[dim]Sources: {', '.join(result.sources)}[/dim]")


def _export(results, kind: str, directory: Path, filename: str) -> None:
    """Write results as Markdown; a lone result is exported on its own."""
    from dailybrief.briefing.markdown import (
        briefing_filename,
        export_multiple_briefings,
        export_single_briefing,
        to_exportable,
        write_markdown,
    )

    briefings = [to_exportable(r, kind) for r in results]
    if len(briefings) == 1:
        content = export_single_briefing(briefings[0])
        filename = briefing_filename(briefings[0])
    else:
        content = export_multiple_briefings(briefings)
    path = write_markdown(content, directory, filename)
    console.print(f"\n[green]>[/green] Exported to {path}")


# ============================================================================
# Briefing Commands
# ============================================================================


@app.command()
def brief(
    topics: list[str] = typer.Argument(None, help="Topics (defaults to saved interests)"),
    export: Path = typer.Option(None, "--export", "-e", help="Write Markdown to this directory"),
):
    """Generate a briefing for your interests."""
    config = load_config()

    interests = topics or open_preferences(config).get_interests()
    if not interests:
        console.print("[red]Error: No interests provided.[/red]")
        console.print("Run [cyan]dailybrief interests add <topic>[/cyan] or pass topics.")
        raise typer.Exit(1)

    async def run():
        generator = await build_generator(config, open_gateway(config))
        return await generator.generate_briefing(interests)

    try:
        with console.status("Generating briefing..."):
            results = asyncio.run(run())
    except DailyBriefError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for result in results:
        _print_briefing(result)
    if export:
        _export(results, "personal", export, "daily-briefings")


@app.command()
def trending(
    export: Path = typer.Option(None, "--export", "-e", help="Write Markdown to this directory"),
):
    """Generate briefings for trending topics."""
    config = load_config()

    async def run():
        generator = await build_generator(config, open_gateway(config))
        return await generator.generate_trending_briefing(config.generation.trending_count)

    try:
        with console.status("Generating trending briefing..."):
            results = asyncio.run(run())
    except DailyBriefError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for result in results:
        _print_briefing(result)
    if export:
        _export(results, "trending", export, "trending-topics")


# ============================================================================
# Status Command
# ============================================================================


@app.command()
def status():
    """Show status and configuration."""
    from dailybrief.config import get_config_path

    config_path = get_config_path()
    config = load_config()
    storage = config.storage.path

    console.print("dailybrief Status\n")

    console.print(
        f"Config:    {config_path} "
        f"{'[green]>[/green]' if config_path.exists() else '[red]x[/red]'}"
    )
    console.print(
        f"Storage:   {storage} "
        f"{'[green]>[/green]' if storage.exists() else '[red]x[/red]'}"
    )

    provider = asyncio.run(open_gateway(config).active_provider())
    if provider:
        console.print(f"Provider:  [cyan]{provider.display_name}[/cyan] ({provider.id})")
        console.print(f"Model:     {provider.selected_model or '[dim]not set[/dim]'}")
        console.print(
            f"Connected: {'[green]yes[/green]' if provider.is_connected else '[dim]no[/dim]'}"
        )
    else:
        console.print("Provider:  [dim]none active[/dim]")

    interests = open_preferences(config).get_interests()
    console.print(f"Interests: {', '.join(interests) if interests else '[dim]none[/dim]'}")

    if not provider:
        console.print(
            "\n[yellow]Run [cyan]dailybrief providers activate <id>[/cyan] to pick a provider.[/yellow]"
        )


if __name__ == "__main__":
    app()
