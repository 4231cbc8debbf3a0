"""Saved-interest CLI commands."""

import typer
from rich.console import Console

from dailybrief.cli.context import open_preferences
from dailybrief.config import load_config

interests_app = typer.Typer(
    name="interests",
    help="Manage the topics your briefing covers.",
    no_args_is_help=True,
)

console = Console()


@interests_app.command("list")
def list_interests():
    """Show saved interests."""
    interests = open_preferences(load_config()).get_interests()
    if not interests:
        console.print("[dim]No interests saved.[/dim]")
        return
    for i, interest in enumerate(interests, 1):
        console.print(f"  [cyan]{i}[/cyan]. {interest}")


@interests_app.command()
def add(topic: str = typer.Argument(..., help="Topic to follow")):
    """Follow a topic."""
    topic = topic.strip()
    if not topic:
        console.print("[red]Topic cannot be empty.[/red]")
        raise typer.Exit(1)

    if open_preferences(load_config()).add_interest(topic):
        console.print(f"[green]>[/green] Added {topic}")
    else:
        console.print(f"[yellow]{topic} is already in your interests[/yellow]")


@interests_app.command()
def remove(topic: str = typer.Argument(..., help="Topic to drop")):
    """Stop following a topic."""
    if open_preferences(load_config()).remove_interest(topic):
        console.print(f"[green]>[/green] Removed {topic}")
    else:
        console.print(f"[red]{topic} is not in your interests[/red]")
        raise typer.Exit(1)
