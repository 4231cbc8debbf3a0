"""Provider management CLI commands."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from dailybrief.cli.context import open_gateway
from dailybrief.config import load_config
from dailybrief.errors import DailyBriefError
from dailybrief.providers.models import ProviderRecord
from dailybrief.providers.probes import needs_credential

providers_app = typer.Typer(
    name="providers",
    help="Manage AI providers.",
    no_args_is_help=True,
)

console = Console()


def _run(coro):
    """Run a gateway coroutine, turning library errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except DailyBriefError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _status(provider: ProviderRecord) -> str:
    if provider.is_connected:
        return "[green]connected[/green]"
    if needs_credential(provider):
        return "[yellow]API key required[/yellow]"
    return "[dim]not connected[/dim]"


@providers_app.command("list")
def list_providers():
    """List configured providers."""
    gateway = open_gateway(load_config())
    providers = _run(gateway.list_providers())

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Model")
    table.add_column("Active")
    for p in providers:
        table.add_row(
            p.id,
            p.display_name,
            p.kind.value,
            _status(p),
            p.selected_model or "[dim]-[/dim]",
            "[green]>[/green]" if p.is_active else "",
        )
    console.print(table)


@providers_app.command()
def add(
    name: str = typer.Argument(..., help="Display name"),
    base_url: str = typer.Argument(..., help="Base URL of the provider's API"),
    api_key: str = typer.Option(None, "--key", "-k", help="Optional API key"),
):
    """Add a custom provider."""
    gateway = open_gateway(load_config())
    provider = _run(gateway.add_provider(name, base_url, credential=api_key))
    console.print(f"[green]>[/green] Added {provider.display_name} ({provider.id})")


@providers_app.command()
def remove(provider_id: str = typer.Argument(..., help="Provider ID")):
    """Remove a custom provider."""
    gateway = open_gateway(load_config())
    _run(gateway.remove_provider(provider_id))
    console.print(f"[green]>[/green] Removed {provider_id}")


@providers_app.command()
def activate(provider_id: str = typer.Argument(..., help="Provider ID")):
    """Use a provider for briefings."""
    gateway = open_gateway(load_config())
    _run(gateway.set_active_provider(provider_id))
    console.print(f"[green]>[/green] {provider_id} is now the active provider")


@providers_app.command("set-key")
def set_key(
    provider_id: str = typer.Argument(..., help="Provider ID"),
    api_key: str = typer.Argument(None, help="API key (prompted if omitted)"),
):
    """Store the API key for a provider."""
    if api_key is None:
        api_key = typer.prompt("API key", hide_input=True)
    if not api_key.strip():
        console.print("[red]API key cannot be empty.[/red]")
        raise typer.Exit(1)

    gateway = open_gateway(load_config())
    _run(gateway.set_credential(provider_id, api_key.strip()))
    console.print("[green]>[/green] API key saved")


@providers_app.command()
def test(provider_id: str = typer.Argument(..., help="Provider ID")):
    """Test the connection to a provider."""
    gateway = open_gateway(load_config())
    result = _run(gateway.test_connection(provider_id))

    if result.success:
        console.print(f"[green]>[/green] {result.message}")
        if result.models:
            console.print(f"  [dim]{len(result.models)} model(s) available[/dim]")
    else:
        console.print(f"[red]x[/red] {result.message}")
        if result.error:
            console.print(f"  [dim]{result.error}[/dim]")
        raise typer.Exit(1)


@providers_app.command()
def models(provider_id: str = typer.Argument(..., help="Provider ID")):
    """List a provider's models, fetching them if needed."""
    gateway = open_gateway(load_config())
    available = _run(gateway.get_available_models(provider_id))
    selected = _run(gateway.get_provider(provider_id)).selected_model

    if not available:
        console.print("[dim]No models available.[/dim]")
        return
    for m in available:
        marker = "[green]>[/green]" if m.id == selected else " "
        detail = f"  [dim]{m.description}[/dim]" if m.description else ""
        console.print(f"{marker} [cyan]{m.id}[/cyan]{detail}")


@providers_app.command("select-model")
def select_model(
    provider_id: str = typer.Argument(..., help="Provider ID"),
    model_id: str = typer.Argument(..., help="Model ID"),
):
    """Choose the model a provider uses."""
    gateway = open_gateway(load_config())
    _run(gateway.set_selected_model(provider_id, model_id))
    console.print(f"[green]>[/green] {provider_id} will use {model_id}")


@providers_app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Discard all provider settings and restore the defaults."""
    if not yes:
        typer.confirm("Reset all providers to defaults?", abort=True)
    gateway = open_gateway(load_config())
    gateway.reset()
    console.print("[green]>[/green] Providers reset to defaults")
