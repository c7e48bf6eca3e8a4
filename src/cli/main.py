"""Distributor gateway CLI.

Usage:
    distributor serve           Run the gateway API under uvicorn
    distributor check-config    Validate the Canada Tire environment config
    distributor routes          Show the action -> RESTlet route table
"""

import logging
import os

import typer
from rich.console import Console
from rich.table import Table

from src.errors import AdapterError
from src.services.connection_types import ROUTES
from src.services.runtime_credentials import load_canada_tire_config, missing_env_vars

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="distributor",
    help="Signed-request gateway for the Canada Tire RESTlets",
    no_args_is_help=True,
)

console = Console()


def _mask(value: str) -> str:
    return "***" + value[-4:] if len(value) > 4 else "***"


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
    log_level: str = typer.Option("info", "--log-level", help="Log level"),
):
    """Run the gateway API with uvicorn."""
    import uvicorn

    # The app configures logging at import, so pass the level through env
    os.environ.setdefault("DISTRIBUTOR_LOG_LEVEL", log_level.upper())

    console.print(f"[bold]Starting distributor gateway on {host}:{port}[/bold]")
    missing = missing_env_vars()
    if missing:
        console.print(
            f"[yellow]Warning:[/yellow] missing configuration: {', '.join(missing)}"
        )
    uvicorn.run(
        "src.api.main:app",
        host=host,
        port=port,
        workers=1,
        log_level=log_level.lower(),
    )


@app.command("check-config")
def check_config():
    """Load the environment config and print a redacted summary."""
    try:
        config = load_canada_tire_config()
    except AdapterError as exc:
        variable = exc.details.get("variable", "")
        _log.debug("Config check failed: %s", exc)
        console.print(f"[red]Invalid configuration:[/red] {exc.message}")
        missing = [name for name in missing_env_vars() if name != variable]
        if missing:
            console.print(f"  also missing: {', '.join(missing)}")
        raise typer.Exit(1)

    console.print("[bold]Canada Tire:[/bold]")
    console.print(f"  base_url: {config.base_url}")
    console.print(f"  realm: {config.realm}")
    console.print(f"  consumer_key: {_mask(config.credentials.consumer_key)}")
    console.print(f"  token_id: {_mask(config.credentials.token_id)}")
    console.print(f"  customer_id: {config.customer_id}")
    console.print(f"  timeout_ms: {config.timeout_ms}")
    console.print("[green]Configuration OK.[/green]")


@app.command()
def routes():
    """Show the RESTlet script/deploy ids for each action."""
    table = Table(title="Canada Tire RESTlet routes")
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Script")
    table.add_column("Deploy")
    for action, route in ROUTES.items():
        table.add_row(action.value, route.script, route.deploy)
    console.print(table)


if __name__ == "__main__":
    app()
