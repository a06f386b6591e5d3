"""Mini README: Entry point CLI for launching the Finance Tracker API.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags. Unset options fall back to
environment-driven settings (``PORT`` defaults to 3000) and logging is
configured before the server starts.
"""

from __future__ import annotations

import typer
import uvicorn

from finance_tracker.configuration import get_settings
from finance_tracker.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch the Finance Tracker HTTP API.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.host
    effective_port = port or settings.port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the wildcard bind address, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Finance Tracker API on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "finance_tracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
