"""
CLI for running the HR records API.
"""

import logging
import sys
from typing import Optional

import click
import uvicorn

from hr.config import Settings, setup_logging

logger = logging.getLogger(__name__)


@click.group()
def main() -> None:
    """HR records service."""


@main.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Interface to bind to",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (defaults to AMBULANCE_API_PORT or 8080)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Reload on code changes (defaults to on outside production)",
)
def serve(host: str, port: Optional[int], reload: Optional[bool]) -> None:
    """Run the HTTP API with uvicorn."""
    settings = Settings.from_env()
    setup_logging(settings)

    port = port or settings.port
    if reload is None:
        reload = not settings.is_production

    click.echo(
        f"Starting HR API on {host}:{port} "
        f"(environment={settings.environment}, "
        f"store={settings.store_backend})"
    )

    try:
        uvicorn.run(
            "hr.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=settings.effective_log_level.lower(),
        )
    except Exception as e:
        logger.error(f"Server failed: {str(e)}", exc_info=True)
        click.echo(f"Server failed: {str(e)}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
