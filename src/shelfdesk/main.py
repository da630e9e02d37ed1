"""Command line entry point for the shelfdesk admin console."""

from typing import Optional

import typer
from dotenv import load_dotenv

# Import logger setup first to ensure logging is configured
from shelfdesk.logger import get_logger, setup_logger
from shelfdesk.config import AppSettings
from shelfdesk.domain.errors import ConfigurationError
from shelfdesk.infrastructure.search import (
    SAMPLE_USERS,
    available_copy_search_provider,
    sample_copy_provider,
    sample_user_provider,
    user_search_provider,
)
from shelfdesk.presentation.tui import ShelfdeskApp

cli = typer.Typer(
    name="shelfdesk",
    help="Terminal administration console for the library-management backend",
    epilog="""
    Examples:
    $ shelfdesk run --offline
    $ shelfdesk run --api-url http://localhost:8080
    """,
    add_completion=False,
)


def build_app(settings: AppSettings, offline: bool = False) -> ShelfdeskApp:
    """Wire search providers and configuration into the console app."""
    if offline:
        user_provider = sample_user_provider()
        copy_provider = sample_copy_provider()
        users = SAMPLE_USERS
    else:
        user_provider = user_search_provider(
            settings.api_url, token=settings.api_token, size=settings.search_size, timeout=settings.timeout
        )
        copy_provider = available_copy_search_provider(
            settings.api_url, token=settings.api_token, size=settings.search_size, timeout=settings.timeout
        )
        users = []

    return ShelfdeskApp(
        user_provider=user_provider,
        copy_provider=copy_provider,
        users=users,
        select_config=settings.select_config(),
    )


@cli.command()
def run(
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Backend URL (default: SHELFDESK_API_URL)"),
    offline: bool = typer.Option(False, "--offline", help="Use built-in sample data instead of the backend"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Start the admin console."""
    load_dotenv()
    try:
        settings = AppSettings.from_env().with_overrides(api_url=api_url)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e)) from e

    setup_logger(log_level="DEBUG" if debug else settings.log_level)
    logger = get_logger("main")
    logger.info(f"Starting shelfdesk ({'offline' if offline else settings.api_url})")

    build_app(settings, offline=offline).run()


@cli.command()
def config():
    """Print the effective configuration."""
    load_dotenv()
    try:
        settings = AppSettings.from_env()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for key, value in settings.__dict__.items():
        if key == "api_token" and value:
            value = "***"
        typer.echo(f"{key}={value}")


if __name__ == "__main__":
    cli()
