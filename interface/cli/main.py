"""Entry point for the real-estate analysis chat CLI."""

import asyncio
import sys
from typing import Optional

import click

from app_factory import create_session_controller
from infrastructure.config import SystemConfig, get_config
from infrastructure.logging import get_logger, setup_logging

from .interface import RealEstateChatCLI

logger = get_logger(__name__)


def check_environment(config: SystemConfig) -> None:
    """Refuse to start with an analytics URL httpx cannot use."""
    base_url = config.service.base_url
    if not base_url.startswith(("http://", "https://")):
        click.echo(f"❌ ANALYTICS_API_URL must be an http(s) URL, got {base_url!r}")
        click.echo("📝 Set it in your environment or in a .env file in the project root.")
        sys.exit(1)


@click.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--api-url", envvar="ANALYTICS_API_URL", help="Base URL of the analytics API")
@click.option("--env", "environment", help="Configuration environment (development, production)")
def main(debug: bool, api_url: Optional[str], environment: Optional[str]) -> None:
    """Chat with your real-estate spreadsheet from the terminal."""
    config = get_config(environment)
    if api_url:
        config.service.base_url = api_url
    check_environment(config)
    setup_logging(config.logging_settings, debug=debug)

    logger.info(f"Starting CLI interface (debug={debug}, api={config.service.base_url})")
    controller = create_session_controller(config)
    cli = RealEstateChatCLI(controller)
    try:
        asyncio.run(cli.start_interactive_session())
    except KeyboardInterrupt:
        click.echo("\n👋 Goodbye!")


if __name__ == "__main__":
    main()
